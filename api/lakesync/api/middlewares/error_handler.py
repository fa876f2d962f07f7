"""
Middleware de errores no manejados.

Las AppException ya las resuelve el handler global de FastAPI; aquí solo llega
lo inesperado. Se responde con el mismo sobre de fallo del trigger de sync
(success=false, timestamp, error) sin exponer el detalle interno.
"""
import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from lakesync.application.dto.sync_dto import SyncErrorDTO


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convierte excepciones no manejadas en un 500 con el sobre de fallo."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            return await call_next(request)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.opt(exception=exc).error(
                f"Error no manejado en {request.method} {request.url.path} "
                f"tras {elapsed_ms:.0f} ms: {exc.__class__.__name__}"
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=SyncErrorDTO(error="Error interno del servidor").model_dump(mode="json"),
            )
