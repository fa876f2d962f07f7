"""
Punto de entrada principal de la aplicación FastAPI.
Configura la aplicación, middlewares, rutas y el ciclo de vida (scheduler).
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lakesync.core.config import settings
from lakesync.core.events import lifespan
from lakesync.core.scheduler import SYNC_JOB_ID
from lakesync.api.v1.router import api_router
from lakesync.api.middlewares.error_handler import ErrorHandlerMiddleware
from lakesync.application.use_cases.sync_use_cases import RequesterSyncUseCases
from lakesync.shared.exceptions.base import AppException


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Sync one-way de datos organizacionales del Lake hacia requesters de FreshService",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    application.state.scheduler = None
    application.state.log_sink_id = None

    # Middleware personalizado para manejo de errores
    application.add_middleware(ErrorHandlerMiddleware)

    # Incluir routers de la API
    application.include_router(api_router, prefix="/api")

    # Manejador global de excepciones personalizadas
    @application.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict()
        )

    # Health check endpoint
    @application.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Endpoint para verificar el estado de la aplicación y del scheduler."""
        scheduler = request.app.state.scheduler
        job = scheduler.get_job(SYNC_JOB_ID) if scheduler is not None else None
        next_run = job.next_run_time if job is not None else None
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "scheduler_running": bool(scheduler is not None and scheduler.running),
            "next_sync_at": next_run.isoformat() if next_run else None,
            "sync_in_progress": RequesterSyncUseCases.is_running(),
        }

    return application


# Crear instancia de la aplicación
app = create_application()


if __name__ == "__main__":
    import uvicorn
    from loguru import logger

    # Determinar la URL base de acceso
    if settings.HOST == "0.0.0.0":
        access_host = "localhost"
    else:
        access_host = settings.HOST

    base_url = f"http://{access_host}:{settings.PORT}"

    logger.info("=" * 70)
    logger.info("URLS DISPONIBLES:")
    logger.info("=" * 70)
    logger.info(f"  Sync:        POST {base_url}/api/v1/sync-freshservice-requesters")
    logger.info(f"  Swagger UI:  {base_url}/docs")
    logger.info(f"  Health:      {base_url}/health")
    logger.info("=" * 70)

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
