"""
Endpoints para sincronizacion Lake -> FreshService.
Permite disparar una corrida on-demand (ademas del scheduler).
"""
import asyncio

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from lakesync.api.v1.dependencies.security_deps import require_sync_key
from lakesync.api.v1.dependencies.use_case_deps import get_requester_sync_use_cases
from lakesync.application.dto.sync_dto import SyncErrorDTO, SyncResponseDTO
from lakesync.application.use_cases.sync_use_cases import RequesterSyncUseCases
from lakesync.shared.exceptions.domain import SyncAlreadyRunningError


router = APIRouter(tags=["Sync"])


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=SyncErrorDTO(error=message).model_dump(mode="json"),
    )


@router.post(
    "/sync-freshservice-requesters",
    response_model=SyncResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar custom fields de requesters FreshService desde el Lake",
    responses={
        status.HTTP_409_CONFLICT: {"model": SyncErrorDTO},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": SyncErrorDTO},
    },
    dependencies=[Depends(require_sync_key)],
)
async def sync_freshservice_requesters(
    use_cases: RequesterSyncUseCases = Depends(get_requester_sync_use_cases),
):
    """
    Ejecuta una corrida completa de sync y retorna el resumen.
    
    - 200: la corrida termino (puede traer fallos por requester en `errors`)
    - 409: ya hay otra corrida en curso en este proceso
    - 500: fallo fatal (Lake o FreshService no disponibles, configuracion incompleta)
    """
    logger.info("Trigger HTTP de sync recibido")
    
    try:
        # Ejecutar sync en thread separado para no bloquear el event loop
        result = await asyncio.to_thread(use_cases.execute_sync)
    except SyncAlreadyRunningError as e:
        return _error_response(status.HTTP_409_CONFLICT, e.message)
    except Exception as e:
        logger.error(f"Sync HTTP fallo: {e}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    
    logger.info(f"Sync HTTP completado: {result.summary}")
    return SyncResponseDTO.from_result(result)
