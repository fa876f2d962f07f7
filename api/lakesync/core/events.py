"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI
from loguru import logger

from lakesync.core.config import settings
from lakesync.core.scheduler import SYNC_JOB_ID, create_scheduler
from lakesync.infrastructure.database.session import dispose_lake_engine


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.
    
    Args:
        app: Instancia de FastAPI
        
    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa logging y scheduler al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")
            
            # Configurar logging adicional
            app.state.log_sink_id = logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL
            )
            
            # Validar configuracion critica
            _validate_config()
            
            if settings.SYNC_SCHEDULER_ENABLED:
                scheduler = create_scheduler(settings.SYNC_SCHEDULE)
                scheduler.start()
                app.state.scheduler = scheduler
                job = scheduler.get_job(SYNC_JOB_ID)
                logger.info(
                    f"Sync programado con '{settings.SYNC_SCHEDULE}' (UTC). "
                    f"Proxima ejecucion: {job.next_run_time if job else 'n/a'}"
                )
            else:
                logger.info("Scheduler de sync deshabilitado (SYNC_SCHEDULER_ENABLED=false)")
            
            logger.success("Aplicacion iniciada correctamente")
            
        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise
    
    return startup


def _validate_config() -> None:
    """Valida que la configuracion critica este presente (solo advierte)."""
    warnings = []
    
    if not settings.SQL_CONNECTION_STRING:
        warnings.append("SQL_CONNECTION_STRING no configurada - el sync fallara")
    if not settings.FRESHSERVICE_BASE_URL:
        warnings.append("FRESHSERVICE_BASE_URL no configurada - el sync fallara")
    if not settings.FRESHSERVICE_API_KEY:
        warnings.append("FRESHSERVICE_API_KEY no configurada - el sync fallara")
    if not settings.SYNC_API_KEY:
        warnings.append("SYNC_API_KEY no configurada - el trigger HTTP no requiere llave")
    
    # Mostrar advertencias
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.
    
    Args:
        app: Instancia de FastAPI
        
    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")
        
        scheduler = getattr(app.state, "scheduler", None)
        if scheduler is not None:
            scheduler.shutdown(wait=False)
            app.state.scheduler = None
            logger.info("Scheduler detenido")
        
        dispose_lake_engine()
        logger.info("Conexiones del Lake cerradas")
        
        logger.success("Aplicacion cerrada correctamente")

        # Quitar el sink de archivo agregado en startup
        sink_id = getattr(app.state, "log_sink_id", None)
        if sink_id is not None:
            logger.remove(sink_id)
            app.state.log_sink_id = None

    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan de FastAPI que encadena startup y shutdown."""
    await startup_handler(app)()
    try:
        yield
    finally:
        await shutdown_handler(app)()
