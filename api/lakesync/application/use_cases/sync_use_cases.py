"""
Casos de uso para la sincronización Lake -> FreshService.

Los tres triggers (HTTP, scheduler, CLI) pasan por aquí:
- arma el reconciliador desde la configuración
- garantiza una sola corrida a la vez por proceso
- el trigger programado loguea el resultado y relanza errores fatales
"""
from __future__ import annotations

import threading
from typing import Callable, Optional

from loguru import logger

from lakesync.application.services.requester_reconciler import RequesterReconciler
from lakesync.core.config import Settings, settings
from lakesync.domain.entities.sync_result import SyncResult
from lakesync.infrastructure.database.employee_repository import SqlEmployeeRepository
from lakesync.infrastructure.database.session import get_lake_engine
from lakesync.infrastructure.external.freshservice.freshservice_client import (
    FreshServiceClient,
    FreshServiceCredentials,
)
from lakesync.shared.exceptions.domain import SyncAlreadyRunningError


# Cantidad de errores por requester que el trigger programado escribe en el log
MAX_LOGGED_ERRORS = 10


def build_reconciler(config: Settings = settings) -> RequesterReconciler:
    """
    Constructor "oficial" del reconciliador leyendo la configuración.

    Raises:
        ConfigurationError: si falta el connection string o las credenciales
            de FreshService.
    """
    employee_source = SqlEmployeeRepository(get_lake_engine(config))
    directory = FreshServiceClient(
        FreshServiceCredentials(
            base_url=config.FRESHSERVICE_BASE_URL,
            api_key=config.FRESHSERVICE_API_KEY,
        ),
        page_size=config.FRESHSERVICE_PAGE_SIZE,
        page_delay_s=config.FRESHSERVICE_PAGE_DELAY_S,
        timeout_s=config.FRESHSERVICE_TIMEOUT_S,
        max_retries=config.FRESHSERVICE_MAX_RETRIES,
    )
    return RequesterReconciler(
        employee_source,
        directory,
        update_delay_s=config.FRESHSERVICE_UPDATE_DELAY_S,
    )


class RequesterSyncUseCases:
    """
    Punto de entrada de aplicación para correr el sync.

    El lock es de clase: protege a todas las instancias del proceso, ya que
    HTTP y scheduler crean instancias distintas.
    """

    _run_lock = threading.Lock()

    def __init__(
        self,
        reconciler_factory: Optional[Callable[[], RequesterReconciler]] = None,
    ) -> None:
        self._reconciler_factory = reconciler_factory or build_reconciler

    @classmethod
    def is_running(cls) -> bool:
        return cls._run_lock.locked()

    def execute_sync(self) -> SyncResult:
        """
        Ejecuta una corrida completa (bloqueante).

        Raises:
            SyncAlreadyRunningError: si ya hay una corrida en este proceso.
            SyncAbortedError: si falla la lectura de empleados o requesters.
            ConfigurationError: si la configuración está incompleta.
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Sync solicitado mientras otra corrida sigue en curso")
            raise SyncAlreadyRunningError()

        try:
            reconciler = self._reconciler_factory()
            return reconciler.run()
        finally:
            self._run_lock.release()

    def run_scheduled_sync(self) -> None:
        """
        Corrida disparada por el scheduler.

        Loguea el resumen y hasta MAX_LOGGED_ERRORS errores. Los errores
        fatales se relanzan para que el scheduler los registre como fallo.
        """
        logger.info("Sync programado iniciado")

        try:
            result = self.execute_sync()
        except Exception as e:
            logger.error(f"Sync programado fallo: {e}")
            raise

        logger.info(f"Sync programado completado: {result.summary}")

        if result.errors:
            logger.warning(f"Sync completado con {len(result.errors)} error(es)")
            for error in result.errors[:MAX_LOGGED_ERRORS]:
                logger.warning(f"Error: {error}")
