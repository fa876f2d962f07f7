"""
Excepciones del pipeline de sincronización Lake -> FreshService.

Taxonomía:
- Fatales (abortan la corrida): ConfigurationError, SourceDataError,
  TargetRetrievalError. El reconciliador las envuelve en SyncAbortedError.
- Concurrencia: SyncAlreadyRunningError cuando ya hay una corrida en curso.

Los fallos por requester NO son excepciones: se registran en el SyncResult.
"""
from typing import Any, Optional

from lakesync.shared.exceptions.base import AppException


class ConfigurationError(AppException):
    """Falta (o es inválida) una variable de configuración obligatoria."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, setting_name: str, message: Optional[str] = None):
        super().__init__(
            message or f"Falta variable de configuración obligatoria: {setting_name}",
            details={"setting": setting_name},
        )


class SourceDataError(AppException):
    """No se pudo leer el set de empleados activos desde la base de datos."""

    status_code = 502
    error_code = "SOURCE_DATA_ERROR"


class TargetRetrievalError(AppException):
    """Falló la obtención de requesters desde FreshService (cualquier página)."""

    status_code = 502
    error_code = "TARGET_RETRIEVAL_ERROR"

    def __init__(self, message: str, page: Optional[int] = None, status_code_remote: Optional[int] = None):
        details = {}
        if page is not None:
            details["page"] = page
        if status_code_remote is not None:
            details["remote_status"] = status_code_remote
        super().__init__(message, details=details)
        self.page = page


class SyncAbortedError(AppException):
    """
    La corrida de sync falló de forma fatal.

    `partial_result` contiene lo acumulado hasta el fallo (incluye el mensaje
    de error final). No es confiable: el caller debe tratar la corrida como fallida.
    """

    error_code = "SYNC_ABORTED"

    def __init__(self, message: str, partial_result: Any = None):
        super().__init__(message)
        self.partial_result = partial_result


class SyncAlreadyRunningError(AppException):
    """Ya existe una corrida de sync en este proceso."""

    status_code = 409
    error_code = "SYNC_ALREADY_RUNNING"

    def __init__(self):
        super().__init__("Ya hay una sincronizacion en curso")
