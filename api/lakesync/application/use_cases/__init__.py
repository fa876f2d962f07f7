"""
Casos de uso de la aplicacion.
"""
from lakesync.application.use_cases.sync_use_cases import (
    RequesterSyncUseCases,
    build_reconciler,
)

__all__ = ["RequesterSyncUseCases", "build_reconciler"]
