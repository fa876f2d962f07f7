"""
Entidades del dominio.
"""
from lakesync.domain.entities.employee import Employee
from lakesync.domain.entities.requester import (
    OWNED_CUSTOM_FIELDS,
    CustomFieldValue,
    Requester,
)
from lakesync.domain.entities.sync_result import SyncResult, SyncResultBuilder

__all__ = [
    "Employee",
    "Requester",
    "CustomFieldValue",
    "OWNED_CUSTOM_FIELDS",
    "SyncResult",
    "SyncResultBuilder",
]
