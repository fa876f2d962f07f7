"""
Servicios de aplicacion.

Contiene la logica de reconciliacion reutilizable por los distintos
triggers (HTTP, scheduler, CLI).
"""
from lakesync.application.services.requester_reconciler import (
    RequesterReconciler,
    build_custom_fields,
    build_employee_lookup,
    is_update_needed,
    render_field_value,
)

__all__ = [
    "RequesterReconciler",
    "build_custom_fields",
    "build_employee_lookup",
    "is_update_needed",
    "render_field_value",
]
