"""
Acceso a la base de datos Lake (fuente de verdad de empleados).
"""
from lakesync.infrastructure.database.employee_repository import (
    ACTIVE_EMPLOYEES_QUERY,
    SqlEmployeeRepository,
)
from lakesync.infrastructure.database.session import (
    create_lake_engine,
    dispose_lake_engine,
    get_lake_engine,
)

__all__ = [
    "ACTIVE_EMPLOYEES_QUERY",
    "SqlEmployeeRepository",
    "create_lake_engine",
    "dispose_lake_engine",
    "get_lake_engine",
]
