"""
Configuración de fixtures para pytest.
"""
from typing import Any, Callable, Dict, Optional

import pytest

from lakesync.domain.entities.employee import Employee
from lakesync.domain.entities.requester import Requester


@pytest.fixture
def make_employee() -> Callable[..., Employee]:
    """Factory de empleados con datos organizacionales completos por defecto."""

    def _make(
        code: str = "E001",
        email: str = "jane.doe@co.com",
        **overrides: Any,
    ) -> Employee:
        data: Dict[str, Any] = {
            "employee_code": code,
            "email": email,
            "first_name": "Jane",
            "last_name": "Doe",
            "job_title": "Analyst",
            "department_name": "Accounting",
            "division_name": "Finance",
            "region_name": "West",
            "team_name": "Payables",
            "office_code": "SEA",
            "office_site_code": "SEA-01",
            "office_name": "Seattle",
            "office_address": "1 Main St, Seattle, WA 98101",
        }
        data.update(overrides)
        return Employee(**data)

    return _make


@pytest.fixture
def make_requester() -> Callable[..., Requester]:
    """Factory de requesters FreshService."""

    def _make(
        requester_id: int = 1,
        email: str = "jane.doe@co.com",
        custom_fields: Optional[Dict[str, Any]] = None,
    ) -> Requester:
        return Requester(
            id=requester_id,
            primary_email=email,
            first_name="Jane",
            last_name="Doe",
            custom_fields=custom_fields,
        )

    return _make


@pytest.fixture
def synced_fields() -> Dict[str, Any]:
    """Custom fields que ya coinciden con el empleado por defecto de make_employee."""
    return {
        "employee_id": "E001",
        "division": "Finance",
        "team": "Payables",
        "region": "West",
        "location": "Seattle",
    }


@pytest.fixture
def no_sleep() -> Callable[[float], None]:
    """Reemplazo de time.sleep que registra las pausas sin esperar."""
    pauses = []

    def _sleep(seconds: float) -> None:
        pauses.append(seconds)

    _sleep.pauses = pauses
    return _sleep
