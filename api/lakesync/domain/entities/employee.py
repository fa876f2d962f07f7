"""
Entidad de dominio: Employee (registro fuente del Lake).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Employee:
    """
    Empleado activo tal como lo entrega la base de datos (fuente de verdad).

    Solo lectura: el sync nunca escribe en el Lake.
    """

    employee_code: str
    email: str
    first_name: str
    last_name: str
    job_title: Optional[str] = None
    department_name: Optional[str] = None
    division_name: Optional[str] = None
    region_name: Optional[str] = None
    team_name: Optional[str] = None
    office_code: Optional[str] = None
    office_site_code: Optional[str] = None
    office_name: Optional[str] = None
    office_address: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Employee":
        """
        Construye un Employee desde una fila de la consulta de empleados activos.

        Las columnas obligatorias (EmployeeCode, Email, Fname, Lname) se toleran
        como NULL y se convierten a string vacio; un Email vacio simplemente
        queda fuera del matching.
        """
        return cls(
            employee_code=str(row.get("EmployeeCode") or ""),
            email=str(row.get("Email") or ""),
            first_name=str(row.get("Fname") or ""),
            last_name=str(row.get("Lname") or ""),
            job_title=_optional_str(row.get("JobTitle")),
            department_name=_optional_str(row.get("DepartmentName")),
            division_name=_optional_str(row.get("DivisionName")),
            region_name=_optional_str(row.get("RegionName")),
            team_name=_optional_str(row.get("TeamName")),
            office_code=_optional_str(row.get("OfficeCode")),
            office_site_code=_optional_str(row.get("OfficeSiteCode")),
            office_name=_optional_str(row.get("OfficeName")),
            office_address=_optional_str(row.get("OfficeAddress")),
        )
