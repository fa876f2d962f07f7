"""
Repositorio de empleados activos (Lake, solo lectura).

La consulta es fija: empleados activos con su departamento, asignacion de
trabajo primaria y oficina. El texto de la consulta se puede inyectar para
tests (SQLite no entiende los nombres de tres partes de SQL Server).
"""
from __future__ import annotations

from typing import List

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from lakesync.domain.entities.employee import Employee
from lakesync.domain.repositories.employee_source import IEmployeeSource
from lakesync.shared.exceptions.domain import SourceDataError


ACTIVE_EMPLOYEES_QUERY = """
    select
        emps.EmployeeCode,
        emps.Email,
        CASE WHEN emps.CommonName IS NOT NULL THEN emps.CommonName ELSE emps.FirstName END AS Fname,
        CASE WHEN emps.PreferredLastName IS NOT NULL THEN emps.PreferredLastName ELSE emps.LastName END AS Lname,
        wa.JobTitle,
        depts.DeptName DepartmentName,
        ofc.DivisionName,
        ofc.RegionName,
        ofc.TeamName,
        ofc.OfficeCode,
        ofc.SiteCode OfficeSiteCode,
        ofc.OfficeName,
        ofc.Address1 + ' ' + ofc.Address2 + ', ' + ofc.City + ', ' + ofc.StateAbbrev + ' ' + ofc.PostalCode OfficeAddress
    from Lake.sd.Employees emps
        left join sd.Departments depts
            on depts.DeptCode = emps.PrimaryDeptCode
        inner join sd.WorkAssignments wa
            on wa.EmployeeCode = emps.EmployeeCode
           and wa.IsPrimary = 1
        inner join Lake.extenders.Offices ofc
            on ofc.OfficeCode = wa.OfficeCode
    where emps.IsActive = 1
    order by emps.FirstName
"""


class SqlEmployeeRepository(IEmployeeSource):
    """Lee el set completo de empleados activos en una sola consulta."""

    def __init__(self, engine: Engine, *, query: str = ACTIVE_EMPLOYEES_QUERY) -> None:
        self._engine = engine
        self._query = query

    def fetch_active_employees(self) -> List[Employee]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text(self._query)).mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"Error obteniendo empleados activos del Lake: {e.__class__.__name__}")
            raise SourceDataError(f"No se pudo obtener empleados activos del Lake: {e}") from e

        employees = [Employee.from_row(row) for row in rows]
        logger.info(f"Obtenidos {len(employees)} empleados activos del Lake")
        return employees
