"""
Reconciliador Lake -> FreshService.

Diseño (resumen):
- Lee una vez todos los empleados activos (fuente de verdad)
- Lee una vez todos los requesters de FreshService (todas las páginas)
- Cruza por email normalizado (trim + lower-case)
- Por cada match calcula los 5 custom fields deseados y decide si hay que escribir
- Escribe secuencialmente, con una pausa fija después de cada escritura

Estrategia de idempotencia:
- Si cualquiera de los 5 campos difiere (case-insensitive) se reenvía el set completo.
- Si nada difiere no se escribe: una segunda corrida sin cambios no actualiza nada.
- Campos custom que no administramos nunca se leen ni se borran.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Mapping, Optional

from loguru import logger

from lakesync.domain.entities.employee import Employee
from lakesync.domain.entities.requester import CustomFieldValue, Requester
from lakesync.domain.entities.sync_result import SyncResult, SyncResultBuilder
from lakesync.domain.repositories.employee_source import IEmployeeSource
from lakesync.domain.repositories.requester_directory import IRequesterDirectory
from lakesync.shared.exceptions.domain import SyncAbortedError
from lakesync.shared.utils.email_utils import normalize_email


def build_employee_lookup(employees: Iterable[Employee]) -> Dict[str, Employee]:
    """
    Construye el índice email normalizado -> empleado para una corrida.

    Reglas:
    - Empleados sin email quedan fuera.
    - Emails duplicados: gana el PRIMERO en el orden de la fuente; los siguientes
      se ignoran (se reporta el conteo en un warning).
    """
    lookup: Dict[str, Employee] = {}
    duplicates = 0

    for employee in employees:
        key = normalize_email(employee.email)
        if key is None:
            continue
        if key in lookup:
            duplicates += 1
            continue
        lookup[key] = employee

    if duplicates:
        logger.warning(
            f"{duplicates} empleado(s) con email duplicado ignorado(s); se conserva el primero"
        )
    return lookup


def build_custom_fields(employee: Employee) -> Dict[str, Optional[str]]:
    """Set deseado de custom fields (exactamente OWNED_CUSTOM_FIELDS)."""
    return {
        "employee_id": employee.employee_code,
        "division": employee.division_name,
        "team": employee.team_name,
        "region": employee.region_name,
        "location": employee.office_name,
    }


def render_field_value(value: CustomFieldValue) -> str:
    """Forma string para comparar. None (o ausente) se renderiza como ''."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_update_needed(
    existing: Optional[Mapping[str, CustomFieldValue]],
    desired: Mapping[str, CustomFieldValue],
) -> bool:
    """
    Decide si hay que escribir el set deseado en el requester.

    - Sin custom fields existentes: basta con que un valor deseado no sea None.
    - Campo ausente en el requester: solo cuenta si el valor deseado no es vacío.
    - Campo presente: cualquier diferencia case-insensitive cuenta.
    """
    if existing is None:
        return any(value is not None for value in desired.values())

    for name, desired_value in desired.items():
        desired_str = render_field_value(desired_value)

        if name not in existing:
            if desired_str.strip():
                return True
            continue

        if render_field_value(existing[name]).lower() != desired_str.lower():
            return True

    return False


class RequesterReconciler:
    """
    Orquestador de una corrida de sync.

    Cada llamada a run() es independiente: los sets leídos, el índice por email
    y el acumulador del resultado viven solo durante esa corrida.
    """

    def __init__(
        self,
        employee_source: IEmployeeSource,
        requester_directory: IRequesterDirectory,
        *,
        update_delay_s: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._employees = employee_source
        self._directory = requester_directory
        self._update_delay_s = update_delay_s
        self._sleep = sleep

    def run(self) -> SyncResult:
        """
        Ejecuta una corrida completa.

        Raises:
            SyncAbortedError: si falla la lectura de empleados o de requesters.
                `partial_result` trae lo acumulado más el mensaje del error.
        """
        result = SyncResultBuilder()
        logger.info("Iniciando sync de requesters FreshService")

        try:
            logger.info("Obteniendo empleados activos del Lake")
            employees = self._employees.fetch_active_employees()
            result.total_employees = len(employees)

            if not employees:
                logger.warning("No se encontraron empleados activos en el Lake")
                return result.build()

            logger.info("Obteniendo requesters de FreshService")
            requesters = self._directory.fetch_all_requesters()
            result.total_requesters = len(requesters)

            if not requesters:
                logger.warning("No se encontraron requesters en FreshService")
                return result.build()
        except Exception as e:
            result.errors.append(f"Error en proceso de sync: {e}")
            logger.error(f"Error durante el proceso de sync: {e}")
            raise SyncAbortedError(f"Sync abortado: {e}", partial_result=result.build()) from e

        lookup = build_employee_lookup(employees)
        for requester in requesters:
            self._reconcile_requester(requester, lookup, result)

        final = result.build()
        logger.info(f"Sync completado: {final.summary}")
        return final

    def _reconcile_requester(
        self,
        requester: Requester,
        lookup: Mapping[str, Employee],
        result: SyncResultBuilder,
    ) -> None:
        key = normalize_email(requester.primary_email)
        if key is None:
            return

        employee = lookup.get(key)
        if employee is None:
            # Requester sin empleado activo: no es match ni error
            return

        result.matched += 1
        desired = build_custom_fields(employee)

        if not is_update_needed(requester.custom_fields, desired):
            result.skipped += 1
            logger.debug(
                f"Omitiendo requester {requester.primary_email} (ID: {requester.id}) - sin cambios"
            )
            return

        logger.debug(f"Actualizando requester {requester.primary_email} (ID: {requester.id})")
        try:
            success = self._directory.update_requester_custom_fields(requester.id, desired)
        except Exception as e:
            logger.error(f"Error actualizando requester {requester.id}: {e}")
            result.record_failure(
                f"Error actualizando requester {requester.primary_email} (ID: {requester.id}): {e}"
            )
        else:
            if success:
                result.updated += 1
            else:
                result.record_failure(
                    f"No se pudo actualizar requester {requester.primary_email} (ID: {requester.id})"
                )
        finally:
            # Pausa fija después de cada escritura (rate limit)
            self._sleep(self._update_delay_s)
