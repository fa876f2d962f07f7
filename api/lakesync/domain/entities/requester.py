"""
Entidad de dominio: Requester (registro destino en FreshService).

`custom_fields` distingue dos casos:
- None: el payload no trae objeto custom_fields (el requester no tiene ninguno).
- dict: mapeo nombre -> valor escalar (str, int, float, bool) o None.
  Incluye campos que este sistema NO administra; esos nunca se tocan.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

CustomFieldValue = Optional[Union[str, int, float, bool]]


# Campos custom que este sistema escribe. Cualquier otro se preserva.
OWNED_CUSTOM_FIELDS: tuple[str, ...] = (
    "employee_id",
    "division",
    "team",
    "region",
    "location",
)


@dataclass(frozen=True)
class Requester:
    """Requester de FreshService, minimo necesario para el sync."""

    id: int
    primary_email: str
    first_name: str = ""
    last_name: str = ""
    job_title: Optional[str] = None
    department_names: List[str] = field(default_factory=list)
    custom_fields: Optional[Dict[str, CustomFieldValue]] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Requester":
        """
        Construye un Requester desde el JSON de /api/v2/requesters.

        Raises:
            ValueError: si el payload no trae un `id` numerico.
        """
        raw_id = payload.get("id")
        if raw_id is None:
            raise ValueError("FreshService devolvió un requester sin 'id'")

        raw_custom = payload.get("custom_fields")
        custom_fields = dict(raw_custom) if isinstance(raw_custom, Mapping) else None

        return cls(
            id=int(raw_id),
            primary_email=str(payload.get("primary_email") or ""),
            first_name=str(payload.get("first_name") or ""),
            last_name=str(payload.get("last_name") or ""),
            job_title=payload.get("job_title"),
            department_names=list(payload.get("department_names") or []),
            custom_fields=custom_fields,
        )
