"""
DTOs del trigger de sincronizacion Lake -> FreshService.

Contrato JSON:
- Exito: success=true, timestamp, summary, details (conteos) y errors.
  Las llaves de details van en camelCase (totalEmployees, totalRequesters, ...),
  igual que el contrato que ya consumen los callers del trigger.
- Fallo: success=false, timestamp y error (mensaje).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lakesync.domain.entities.sync_result import SyncResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyncDetailsDTO(BaseModel):
    """Conteos estructurados de una corrida."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_employees: int = Field(..., description="Empleados activos leidos del Lake")
    total_requesters: int = Field(..., description="Requesters leidos de FreshService")
    matched: int = Field(..., description="Requesters con empleado activo por email")
    updated: int = Field(..., description="Requesters actualizados")
    skipped: int = Field(..., description="Requesters con match pero sin cambios")
    failed: int = Field(..., description="Actualizaciones fallidas")


class SyncResponseDTO(BaseModel):
    """Respuesta de una corrida exitosa (puede traer fallos por requester)."""

    success: bool = True
    timestamp: datetime = Field(default_factory=_utc_now)
    summary: str
    details: SyncDetailsDTO
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResponseDTO":
        return cls(
            summary=result.summary,
            details=SyncDetailsDTO(**result.to_dict()),
            errors=list(result.errors),
        )


class SyncErrorDTO(BaseModel):
    """Respuesta de una corrida fallida."""

    success: bool = False
    timestamp: datetime = Field(default_factory=_utc_now)
    error: str
