"""
Resultado de una corrida de sync.

El resultado se acumula en un SyncResultBuilder (mutable, propiedad exclusiva
de una corrida) y se entrega al caller como SyncResult inmutable.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class SyncResult:
    total_employees: int = 0
    total_requesters: int = 0
    matched: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: Tuple[str, ...] = ()

    @property
    def summary(self) -> str:
        return (
            f"Procesados: {self.total_employees} empleados, {self.total_requesters} requesters | "
            f"Matched: {self.matched} | Actualizados: {self.updated} | "
            f"Omitidos: {self.skipped} | Fallidos: {self.failed}"
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_employees": self.total_employees,
            "total_requesters": self.total_requesters,
            "matched": self.matched,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
        }


@dataclass
class SyncResultBuilder:
    """Acumulador mutable de una corrida. No compartir entre corridas."""

    total_employees: int = 0
    total_requesters: int = 0
    matched: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    def record_failure(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    def build(self) -> SyncResult:
        return SyncResult(
            total_employees=self.total_employees,
            total_requesters=self.total_requesters,
            matched=self.matched,
            updated=self.updated,
            skipped=self.skipped,
            failed=self.failed,
            errors=tuple(self.errors),
        )
