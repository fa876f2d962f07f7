"""
Excepción base de la jerarquía de errores del servicio de sync Lake -> FreshService.

Cada subclase fija su `status_code` (con el que se expone al caller HTTP) y su
`error_code` como atributos de clase.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Excepción base de la aplicación.
    Todas las excepciones personalizadas deben heredar de esta clase.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        """
        Args:
            message: Mensaje de error descriptivo (se devuelve al caller)
            details: Contexto adicional (página, variable de configuración, etc.)
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Representación JSON usada por el handler global de FastAPI."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
