"""
Excepciones relacionadas con la autorización del trigger HTTP.
"""
from lakesync.shared.exceptions.base import AppException


class UnauthorizedException(AppException):
    """Llamada al trigger de sync sin la llave correcta."""

    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "No autorizado"):
        super().__init__(message)
