"""
Dependencias de seguridad del trigger HTTP.

Si SYNC_API_KEY esta configurada, el caller debe enviarla en el header
`x-functions-key` o en el query param `code`.
"""
import secrets
from typing import Optional

from fastapi import Header, Query

from lakesync.core.config import settings
from lakesync.shared.exceptions.auth import UnauthorizedException


def require_sync_key(
    x_functions_key: Optional[str] = Header(default=None),
    code: Optional[str] = Query(default=None),
) -> None:
    """
    Valida la llave del trigger de sync.
    
    Raises:
        UnauthorizedException: Si la llave falta o no coincide
    """
    expected = settings.SYNC_API_KEY
    if not expected:
        return

    provided = x_functions_key or code
    # compare_digest sobre str solo acepta ASCII
    if not provided or not secrets.compare_digest(
        provided.encode("utf-8"), expected.encode("utf-8")
    ):
        raise UnauthorizedException("Llave de sync invalida o ausente")
