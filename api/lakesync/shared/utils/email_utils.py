"""
Utilidades para emails usados como llave de cruce entre el Lake y FreshService.
"""
from typing import Optional


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Normaliza un email para usarlo como llave de join (trim + lower-case).

    Args:
        email: Email crudo (puede ser None o solo espacios)

    Returns:
        El email normalizado, o None si viene vacío. Un email vacío nunca
        participa en el matching.
    """
    if email is None:
        return None
    normalized = str(email).strip().lower()
    return normalized or None
