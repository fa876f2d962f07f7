"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import SyncDetailsDTO, SyncErrorDTO, SyncResponseDTO

__all__ = [
    "SyncDetailsDTO",
    "SyncErrorDTO",
    "SyncResponseDTO",
]
