"""
Interfaz del directorio de requesters (FreshService).
Define el contrato que consume el reconciliador.
"""
from abc import ABC, abstractmethod
from typing import List, Mapping

from lakesync.domain.entities.requester import CustomFieldValue, Requester


class IRequesterDirectory(ABC):
    """
    Directorio destino: lectura completa paginada y escritura de custom fields.
    """
    
    @abstractmethod
    def fetch_all_requesters(self) -> List[Requester]:
        """
        Obtiene todos los requesters, recorriendo todas las paginas.
        
        Raises:
            TargetRetrievalError: Si alguna pagina falla. No se retorna un
                set parcial.
        """
        pass
    
    @abstractmethod
    def update_requester_custom_fields(
        self,
        requester_id: int,
        custom_fields: Mapping[str, CustomFieldValue],
    ) -> bool:
        """
        Sobrescribe los custom fields indicados en un requester.
        
        Los campos no incluidos quedan intactos en FreshService; los valores
        None se omiten del payload.
        
        Returns:
            bool: True solo si FreshService confirmo la escritura
        """
        pass
