"""
Interfaz de la fuente de empleados.
Define el contrato que debe cumplir cualquier implementación (SQL, fake en tests).
"""
from abc import ABC, abstractmethod
from typing import List

from lakesync.domain.entities.employee import Employee


class IEmployeeSource(ABC):
    """
    Fuente de verdad de empleados activos.
    """
    
    @abstractmethod
    def fetch_active_employees(self) -> List[Employee]:
        """
        Obtiene todos los empleados activos.
        
        Returns:
            List[Employee]: Empleados activos (puede estar vacia)
            
        Raises:
            SourceDataError: Si la consulta o la conexion fallan. No hay
                resultados parciales.
        """
        pass
