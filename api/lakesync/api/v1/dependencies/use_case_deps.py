"""
Dependencias para inyeccion de casos de uso.
"""
from lakesync.application.use_cases.sync_use_cases import RequesterSyncUseCases


def get_requester_sync_use_cases() -> RequesterSyncUseCases:
    """
    Dependencia para obtener los casos de uso de sync de requesters.
    
    Returns:
        RequesterSyncUseCases: Instancia armada desde la configuracion global
    """
    return RequesterSyncUseCases()
