"""
Integración con FreshService (directorio de requesters).

El sync es one-way: Lake -> FreshService. Este paquete solo expone lectura
completa de requesters y escritura de los custom fields que administramos.
"""
from lakesync.infrastructure.external.freshservice.freshservice_client import (
    FreshServiceClient,
    FreshServiceCredentials,
    build_update_payload,
)

__all__ = ["FreshServiceClient", "FreshServiceCredentials", "build_update_payload"]
