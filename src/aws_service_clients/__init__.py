"""Python clients for AWS IoT SiteWise, Alexa for Business, Service Catalog,
Voice ID and Amazon RDS."""

__version__ = "0.1.0"

from aws_service_clients.core import (  # noqa: E402
    AWSClient,
    AWSError,
    ClientConfiguration,
    CoreErrors,
    Outcome,
)
from aws_service_clients.services import (  # noqa: E402
    AlexaForBusinessClient,
    IoTSiteWiseClient,
    RDSClient,
    ServiceCatalogClient,
    VoiceIDClient,
    create_client,
)

__all__ = [
    "AWSClient",
    "AWSError",
    "AlexaForBusinessClient",
    "ClientConfiguration",
    "CoreErrors",
    "IoTSiteWiseClient",
    "Outcome",
    "RDSClient",
    "ServiceCatalogClient",
    "VoiceIDClient",
    "__version__",
    "create_client",
]
