"""Service client registry."""

from __future__ import annotations

from typing import Any

from aws_service_clients.core.client import AWSClient
from aws_service_clients.services.alexaforbusiness import AlexaForBusinessClient
from aws_service_clients.services.iotsitewise import IoTSiteWiseClient
from aws_service_clients.services.rds import RDSClient
from aws_service_clients.services.servicecatalog import ServiceCatalogClient
from aws_service_clients.services.voiceid import VoiceIDClient

SERVICE_CLIENTS: dict[str, type[AWSClient]] = {
    "alexaforbusiness": AlexaForBusinessClient,
    "iotsitewise": IoTSiteWiseClient,
    "rds": RDSClient,
    "servicecatalog": ServiceCatalogClient,
    "voice-id": VoiceIDClient,
}

_ALIASES = {
    "a4b": "alexaforbusiness",
    "voiceid": "voice-id",
}


def normalize_service_name(service: str) -> str:
    key = service.strip().lower()
    return _ALIASES.get(key, key)


def client_class(service: str) -> type[AWSClient]:
    key = normalize_service_name(service)
    try:
        return SERVICE_CLIENTS[key]
    except KeyError:
        known = ", ".join(sorted(SERVICE_CLIENTS))
        raise ValueError(f"Unknown service '{service}'. Known services: {known}") from None


def create_client(service: str, **kwargs: Any) -> AWSClient:
    """Instantiate the client registered for ``service``."""
    return client_class(service)(**kwargs)


__all__ = [
    "AlexaForBusinessClient",
    "IoTSiteWiseClient",
    "RDSClient",
    "SERVICE_CLIENTS",
    "ServiceCatalogClient",
    "VoiceIDClient",
    "client_class",
    "create_client",
    "normalize_service_name",
]
