"""Runtime shared by the service clients."""

from aws_service_clients.core.client import AsyncCallerContext, AWSClient, ClientConfiguration
from aws_service_clients.core.credentials import (
    DefaultCredentialsProviderChain,
    StaticCredentialsProvider,
)
from aws_service_clients.core.endpoint import DefaultEndpointProvider, Endpoint, EndpointProvider
from aws_service_clients.core.errors import AWSError, CoreErrors
from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.outcome import Outcome

__all__ = [
    "AWSClient",
    "AWSError",
    "AsyncCallerContext",
    "ClientConfiguration",
    "CoreErrors",
    "DefaultCredentialsProviderChain",
    "DefaultEndpointProvider",
    "Endpoint",
    "EndpointProvider",
    "OperationSpec",
    "Outcome",
    "StaticCredentialsProvider",
]
