"""Cached service client factory."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable

from botocore.credentials import Credentials

from aws_service_clients.config import Settings, load_settings
from aws_service_clients.core.client import AWSClient, ClientConfiguration
from aws_service_clients.core.operation import ServiceRequest
from aws_service_clients.core.outcome import Outcome
from aws_service_clients.core.protocols import ServiceResult
from aws_service_clients.services import create_client, normalize_service_name

logger = logging.getLogger(__name__)

ClientCacheKey = tuple[str, ...]

_CLIENT_CACHE: OrderedDict[ClientCacheKey, tuple[AWSClient, float]] = OrderedDict()
_CLIENT_CACHE_LOCK = threading.Lock()
_CLIENT_TTL_SECONDS = 3600  # 1 hour
_CLIENT_CACHE_MAX_SIZE = 256


def _get_cached_client(
    key: ClientCacheKey,
    build_client: Callable[[], AWSClient],
) -> AWSClient:
    now = time.monotonic()
    stale: list[AWSClient] = []
    with _CLIENT_CACHE_LOCK:
        cached = _CLIENT_CACHE.get(key)
        if cached is not None:
            client, created_at = cached
            if now - created_at < _CLIENT_TTL_SECONDS:
                _CLIENT_CACHE.move_to_end(key)
                return client
            del _CLIENT_CACHE[key]
            stale.append(client)
            logger.debug("Expired cached client %s", key[:3])
        client = build_client()
        _CLIENT_CACHE[key] = (client, now)
        while len(_CLIENT_CACHE) > _CLIENT_CACHE_MAX_SIZE:
            evicted_key, (evicted, _) = _CLIENT_CACHE.popitem(last=False)
            stale.append(evicted)
            logger.debug("Evicted cached client %s", evicted_key[:3])
    for old_client in stale:
        old_client.close()
    return client


def clear_client_cache() -> None:
    """Drop every cached client and release its executor and connections."""
    with _CLIENT_CACHE_LOCK:
        cached = list(_CLIENT_CACHE.values())
        _CLIENT_CACHE.clear()
    for client, _ in cached:
        client.close()


def _credential_fingerprint(credentials: Credentials) -> str:
    material = "\x1f".join(
        (credentials.access_key, credentials.secret_key, credentials.token or "")
    )
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def _cache_key(
    service: str,
    region: str | None,
    profile: str | None,
    credentials: Credentials | None,
    settings: Settings,
) -> ClientCacheKey:
    resolved_region = region or settings.aws.default_region or ""
    if credentials is not None:
        # Only the fingerprint hash, no plaintext access key in the cache key.
        return ("credentials", service, resolved_region, _credential_fingerprint(credentials))
    return ("profile", service, resolved_region, profile or settings.aws.default_profile or "")


def get_client(
    service: str,
    region: str | None = None,
    profile: str | None = None,
    credentials: Credentials | None = None,
) -> AWSClient:
    settings = load_settings()
    service = normalize_service_name(service)
    key = _cache_key(service, region, profile, credentials, settings)

    def _build() -> AWSClient:
        configuration = ClientConfiguration.from_settings(
            settings, region=region, profile=profile
        )
        logger.debug("Creating %s client for region %s", service, configuration.region)
        return create_client(service, configuration=configuration, credentials=credentials)

    return _get_cached_client(key, _build)


def call_operation(
    client: AWSClient,
    operation_name: str,
    request: ServiceRequest | None = None,
) -> Outcome[ServiceResult]:
    return client.invoke(operation_name, request)


async def get_client_async(
    service: str,
    region: str | None = None,
    profile: str | None = None,
    credentials: Credentials | None = None,
) -> AWSClient:
    return await asyncio.to_thread(get_client, service, region, profile, credentials)


async def call_operation_async(
    client: AWSClient,
    operation_name: str,
    request: ServiceRequest | None = None,
) -> Outcome[ServiceResult]:
    return await asyncio.to_thread(call_operation, client, operation_name, request)
