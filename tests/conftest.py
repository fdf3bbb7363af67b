from __future__ import annotations

import asyncio
import contextlib
import json
import threading

import pytest
from botocore.credentials import Credentials

from aws_service_clients import config
from aws_service_clients.core.client import ClientConfiguration
from aws_service_clients.core.endpoint import Endpoint, EndpointProvider
from aws_service_clients.core.errors import AWSError, CoreErrors
from aws_service_clients.core.http import HttpRequest, HttpResponse
from aws_service_clients.core.outcome import Outcome


class RecordingHttpClient:
    """Returns queued responses and records every request it was asked to send."""

    def __init__(self, *responses: HttpResponse | Exception) -> None:
        self._responses = list(responses)
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def queue(self, response: HttpResponse | Exception) -> None:
        with self._lock:
            self._responses.append(response)

    def send(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
            if not self._responses:
                return json_response({})
            response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


def json_response(
    body: dict[str, object], status_code: int = 200, headers: dict[str, str] | None = None
) -> HttpResponse:
    return HttpResponse(
        status_code=status_code,
        headers={"x-amzn-RequestId": "req-123", **(headers or {})},
        body=json.dumps(body).encode("utf-8"),
    )


def xml_response(body: str, status_code: int = 200) -> HttpResponse:
    return HttpResponse(status_code=status_code, headers={}, body=body.encode("utf-8"))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("AWS_REGION", "AWS_DEFAULT_REGION", "AWS_PROFILE", "AWS_ENDPOINT_URL"):
        monkeypatch.delenv(key, raising=False)
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials("AKIDEXAMPLE", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")


@pytest.fixture
def configuration() -> ClientConfiguration:
    return ClientConfiguration(region="us-east-1", max_retries=2, retry_scale_factor_ms=0)


@pytest.fixture
def http_client() -> RecordingHttpClient:
    return RecordingHttpClient()


@pytest.fixture(autouse=True)
def _close_default_event_loop() -> None:
    yield
    policy = asyncio.get_event_loop_policy()
    local = getattr(policy, "_local", None)
    loop = getattr(local, "_loop", None) if local is not None else None
    if loop is not None and not loop.is_running() and not loop.is_closed():
        with contextlib.suppress(Exception):
            loop.close()
    if loop is not None:
        with contextlib.suppress(Exception):
            policy.set_event_loop(None)


class StaticEndpointProvider(EndpointProvider):
    """Resolves every call to one URL (or one error) and records parameters."""

    def __init__(self, url: str, *, error: str | None = None, signing_name: str | None = None) -> None:
        super().__init__()
        self.url = url
        self.error = error
        self.signing_name = signing_name
        self.calls: list[dict[str, object]] = []

    def resolve_endpoint(self, parameters=None):
        self.calls.append(dict(parameters or {}))
        if self.error is not None:
            return Outcome.failure(
                AWSError.from_core(CoreErrors.ENDPOINT_RESOLUTION_FAILURE, self.error)
            )
        region = (parameters or {}).get("Region") or self.built_in_parameters.get("Region")
        return Outcome.success(
            Endpoint(url=self.url, signing_region=region, signing_name=self.signing_name)
        )
