"""Base class shared by every service client.

Each operation is available in three forms: a blocking call returning an
:class:`Outcome`, a ``*_callable`` form returning a future, and an ``*_async``
form invoking a handler on the executor thread. Subclasses only declare
their signing name, protocol and operation table; the per-operation methods
are generated from the table.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import time
import uuid
from collections.abc import Callable, Mapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, ClassVar
from urllib.parse import quote

import httpx
from botocore.credentials import Credentials
from botocore.exceptions import NoCredentialsError, ParamValidationError
from pydantic import BaseModel, ConfigDict, Field

from aws_service_clients.config import Settings, load_settings
from aws_service_clients.core.credentials import (
    CredentialsProvider,
    DefaultCredentialsProviderChain,
    StaticCredentialsProvider,
)
from aws_service_clients.core.endpoint import (
    DefaultEndpointProvider,
    Endpoint,
    EndpointParameters,
    EndpointProvider,
)
from aws_service_clients.core.errors import AWSError, CoreErrors
from aws_service_clients.core.http import HttpClient, HttpRequest, HttpxClient
from aws_service_clients.core.operation import (
    OperationSpec,
    ServiceRequest,
    operation_table,
    render_template,
)
from aws_service_clients.core.outcome import Outcome
from aws_service_clients.core.protocols import ServiceResult, WireProtocol
from aws_service_clients.core.retry import RetryStrategy
from aws_service_clients.core.signer import SigV4Signer

ResponseReceivedHandler = Callable[["AWSClient", ServiceRequest, Outcome[ServiceResult], Any], None]


class ClientConfiguration(BaseModel):
    """Per-client settings; ``from_settings`` fills gaps from the environment."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    region: str | None = None
    profile: str | None = None
    endpoint_override: str | None = None
    use_fips: bool = False
    use_dualstack: bool = False
    timeout_seconds: float = Field(default=30.0, gt=0)
    connect_timeout_seconds: float = Field(default=10.0, gt=0)
    verify_ssl: bool = True
    max_retries: int = Field(default=2, ge=0)
    retry_scale_factor_ms: int = Field(default=25, ge=0)
    max_workers: int = Field(default=8, ge=1)
    executor: Executor | None = None

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, **overrides: Any
    ) -> ClientConfiguration:
        settings = settings or load_settings()
        values: dict[str, Any] = {
            "region": settings.aws.default_region,
            "profile": settings.aws.default_profile,
            "endpoint_override": settings.aws.endpoint_url,
            "use_fips": settings.aws.use_fips,
            "use_dualstack": settings.aws.use_dualstack,
            "timeout_seconds": settings.execution.timeout_seconds,
            "connect_timeout_seconds": settings.execution.connect_timeout_seconds,
            "verify_ssl": settings.execution.verify_ssl,
            "max_retries": settings.execution.max_retries,
            "retry_scale_factor_ms": settings.execution.retry_scale_factor_ms,
            "max_workers": settings.execution.max_workers,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


@dataclass(frozen=True)
class AsyncCallerContext:
    """Opaque value handed back to ``*_async`` handlers."""

    uuid: str = field(default_factory=lambda: str(uuid.uuid4()))
    data: Mapping[str, Any] = field(default_factory=dict)


def _quote_label(value: str, greedy: bool) -> str:
    return quote(value, safe="/" if greedy else "")


def _core_failure(
    error_type: CoreErrors, message: str, *, exception_name: str | None = None
) -> Outcome[ServiceResult]:
    return Outcome.failure(
        AWSError.from_core(error_type, message, exception_name=exception_name)
    )


class AWSClient:
    """Resolve, sign, send and parse for one AWS service."""

    SERVICE_NAME: ClassVar[str] = ""
    ENDPOINT_PREFIX: ClassVar[str | None] = None
    ENDPOINT_RULESET: ClassVar[str | None] = None
    SERVICE_CLIENT_NAME: ClassVar[str] = "AWSClient"
    PROTOCOL: ClassVar[WireProtocol | None] = None
    OPERATIONS: ClassVar[tuple[OperationSpec, ...]] = ()

    _operation_table: ClassVar[dict[str, OperationSpec]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._operation_table = operation_table(cls.OPERATIONS)
        for spec in cls.OPERATIONS:
            _install_operation(cls, spec)

    def __init__(
        self,
        *,
        configuration: ClientConfiguration | None = None,
        credentials: Credentials | None = None,
        credentials_provider: CredentialsProvider | None = None,
        endpoint_provider: EndpointProvider | None = None,
        http_client: HttpClient | None = None,
        retry_strategy: RetryStrategy | None = None,
        service_name: str | None = None,
        protocol: WireProtocol | None = None,
        operations: tuple[OperationSpec, ...] | list[OperationSpec] | None = None,
    ) -> None:
        self._configuration = configuration or ClientConfiguration.from_settings()
        self.service_name = service_name or self.SERVICE_NAME
        if not self.service_name:
            raise ValueError("A signing service name is required")
        self._logger = logging.getLogger(f"{__name__}.{self.SERVICE_CLIENT_NAME}")

        protocol = protocol or self.PROTOCOL
        if protocol is None:
            raise ValueError(f"{type(self).__name__} has no wire protocol")
        self._protocol = protocol
        self._operations = (
            operation_table(operations) if operations is not None else type(self)._operation_table
        )

        if credentials is not None:
            provider: CredentialsProvider = StaticCredentialsProvider(credentials)
        elif credentials_provider is not None:
            provider = credentials_provider
        else:
            provider = DefaultCredentialsProviderChain(profile=self._configuration.profile)
        self._signer = SigV4Signer(provider, self.service_name, self._configuration.region)

        self._endpoint_provider: EndpointProvider | None = endpoint_provider or DefaultEndpointProvider(
            self.ENDPOINT_PREFIX or self.service_name,
            signing_name=self.service_name,
            ruleset_name=self.ENDPOINT_RULESET,
        )
        self._endpoint_provider.init_built_in_parameters(self._configuration)

        self._owns_http_client = http_client is None
        self._http_client: HttpClient = http_client or HttpxClient(
            timeout_seconds=self._configuration.timeout_seconds,
            connect_timeout_seconds=self._configuration.connect_timeout_seconds,
            verify=self._configuration.verify_ssl,
        )
        self._retry_strategy = retry_strategy or RetryStrategy(
            self._configuration.max_retries, self._configuration.retry_scale_factor_ms
        )

        self._owns_executor = self._configuration.executor is None
        self._executor: Executor = self._configuration.executor or ThreadPoolExecutor(
            max_workers=self._configuration.max_workers,
            thread_name_prefix=self.SERVICE_CLIENT_NAME,
        )

    # -- configuration -------------------------------------------------

    @property
    def configuration(self) -> ClientConfiguration:
        return self._configuration

    @property
    def region(self) -> str | None:
        return self._configuration.region

    @property
    def signer(self) -> SigV4Signer:
        return self._signer

    @property
    def protocol(self) -> WireProtocol:
        return self._protocol

    @property
    def executor(self) -> Executor:
        return self._executor

    @property
    def endpoint_provider(self) -> EndpointProvider | None:
        return self._endpoint_provider

    @endpoint_provider.setter
    def endpoint_provider(self, provider: EndpointProvider | None) -> None:
        if provider is not None:
            provider.init_built_in_parameters(self._configuration)
        self._endpoint_provider = provider

    @property
    def operation_names(self) -> tuple[str, ...]:
        return tuple(self._operations)

    def operation(self, operation_name: str) -> OperationSpec:
        try:
            return self._operations[operation_name]
        except KeyError:
            raise KeyError(
                f"{self.SERVICE_CLIENT_NAME} has no operation named '{operation_name}'"
            ) from None

    def override_endpoint(self, endpoint: str) -> None:
        if self._endpoint_provider is None:
            raise RuntimeError(f"{self.SERVICE_CLIENT_NAME}: endpoint provider is not initialized")
        self._endpoint_provider.override_endpoint(endpoint)

    # -- synchronous path ----------------------------------------------

    def invoke(self, operation_name: str, request: ServiceRequest | None = None) -> Outcome[ServiceResult]:
        spec = self.operation(operation_name)
        request = request if request is not None else {}
        self._logger.debug("Calling %s.%s", self.SERVICE_CLIENT_NAME, spec.name)

        if self._endpoint_provider is None:
            self._logger.error("%s: endpoint provider is not initialized", spec.name)
            return _core_failure(
                CoreErrors.ENDPOINT_RESOLUTION_FAILURE,
                f"Unable to call {spec.name}: endpoint provider is not initialized",
            )

        for member in spec.missing_required(request):
            self._logger.error("%s: Required field: %s, is not set", spec.name, member)
            return _core_failure(
                CoreErrors.MISSING_PARAMETER,
                f"Missing required field [{member}]",
                exception_name="MISSING_PARAMETER",
            )

        prepared = self._prepare_request(spec, request)
        if not prepared.is_success:
            return Outcome.failure(prepared.error)

        resolved = self._endpoint_provider.resolve_endpoint(
            self._endpoint_context_params(spec, request)
        )
        if not resolved.is_success:
            self._logger.error(
                "%s: endpoint resolution failed: %s", spec.name, resolved.error.message
            )
            return Outcome.failure(resolved.error)
        endpoint = resolved.result

        if self._protocol.rest_style:
            error = self._apply_rest_endpoint(spec, request, endpoint)
            if error is not None:
                self._logger.error("%s: %s", spec.name, error.message)
                return Outcome.failure(error)

        return self.make_request(spec, prepared.result, endpoint)

    def _endpoint_context_params(
        self, spec: OperationSpec, request: ServiceRequest
    ) -> EndpointParameters:
        return {}

    def _prepare_request(
        self, spec: OperationSpec, request: ServiceRequest
    ) -> Outcome[ServiceRequest]:
        """Hook for operations that rewrite the request before it is sent."""
        return Outcome.success(request)

    def _apply_rest_endpoint(
        self, spec: OperationSpec, request: ServiceRequest, endpoint: Endpoint
    ) -> AWSError | None:
        if spec.host_prefix:
            prefix = render_template(spec.host_prefix, request, lambda value, _: value)
            error = endpoint.add_prefix_if_missing(prefix)
            if error is not None:
                return error
        endpoint.add_path(render_template(spec.uri.split("?", 1)[0], request, _quote_label))
        return None

    def make_request(
        self, spec: OperationSpec, request: ServiceRequest, endpoint: Endpoint
    ) -> Outcome[ServiceResult]:
        """Serialize, sign and send ``request`` to ``endpoint`` with retries."""
        try:
            http_request = self._protocol.serialize(spec, request, endpoint)
        except ParamValidationError as exc:
            self._logger.error("%s: %s", spec.name, exc)
            return _core_failure(CoreErrors.VALIDATION, str(exc))
        attempted_retries = 0
        while True:
            outcome = self._attempt(spec, http_request, endpoint)
            if outcome.is_success:
                return outcome
            error = outcome.error
            if not self._retry_strategy.should_retry(error, attempted_retries):
                return outcome
            delay = self._retry_strategy.calculate_delay_before_next_retry(
                error, attempted_retries
            )
            attempted_retries += 1
            self._logger.warning(
                "%s failed with %s (%s); retry %d/%d in %.3fs",
                spec.name,
                error.exception_name,
                error.message,
                attempted_retries,
                self._retry_strategy.max_retries,
                delay,
            )
            time.sleep(delay)

    def _attempt(
        self, spec: OperationSpec, http_request: HttpRequest, endpoint: Endpoint
    ) -> Outcome[ServiceResult]:
        try:
            signed = self._signer.sign(
                http_request,
                region=endpoint.signing_region,
                service_name=endpoint.signing_name,
            )
        except NoCredentialsError as exc:
            self._logger.error("%s: %s", spec.name, exc)
            return _core_failure(CoreErrors.MISSING_AUTHENTICATION_TOKEN, str(exc))

        try:
            response = self._http_client.send(signed)
        except httpx.HTTPError as exc:
            return _core_failure(
                CoreErrors.NETWORK_CONNECTION,
                f"{type(exc).__name__}: {exc}",
            )
        return self._protocol.parse(spec, response)

    # -- executor-backed forms ------------------------------------------

    def invoke_callable(
        self, operation_name: str, request: ServiceRequest | None = None
    ) -> Future[Outcome[ServiceResult]]:
        self.operation(operation_name)
        snapshot = copy.deepcopy(dict(request or {}))
        return self._executor.submit(self.invoke, operation_name, snapshot)

    def invoke_async(
        self,
        operation_name: str,
        request: ServiceRequest | None,
        handler: ResponseReceivedHandler,
        context: Any = None,
    ) -> Future[None]:
        self.operation(operation_name)
        snapshot = copy.deepcopy(dict(request or {}))

        def _run() -> None:
            outcome = self.invoke(operation_name, snapshot)
            try:
                handler(self, request, outcome, context)
            except Exception:
                self._logger.exception("Response handler for %s raised", operation_name)
                raise

        return self._executor.submit(_run)

    async def ainvoke(
        self, operation_name: str, request: ServiceRequest | None = None
    ) -> Outcome[ServiceResult]:
        return await asyncio.to_thread(self.invoke, operation_name, request)

    # -- lifecycle ------------------------------------------------------

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> AWSClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(region={self.region!r}, operations={len(self._operations)})"


def _install_operation(cls: type[AWSClient], spec: OperationSpec) -> None:
    operation_name = spec.name
    method_name = spec.method_name

    def call(self: AWSClient, request: ServiceRequest | None = None) -> Outcome[ServiceResult]:
        return self.invoke(operation_name, request)

    def call_callable(
        self: AWSClient, request: ServiceRequest | None = None
    ) -> Future[Outcome[ServiceResult]]:
        return self.invoke_callable(operation_name, request)

    def call_async(
        self: AWSClient,
        request: ServiceRequest | None,
        handler: ResponseReceivedHandler,
        context: Any = None,
    ) -> Future[None]:
        return self.invoke_async(operation_name, request, handler, context)

    for suffix, function, doc in (
        ("", call, f"Call ``{operation_name}`` and return its outcome."),
        ("_callable", call_callable, f"Submit ``{operation_name}``; the future yields the outcome."),
        ("_async", call_async, f"Submit ``{operation_name}`` and pass the outcome to ``handler``."),
    ):
        attribute = method_name + suffix
        if attribute in cls.__dict__:
            continue
        function.__name__ = attribute
        function.__qualname__ = f"{cls.__name__}.{attribute}"
        function.__doc__ = doc
        setattr(cls, attribute, function)
