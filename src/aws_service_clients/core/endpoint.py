"""Endpoint resolution for AWS service clients.

A provider turns endpoint parameters (region, FIPS/dual-stack flags, an
optional custom endpoint) into an :class:`Endpoint`. Built-in parameters come
from the client configuration; per-call parameters override them. The
default provider evaluates botocore's endpoint rulesets and partition data.
"""

from __future__ import annotations

import functools
import logging
import re
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlsplit, urlunsplit

from botocore.endpoint_provider import EndpointProvider as RuleSetEndpointProvider
from botocore.endpoint_provider import RuleSetStandardLibrary
from botocore.exceptions import (
    DataNotFoundError,
    EndpointProviderError,
    EndpointResolutionError,
    InvalidRegionError,
)
from botocore.loaders import Loader, create_loader
from botocore.utils import validate_region_name

from aws_service_clients.core.errors import AWSError, CoreErrors
from aws_service_clients.core.outcome import Outcome

if TYPE_CHECKING:
    from aws_service_clients.core.client import ClientConfiguration

logger = logging.getLogger(__name__)

EndpointParameters = Mapping[str, object]
ResolveEndpointOutcome = Outcome["Endpoint"]

_HOST_LABEL_RE = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")
_RULESET_PARAMETERS = frozenset({"Region", "UseFIPS", "UseDualStack", "Endpoint"})


def is_valid_host_label(value: str, *, allow_subdomains: bool = False) -> bool:
    labels = value.split(".") if allow_subdomains else [value]
    return all(_HOST_LABEL_RE.match(label) for label in labels)


@dataclass
class Endpoint:
    """Resolved endpoint, mutable only through the helpers below."""

    url: str
    signing_region: str | None = None
    signing_name: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def host(self) -> str:
        return urlsplit(self.url).netloc

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    def add_prefix_if_missing(self, prefix: str) -> AWSError | None:
        """Prepend ``prefix`` to the host unless the host already starts with it."""
        parts = urlsplit(self.url)
        if parts.hostname and parts.hostname.startswith(prefix):
            return None
        if not prefix.endswith(".") or not is_valid_host_label(
            prefix[:-1], allow_subdomains=True
        ):
            return AWSError.from_core(
                CoreErrors.ENDPOINT_RESOLUTION_FAILURE,
                f"Host prefix '{prefix}' is not a valid host label",
            )
        self.url = urlunsplit(parts._replace(netloc=prefix + parts.netloc))
        return None

    def add_path(self, path: str) -> None:
        """Append an already encoded path below the endpoint's base path."""
        parts = urlsplit(self.url)
        base = parts.path.rstrip("/")
        suffix = path if path.startswith("/") else "/" + path
        self.url = urlunsplit(parts._replace(path=base + suffix))

    def add_path_segment(self, value: str) -> None:
        self.add_path(quote(value, safe=""))

    def set_query_string(self, query: str) -> None:
        parts = urlsplit(self.url)
        self.url = urlunsplit(parts._replace(query=query.lstrip("?")))


@functools.lru_cache(maxsize=1)
def _loader() -> Loader:
    return create_loader()


@functools.lru_cache(maxsize=1)
def partitions_data() -> dict[str, Any]:
    """Partition table shipped with botocore (``partitions.json``)."""
    return _loader().load_data("partitions")


def partition_for_region(region: str | None) -> dict[str, Any]:
    """Partition outputs (``name``, ``dnsSuffix``, ...) for ``region``."""
    return RuleSetStandardLibrary(partitions_data()).aws_partition(region)


@functools.lru_cache(maxsize=None)
def ruleset_provider(service_name: str) -> RuleSetEndpointProvider | None:
    """botocore ruleset resolver for ``service_name``, or ``None`` if botocore has no ruleset."""
    try:
        ruleset = _loader().load_service_model(service_name, "endpoint-rule-set-1")
    except DataNotFoundError:
        logger.debug("No endpoint ruleset for %s; using partition defaults", service_name)
        return None
    return RuleSetEndpointProvider(ruleset_data=ruleset, partition_data=partitions_data())


class EndpointProvider:
    """Base provider holding the built-in parameters of one client."""

    def __init__(self) -> None:
        self._built_ins: dict[str, object] = {}
        self._lock = threading.Lock()

    def init_built_in_parameters(self, configuration: ClientConfiguration) -> None:
        with self._lock:
            self._built_ins["Region"] = configuration.region
            self._built_ins["UseFIPS"] = configuration.use_fips
            self._built_ins["UseDualStack"] = configuration.use_dualstack
            if configuration.endpoint_override:
                self._built_ins["Endpoint"] = configuration.endpoint_override

    def override_endpoint(self, endpoint: str) -> None:
        with self._lock:
            self._built_ins["Endpoint"] = endpoint

    @property
    def built_in_parameters(self) -> dict[str, object]:
        with self._lock:
            return dict(self._built_ins)

    def resolve_endpoint(self, parameters: EndpointParameters | None = None) -> ResolveEndpointOutcome:
        raise NotImplementedError


class DefaultEndpointProvider(EndpointProvider):
    """Endpoint rules from botocore's ``endpoint-rule-set-1`` data.

    ``ruleset_name`` is the botocore data name of the service when it differs
    from ``endpoint_prefix`` (``voice-id``). Services botocore no longer ships
    resolve with the standard ``{prefix}[-fips].{region}.{dnsSuffix}`` rule
    over botocore's partition table.
    """

    def __init__(
        self,
        endpoint_prefix: str,
        signing_name: str | None = None,
        ruleset_name: str | None = None,
    ) -> None:
        super().__init__()
        self._endpoint_prefix = endpoint_prefix
        self._signing_name = signing_name or endpoint_prefix
        self._ruleset_name = ruleset_name or endpoint_prefix

    def resolve_endpoint(self, parameters: EndpointParameters | None = None) -> ResolveEndpointOutcome:
        params = self.built_in_parameters
        params.update({k: v for k, v in (parameters or {}).items() if v is not None})
        params = {k: v for k, v in params.items() if k in _RULESET_PARAMETERS and v is not None}

        region = params.get("Region")
        try:
            if region is not None:
                validate_region_name(str(region))
            provider = ruleset_provider(self._ruleset_name)
            if provider is None:
                url, properties, headers = self._partition_endpoint(params), {}, {}
            else:
                url, properties, headers = provider.resolve_endpoint(**params)
        except (EndpointProviderError, InvalidRegionError) as exc:
            return _resolution_error(str(exc))

        signing_region = str(region) if region else None
        signing_name = self._signing_name
        for scheme in properties.get("authSchemes", ()):
            if scheme.get("name", "").startswith("sigv4"):
                signing_region = scheme.get("signingRegion", signing_region)
                signing_name = scheme.get("signingName", signing_name)
                break

        return Outcome.success(
            Endpoint(
                url=url.rstrip("/"),
                signing_region=signing_region,
                signing_name=signing_name,
                headers={name: ",".join(values) for name, values in headers.items()},
            )
        )

    def _partition_endpoint(self, params: Mapping[str, object]) -> str:
        use_fips = bool(params.get("UseFIPS"))
        use_dualstack = bool(params.get("UseDualStack"))
        custom = params.get("Endpoint")
        if custom:
            if use_fips:
                raise EndpointResolutionError(
                    msg="Invalid Configuration: FIPS and custom endpoint are not supported"
                )
            if use_dualstack:
                raise EndpointResolutionError(
                    msg="Invalid Configuration: Dualstack and custom endpoint are not supported"
                )
            return str(custom)

        region = params.get("Region")
        if not region:
            raise EndpointResolutionError(msg="Invalid Configuration: Missing Region")
        partition = partition_for_region(str(region))
        if use_fips and not partition.get("supportsFIPS"):
            raise EndpointResolutionError(msg="FIPS is enabled but this partition does not support FIPS")
        if use_dualstack and not partition.get("supportsDualStack"):
            raise EndpointResolutionError(
                msg="DualStack is enabled but this partition does not support DualStack"
            )
        host_label = f"{self._endpoint_prefix}-fips" if use_fips else self._endpoint_prefix
        suffix = partition["dualStackDnsSuffix"] if use_dualstack else partition["dnsSuffix"]
        return f"https://{host_label}.{region}.{suffix}"


def _resolution_error(message: str) -> ResolveEndpointOutcome:
    return Outcome.failure(AWSError.from_core(CoreErrors.ENDPOINT_RESOLUTION_FAILURE, message))
