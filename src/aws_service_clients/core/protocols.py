"""Wire protocols: request serialization and response parsing.

Requests are mappings keyed by API member names. Results are the decoded
response document plus a ``ResponseMetadata`` entry. JSON values are passed
through as decoded; Query requests and responses follow the botocore model.
"""

from __future__ import annotations

import functools
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode, urlsplit

import botocore.session
from botocore.model import OperationModel, ServiceModel
from botocore.parsers import ResponseParserError, create_parser
from botocore.serialize import create_serializer
from botocore.utils import percent_encode_sequence

from aws_service_clients.core.endpoint import Endpoint
from aws_service_clients.core.errors import AWSError
from aws_service_clients.core.http import HttpRequest, HttpResponse
from aws_service_clients.core.operation import OperationSpec, ServiceRequest, lower_camel
from aws_service_clients.core.outcome import Outcome
from aws_service_clients.utils.serialization import json_default, scalar_to_text

logger = logging.getLogger(__name__)

ServiceResult = dict[str, Any]

_QUERY_METHODS = frozenset({"GET", "DELETE", "HEAD"})
_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


def _encode_query(pairs: list[tuple[str, str]]) -> str:
    return urlencode(pairs, quote_via=quote, safe="-_.~")


def _url_with_root_path(url: str) -> str:
    return url if urlsplit(url).path else url + "/"


def _request_id(response: HttpResponse) -> str | None:
    return response.header("x-amzn-requestid") or response.header("x-amz-request-id")


def _response_metadata(response: HttpResponse, request_id: str | None) -> dict[str, Any]:
    return {
        "RequestId": request_id,
        "HTTPStatusCode": response.status_code,
        "HTTPHeaders": dict(response.headers),
    }


def _sanitize_error_code(raw: str) -> str:
    """``aws.protocoltests#FooError:http://...`` -> ``FooError``."""
    code = raw.split(":", 1)[0]
    return code.rsplit("#", 1)[-1].strip()


class WireProtocol(ABC):
    """Serializer/parser pair for one AWS protocol."""

    name: str = ""
    rest_style: bool = False

    @abstractmethod
    def serialize(
        self, spec: OperationSpec, request: ServiceRequest, endpoint: Endpoint
    ) -> HttpRequest:
        raise NotImplementedError

    @abstractmethod
    def parse(self, spec: OperationSpec, response: HttpResponse) -> Outcome[ServiceResult]:
        raise NotImplementedError


class _JsonResponseMixin:
    def _parse_json(self, response: HttpResponse) -> Outcome[ServiceResult]:
        request_id = _request_id(response)
        if response.status_code >= 300:
            return Outcome.failure(self._parse_json_error(response, request_id))
        result: ServiceResult = {}
        if response.body.strip():
            try:
                decoded = json.loads(response.body)
            except ValueError:
                return Outcome.failure(
                    AWSError.from_service(
                        "SerializationException",
                        "Response body is not valid JSON",
                        response_code=response.status_code,
                        request_id=request_id,
                        headers=response.headers,
                    )
                )
            if isinstance(decoded, dict):
                result = decoded
        result["ResponseMetadata"] = _response_metadata(response, request_id)
        return Outcome.success(result)

    @staticmethod
    def _parse_json_error(response: HttpResponse, request_id: str | None) -> AWSError:
        body: dict[str, Any] = {}
        if response.body.strip():
            try:
                decoded = json.loads(response.body)
            except ValueError:
                decoded = None
            if isinstance(decoded, dict):
                body = decoded

        raw_code = (
            response.header("x-amzn-errortype")
            or body.get("__type")
            or body.get("code")
            or body.get("Code")
            or ""
        )
        code = _sanitize_error_code(str(raw_code)) or "Unknown"
        message = (
            body.get("message")
            or body.get("Message")
            or body.get("errorMessage")
            or response.header("x-amzn-error-message")
            or f"HTTP {response.status_code}"
        )
        return AWSError.from_service(
            code,
            str(message),
            response_code=response.status_code,
            request_id=request_id,
            headers=response.headers,
        )


class RestJsonProtocol(_JsonResponseMixin, WireProtocol):
    """``restJson1``: HTTP method and URI per operation, JSON bodies.

    Top-level members are sent under their lower-camel wire names; nested
    values are sent as given. URI labels are applied by the client before
    serialization.
    """

    name = "rest-json"
    rest_style = True

    def _query_members(self, spec: OperationSpec, request: ServiceRequest) -> dict[str, str]:
        if spec.query is not None:
            return dict(spec.query)
        bound = set(spec.uri_labels) | set(spec.host_labels) | set(spec.headers)
        if spec.http_method.upper() in _QUERY_METHODS:
            return {member: lower_camel(member) for member in request if member not in bound}
        return {member: lower_camel(member) for member in spec.required if member not in bound}

    def serialize(
        self, spec: OperationSpec, request: ServiceRequest, endpoint: Endpoint
    ) -> HttpRequest:
        query_members = self._query_members(spec, request)
        bound = (
            set(spec.uri_labels) | set(spec.host_labels) | set(spec.headers) | set(query_members)
        )

        pairs: list[tuple[str, str]] = []
        static_query = spec.uri.split("?", 1)[1] if "?" in spec.uri else ""
        for item in filter(None, static_query.split("&")):
            key, _, value = item.partition("=")
            pairs.append((key, value))
        for member, wire_name in query_members.items():
            value = request.get(member)
            if value is None:
                continue
            if isinstance(value, Mapping):
                pairs.extend((str(k), scalar_to_text(v)) for k, v in value.items())
            elif isinstance(value, (list, tuple, set, frozenset)):
                pairs.extend((wire_name, scalar_to_text(item)) for item in value)
            else:
                pairs.append((wire_name, scalar_to_text(value)))

        headers: dict[str, str] = {}
        for member, header_name in spec.headers.items():
            value = request.get(member)
            if value is not None:
                headers[header_name] = scalar_to_text(value)

        body_members = {
            lower_camel(member): value
            for member, value in request.items()
            if member not in bound and value is not None
        }
        body = b""
        if body_members:
            body = json.dumps(body_members, default=json_default).encode("utf-8")
            headers["Content-Type"] = "application/json"

        url = endpoint.url
        if pairs:
            url = f"{url}?{_encode_query(pairs)}"
        return HttpRequest(method=spec.http_method.upper(), url=url, headers=headers, body=body)

    def parse(self, spec: OperationSpec, response: HttpResponse) -> Outcome[ServiceResult]:
        return self._parse_json(response)


class JsonProtocol(_JsonResponseMixin, WireProtocol):
    """``awsJson1_0`` / ``awsJson1_1``: every call is a POST to ``/``."""

    name = "json"

    def __init__(self, target_prefix: str, json_version: str = "1.1") -> None:
        self.target_prefix = target_prefix
        self.json_version = json_version

    def serialize(
        self, spec: OperationSpec, request: ServiceRequest, endpoint: Endpoint
    ) -> HttpRequest:
        payload = {member: value for member, value in request.items() if value is not None}
        return HttpRequest(
            method="POST",
            url=_url_with_root_path(endpoint.url),
            headers={
                "X-Amz-Target": f"{self.target_prefix}.{spec.name}",
                "Content-Type": f"application/x-amz-json-{self.json_version}",
            },
            body=json.dumps(payload, default=json_default).encode("utf-8"),
        )

    def parse(self, spec: OperationSpec, response: HttpResponse) -> Outcome[ServiceResult]:
        return self._parse_json(response)


@functools.lru_cache(maxsize=None)
def load_service_model(service_name: str, api_version: str | None = None) -> ServiceModel:
    """botocore service model (with SDK extras) for ``service_name``."""
    return botocore.session.get_session().get_service_model(service_name, api_version=api_version)


class QueryProtocol(WireProtocol):
    """``awsQuery``: form-encoded ``Action``/``Version`` requests, XML responses.

    Both directions are driven by the botocore service model, so list entry
    names (``Tags.Tag.1``, ``ValuesToAdd.AttributeValue.1``) and result types
    follow the operation's shapes. Requests are validated against the input
    shape before they are serialized.
    """

    name = "query"

    def __init__(self, service_name: str, api_version: str) -> None:
        self.service_name = service_name
        self.api_version = api_version
        self._serializer = create_serializer("query", include_validation=True)
        self._parser = create_parser("query")

    @property
    def service_model(self) -> ServiceModel:
        return load_service_model(self.service_name, self.api_version)

    def operation_model(self, spec: OperationSpec) -> OperationModel:
        return self.service_model.operation_model(spec.name)

    def action_parameters(self, spec: OperationSpec, request: ServiceRequest) -> dict[str, Any]:
        """Form fields for ``request``, ``Action`` and ``Version`` first.

        Raises:
            ParamValidationError: ``request`` does not match the input shape.
        """
        parameters = {member: value for member, value in request.items() if value is not None}
        serialized = self._serializer.serialize_to_request(parameters, self.operation_model(spec))
        return serialized["body"]

    def serialize(
        self, spec: OperationSpec, request: ServiceRequest, endpoint: Endpoint
    ) -> HttpRequest:
        return HttpRequest(
            method=spec.http_method.upper(),
            url=_url_with_root_path(endpoint.url),
            headers={"Content-Type": _FORM_CONTENT_TYPE},
            body=percent_encode_sequence(self.action_parameters(spec, request)).encode("utf-8"),
        )

    def parse(self, spec: OperationSpec, response: HttpResponse) -> Outcome[ServiceResult]:
        raw = {"body": response.body, "headers": response.headers, "status_code": response.status_code}
        try:
            parsed = self._parser.parse(raw, self.operation_model(spec).output_shape)
        except (ResponseParserError, KeyError) as exc:
            logger.debug("Unparseable XML response for %s: %s", spec.name, exc)
            if response.status_code >= 300:
                return Outcome.failure(
                    AWSError.from_service(
                        "Unknown",
                        f"HTTP {response.status_code}",
                        response_code=response.status_code,
                        request_id=_request_id(response),
                        headers=response.headers,
                    )
                )
            return Outcome.failure(
                AWSError.from_service(
                    "SerializationException",
                    f"Response body for {spec.name} is not a valid XML document",
                    response_code=response.status_code,
                    request_id=_request_id(response),
                    headers=response.headers,
                )
            )

        metadata = parsed.setdefault("ResponseMetadata", {})
        metadata["RequestId"] = metadata.get("RequestId") or _request_id(response)
        if response.status_code >= 300:
            error = parsed.get("Error", {})
            return Outcome.failure(
                AWSError.from_service(
                    error.get("Code") or "Unknown",
                    error.get("Message") or f"HTTP {response.status_code}",
                    response_code=response.status_code,
                    request_id=metadata["RequestId"],
                    headers=response.headers,
                )
            )
        return Outcome.success(parsed)
