"""Derive operation tables and protocols from a parsed Smithy model."""

from __future__ import annotations

import logging

from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.protocols import (
    JsonProtocol,
    QueryProtocol,
    RestJsonProtocol,
    WireProtocol,
)
from aws_service_clients.smithy.parser import (
    OperationShape,
    ServiceShape,
    SmithyModel,
    StructureShape,
)

logger = logging.getLogger(__name__)


def _service(model: SmithyModel, service_shape_id: str) -> ServiceShape:
    shape = model.get_shape(service_shape_id)
    if not isinstance(shape, ServiceShape):
        raise ValueError(f"Service shape not found: {service_shape_id}")
    return shape


def operation_spec_from_shape(model: SmithyModel, operation: OperationShape) -> OperationSpec:
    http = operation.http or {}
    method = http.get("method")
    uri = http.get("uri")

    required: list[str] = []
    query: dict[str, str] = {}
    headers: dict[str, str] = {}
    input_shape = model.get_shape(operation.input) if operation.input else None
    if isinstance(input_shape, StructureShape):
        for name, member in input_shape.members.items():
            query_name = member.http_query
            header_name = member.http_header
            if query_name is not None:
                query[name] = query_name
            if header_name is not None:
                headers[name] = header_name
            bound = member.http_label or member.host_label or query_name or header_name
            if member.required and bound:
                required.append(name)

    return OperationSpec(
        name=operation.name,
        http_method=method if isinstance(method, str) else "POST",
        uri=uri if isinstance(uri, str) else "/",
        host_prefix=operation.host_prefix,
        required=tuple(required),
        query=query if operation.http is not None else None,
        headers=headers,
    )


def operation_specs_from_model(model: SmithyModel, service_shape_id: str) -> list[OperationSpec]:
    """One :class:`OperationSpec` per operation bound to the service, by name."""
    service = _service(model, service_shape_id)
    specs: list[OperationSpec] = []
    for operation_id in service.operations:
        operation = model.get_shape(operation_id)
        if not isinstance(operation, OperationShape):
            logger.warning("Skipping unknown operation shape %s", operation_id)
            continue
        specs.append(operation_spec_from_shape(model, operation))
    return sorted(specs, key=lambda spec: spec.name)


def protocol_from_model(model: SmithyModel, service_shape_id: str) -> WireProtocol:
    """Wire protocol selected by the service's ``aws.protocols#*`` trait."""
    service = _service(model, service_shape_id)
    traits = service.traits
    if "aws.protocols#restJson1" in traits:
        return RestJsonProtocol()
    if "aws.protocols#awsJson1_1" in traits:
        return JsonProtocol(service.name, json_version="1.1")
    if "aws.protocols#awsJson1_0" in traits:
        return JsonProtocol(service.name, json_version="1.0")
    if "aws.protocols#awsQuery" in traits:
        if not service.version:
            raise ValueError(f"awsQuery service {service_shape_id} has no version")
        return QueryProtocol(service.endpoint_prefix or service.name.lower(), service.version)
    raise ValueError(f"Unsupported protocol for service {service_shape_id}")
