"""Smithy model parser for AWS API definitions (JSON AST format).

Only the shapes needed to describe how operations are bound to HTTP are
kept: structures (with member traits), operations and services.
"""

from __future__ import annotations

from dataclasses import dataclass, field

HTTP_TRAIT = "smithy.api#http"
ENDPOINT_TRAIT = "smithy.api#endpoint"
REQUIRED_TRAIT = "smithy.api#required"
HTTP_LABEL_TRAIT = "smithy.api#httpLabel"
HTTP_QUERY_TRAIT = "smithy.api#httpQuery"
HTTP_HEADER_TRAIT = "smithy.api#httpHeader"
HOST_LABEL_TRAIT = "smithy.api#hostLabel"
AWS_SERVICE_TRAIT = "aws.api#service"
SIGV4_TRAIT = "aws.auth#sigv4"


@dataclass
class Member:
    target: str
    traits: dict[str, object]

    @property
    def required(self) -> bool:
        return REQUIRED_TRAIT in self.traits or "required" in self.traits

    @property
    def http_label(self) -> bool:
        return HTTP_LABEL_TRAIT in self.traits

    @property
    def host_label(self) -> bool:
        return HOST_LABEL_TRAIT in self.traits

    @property
    def http_query(self) -> str | None:
        value = self.traits.get(HTTP_QUERY_TRAIT)
        return value if isinstance(value, str) else None

    @property
    def http_header(self) -> str | None:
        value = self.traits.get(HTTP_HEADER_TRAIT)
        return value if isinstance(value, str) else None


@dataclass
class Shape:
    shape_id: str
    type: str
    traits: dict[str, object]

    @property
    def name(self) -> str:
        return self.shape_id.rsplit("#", 1)[-1]


@dataclass
class StructureShape(Shape):
    members: dict[str, Member] = field(default_factory=dict)


@dataclass
class OperationShape(Shape):
    input: str | None = None
    output: str | None = None
    documentation: str | None = None

    @property
    def http(self) -> dict[str, object] | None:
        trait = self.traits.get(HTTP_TRAIT)
        return trait if isinstance(trait, dict) else None

    @property
    def host_prefix(self) -> str | None:
        trait = self.traits.get(ENDPOINT_TRAIT)
        if isinstance(trait, dict):
            prefix = trait.get("hostPrefix")
            if isinstance(prefix, str) and prefix:
                return prefix
        return None


@dataclass
class ServiceShape(Shape):
    operations: list[str] = field(default_factory=list)
    version: str | None = None

    @property
    def sdk_id(self) -> str | None:
        trait = self.traits.get(AWS_SERVICE_TRAIT)
        if isinstance(trait, dict):
            value = trait.get("sdkId")
            return value if isinstance(value, str) else None
        return None

    @property
    def endpoint_prefix(self) -> str | None:
        trait = self.traits.get(AWS_SERVICE_TRAIT)
        if isinstance(trait, dict):
            value = trait.get("endpointPrefix")
            return value if isinstance(value, str) else None
        return None

    @property
    def signing_name(self) -> str | None:
        trait = self.traits.get(SIGV4_TRAIT)
        if isinstance(trait, dict):
            value = trait.get("name")
            return value if isinstance(value, str) else None
        return None


@dataclass
class SmithyModel:
    shapes: dict[str, Shape]

    def get_shape(self, shape_id: str) -> Shape | None:
        return self.shapes.get(shape_id)

    def services(self) -> list[ServiceShape]:
        return [shape for shape in self.shapes.values() if isinstance(shape, ServiceShape)]


def _parse_member(raw: object) -> Member | None:
    if not isinstance(raw, dict):
        return None
    target = raw.get("target")
    if not isinstance(target, str):
        return None
    traits = raw.get("traits", {}) or {}
    return Member(target=target, traits=traits if isinstance(traits, dict) else {})


def _target(raw: object) -> str | None:
    if isinstance(raw, dict):
        target = raw.get("target")
        return target if isinstance(target, str) else None
    return raw if isinstance(raw, str) else None


def parse_model(data: dict[str, object]) -> SmithyModel:
    shapes: dict[str, Shape] = {}
    raw_shapes = data.get("shapes")
    if not isinstance(raw_shapes, dict):
        return SmithyModel(shapes=shapes)

    for shape_id, shape_data in raw_shapes.items():
        if not isinstance(shape_id, str) or not isinstance(shape_data, dict):
            continue
        shape_type = shape_data.get("type")
        if not isinstance(shape_type, str):
            continue
        traits_obj = shape_data.get("traits", {}) or {}
        traits = traits_obj if isinstance(traits_obj, dict) else {}

        if shape_type == "structure":
            members: dict[str, Member] = {}
            raw_members = shape_data.get("members") or {}
            if isinstance(raw_members, dict):
                for name, raw_member in raw_members.items():
                    member = _parse_member(raw_member)
                    if isinstance(name, str) and member is not None:
                        members[name] = member
            shapes[shape_id] = StructureShape(
                shape_id=shape_id, type=shape_type, traits=traits, members=members
            )
        elif shape_type == "operation":
            shapes[shape_id] = OperationShape(
                shape_id=shape_id,
                type=shape_type,
                traits=traits,
                input=_target(shape_data.get("input")),
                output=_target(shape_data.get("output")),
                documentation=_extract_documentation(shape_data, traits),
            )
        elif shape_type == "service":
            operations: list[str] = []
            raw_operations = shape_data.get("operations") or []
            if isinstance(raw_operations, list):
                for op in raw_operations:
                    target = _target(op)
                    if target is not None:
                        operations.append(target)
            version = shape_data.get("version")
            shapes[shape_id] = ServiceShape(
                shape_id=shape_id,
                type=shape_type,
                traits=traits,
                operations=operations,
                version=version if isinstance(version, str) else None,
            )
        else:
            shapes[shape_id] = Shape(shape_id=shape_id, type=shape_type, traits=traits)

    return SmithyModel(shapes=shapes)


def _extract_documentation(shape_data: dict[str, object], traits: dict[str, object]) -> str | None:
    doc = shape_data.get("documentation")
    if isinstance(doc, str):
        return doc
    doc_trait = traits.get("smithy.api#documentation")
    if isinstance(doc_trait, str):
        return doc_trait
    return None
