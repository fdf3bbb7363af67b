"""Static description of one service operation."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

ServiceRequest = Mapping[str, Any]

_LABEL_RE = re.compile(r"\{([A-Za-z0-9_]+)(\+?)\}")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_RE = re.compile(r"([a-z0-9])([A-Z])")


def snake_case(name: str) -> str:
    """``DescribeDBInstances`` -> ``describe_db_instances``."""
    return _WORD_RE.sub(r"\1_\2", _ACRONYM_RE.sub(r"\1_\2", name)).lower()


def lower_camel(name: str) -> str:
    return name[:1].lower() + name[1:]


def is_set(request: ServiceRequest, member: str) -> bool:
    return request.get(member) is not None


def template_labels(template: str) -> tuple[str, ...]:
    return tuple(match.group(1) for match in _LABEL_RE.finditer(template))


@dataclass(frozen=True)
class OperationSpec:
    """Everything that differs between two operations of a client.

    ``uri`` and ``host_prefix`` may contain ``{Member}`` labels (``{Member+}``
    keeps ``/`` unescaped). ``query`` and ``headers`` map member names to wire
    names; when ``query`` is ``None`` the protocol derives it.
    """

    name: str
    http_method: str = "POST"
    uri: str = "/"
    host_prefix: str | None = None
    required: tuple[str, ...] = ()
    query: Mapping[str, str] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def method_name(self) -> str:
        return snake_case(self.name)

    @property
    def uri_labels(self) -> tuple[str, ...]:
        return template_labels(self.uri.split("?", 1)[0])

    @property
    def host_labels(self) -> tuple[str, ...]:
        return template_labels(self.host_prefix or "")

    def missing_required(self, request: ServiceRequest) -> list[str]:
        return [member for member in self.required if not is_set(request, member)]


def render_template(template: str, request: ServiceRequest, quote_value) -> str:
    """Substitute ``{Member}`` labels with ``quote_value(value, greedy)``."""

    def _replace(match: re.Match[str]) -> str:
        value = request.get(match.group(1))
        return quote_value("" if value is None else str(value), bool(match.group(2)))

    return _LABEL_RE.sub(_replace, template)


def operation_table(specs: tuple[OperationSpec, ...] | list[OperationSpec]) -> dict[str, OperationSpec]:
    table: dict[str, OperationSpec] = {}
    for spec in specs:
        if spec.name in table:
            raise ValueError(f"Duplicate operation: {spec.name}")
        table[spec.name] = spec
    return table
