"""
Read-only view over one parsed JSON Schema subtree.

A SchemaDocument answers keyword queries (declared types, $ref, properties,
composition branches, constraints, extensions) without interpreting them.
Interpretation belongs to the analyzer.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urljoin

from .extensions import Extensions

# Name carried by anonymous sub-schemas
ANONYMOUS_NAME = "$"


class SchemaDocument:
    """Immutable accessor over a schema node.

    Attributes:
        name: Derived PascalCase name, or "$" for anonymous sub-schemas
        raw: The underlying JSON value
        base_uri: Identifier that relative references are resolved against,
            inherited from the nearest enclosing `$id`
        source_path: JSON pointer of this node inside its file (for error messages)
    """

    __slots__ = ("name", "raw", "base_uri", "source_path", "_extensions")

    def __init__(
        self,
        name: str,
        raw: dict[str, Any],
        base_uri: str | None = None,
        source_path: str = "",
    ):
        self.name = name
        self.raw = raw
        own_id = raw.get("$id")
        if isinstance(own_id, str) and own_id:
            base_uri = urljoin(base_uri, own_id) if base_uri else own_id
        self.base_uri = base_uri
        self.source_path = source_path
        self._extensions = Extensions.of(raw)

    def __repr__(self) -> str:
        return f"SchemaDocument({self.name!r}, {json.dumps(self.raw, sort_keys=True)})"

    def __str__(self) -> str:
        return json.dumps(self.raw)

    def _child(self, raw: Any, path: str) -> SchemaDocument:
        if not isinstance(raw, dict):
            raw = {}
        return SchemaDocument(ANONYMOUS_NAME, raw, self.base_uri, f"{self.source_path}/{path}")

    def _children(self, keyword: str) -> list[SchemaDocument]:
        branches = self.raw.get(keyword) or []
        return [self._child(b, f"{keyword}/{i}") for i, b in enumerate(branches)]

    # Types

    def types(self) -> list[str]:
        declared = self.raw.get("type")
        if declared is None:
            return []
        if isinstance(declared, str):
            return [declared]
        return list(declared)

    def has_types(self) -> bool:
        return bool(self.types())

    def has_type(self, type_name: str) -> bool:
        return type_name in self.types()

    # References

    @property
    def ref(self) -> str | None:
        """The $ref of this node, made absolute against the inherited `$id`."""
        value = self.raw.get("$ref")
        if not value:
            return None
        if self.base_uri:
            return urljoin(self.base_uri, value)
        return value

    # Objects

    def properties(self) -> dict[str, SchemaDocument]:
        props = self.raw.get("properties") or {}
        return {name: self._child(value, f"properties/{name}") for name, value in props.items()}

    def required(self) -> list[str]:
        return list(self.raw.get("required") or [])

    def is_required(self, name: str) -> bool:
        return name in self.required()

    def additional_properties(self) -> SchemaDocument | bool | None:
        """The "extra properties" clause: a SchemaDocument, a boolean, or None when absent."""
        value = self.raw.get("additionalProperties")
        if isinstance(value, dict):
            return self._child(value, "additionalProperties")
        return value

    # Enums

    def enums(self) -> list[str]:
        return [str(v) for v in self.raw.get("enum") or []]

    # Composition

    def all_of(self) -> list[SchemaDocument]:
        return self._children("allOf")

    def one_of(self) -> list[SchemaDocument]:
        return self._children("oneOf")

    def any_of(self) -> list[SchemaDocument]:
        return self._children("anyOf")

    def has_all_of(self) -> bool:
        return bool(self.raw.get("allOf"))

    def has_one_of(self) -> bool:
        return bool(self.raw.get("oneOf"))

    def has_any_of(self) -> bool:
        return bool(self.raw.get("anyOf"))

    # Arrays

    def items(self) -> SchemaDocument | None:
        value = self.raw.get("items")
        if not isinstance(value, dict):
            return None
        return self._child(value, "items")

    @property
    def unique_items(self) -> bool:
        return self.raw.get("uniqueItems") is True

    @property
    def min_items(self) -> int | None:
        return self.raw.get("minItems")

    @property
    def max_items(self) -> int | None:
        return self.raw.get("maxItems")

    # Scalars

    @property
    def min_length(self) -> int | None:
        return self.raw.get("minLength")

    @property
    def max_length(self) -> int | None:
        return self.raw.get("maxLength")

    @property
    def minimum(self) -> int | float | None:
        return self.raw.get("minimum")

    @property
    def maximum(self) -> int | float | None:
        return self.raw.get("maximum")

    @property
    def pattern(self) -> str | None:
        return self.raw.get("pattern")

    @property
    def format(self) -> str | None:
        return self.raw.get("format")

    # Documentation

    @property
    def description(self) -> str | None:
        return self.raw.get("description")

    @property
    def default_value(self) -> str | None:
        """The `default` keyword rendered as text, or None when absent."""
        value = self.raw.get("default")
        if value is None:
            return None
        if isinstance(value, str):
            return value
        return json.dumps(value)

    def is_deprecated(self) -> bool:
        return self.raw.get("deprecated") is True

    def extensions(self) -> Extensions:
        return self._extensions

    # Classification shortcuts

    def is_enum(self) -> bool:
        return self.has_type("string") and "enum" in self.raw

    def is_class(self) -> bool:
        return self.has_type("object") or self.has_all_of()
