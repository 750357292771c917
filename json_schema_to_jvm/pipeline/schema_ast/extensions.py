"""
Typed access to the custom `x-*` keywords of a schema node.
"""

from __future__ import annotations

from typing import Any

from ..errors import MalformedSchemaError

EXT_NULLABLE = "x-nullable"
EXT_MODEL_SUBDIR = "x-model-subdir"
EXT_DEPRECATION_MESSAGE = "x-deprecation-message"
EXT_JSON_SERIALIZER = "x-json-serializer"
EXT_VALIDATION_CONSTRAINT = "x-validation-constraint"


class Extensions:
    """The `x-*` keywords attached to one schema node."""

    def __init__(self, values: dict[str, Any]):
        self._values = {k: v for k, v in values.items() if k.startswith("x-")}

    @staticmethod
    def of(raw: dict[str, Any]) -> Extensions:
        return Extensions(raw)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"Extensions({self._values!r})"

    def get_string(self, name: str) -> str | None:
        """Get a string-valued extension.

        Blank strings are treated as absent.

        Raises:
            MalformedSchemaError: If the value is not a string
        """
        value = self._values.get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedSchemaError(f"Extension '{name}' must be a string, got {value!r}")
        return value if value.strip() else None

    def get_boolean(self, name: str) -> bool | None:
        """Get a boolean-valued extension.

        Raises:
            MalformedSchemaError: If the value is not a boolean
        """
        value = self._values.get(name)
        if value is None:
            return None
        if not isinstance(value, bool):
            raise MalformedSchemaError(f"Extension '{name}' must be a boolean, got {value!r}")
        return value
