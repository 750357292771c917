"""
Exception taxonomy of the generator pipeline.

Every error is raised at the point of detection; nothing is retried and a
unit whose IR cannot be fully built is never written.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class GenerationError(Exception):
    """Base class for all errors raised while generating model code."""

    pass


@dataclass(frozen=True)
class ValidationMessage:
    """One meta-schema violation reported by validation mode."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path} {self.message}"


class SchemaValidationError(GenerationError):
    """Raised when input schemas do not conform to the draft 2020-12 meta-schema.

    Carries the full batch of violations, possibly across several files.
    """

    def __init__(self, messages: list[ValidationMessage], source: str | Path | None = None):
        self.messages = list(messages)
        self.source = source
        where = f" in {source}" if source else ""
        details = "\n".join(f"  {m}" for m in self.messages)
        super().__init__(f"{len(self.messages)} schema validation error(s){where}:\n{details}")


class UnsupportedConstructError(GenerationError):
    """Raised for JSON Schema constructs the generator deliberately does not support.

    This can happen when:
    - A schema uses 'anyOf'
    - A 'oneOf' has no non-nullable branch
    - An inline type position uses 'allOf' with more than one branch
    - A record schema declares a schema-valued 'additionalProperties'
    - An anonymous object schema is used as a property type
    """

    pass


class UnresolvedReferenceError(GenerationError):
    """Raised when a $ref does not map to a loadable, parseable schema file."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Schema {ref} not found")


class MalformedSchemaError(GenerationError):
    """Raised when a schema lacks information needed to derive a type."""

    pass


class CircularReferenceError(MalformedSchemaError):
    """Raised when following a $ref re-enters a reference still being resolved."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Circular reference detected while resolving {ref}")


class ConfigurationError(GenerationError):
    """Raised for invalid generator options or references outside the identifier root."""

    pass


class GenerationIOError(GenerationError):
    """Raised when reading a schema file or writing an output file fails."""

    def __init__(self, message: str, path: str | Path):
        self.path = Path(path)
        super().__init__(f"{message} {self.path}")
