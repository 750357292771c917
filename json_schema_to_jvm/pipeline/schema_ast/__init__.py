"""
Schema AST - read-only accessors over parsed JSON Schema documents.
"""

from .extensions import (
    EXT_DEPRECATION_MESSAGE,
    EXT_JSON_SERIALIZER,
    EXT_MODEL_SUBDIR,
    EXT_NULLABLE,
    EXT_VALIDATION_CONSTRAINT,
    Extensions,
)
from .schema_document import ANONYMOUS_NAME, SchemaDocument

__all__ = [
    "ANONYMOUS_NAME",
    "SchemaDocument",
    "Extensions",
    "EXT_NULLABLE",
    "EXT_MODEL_SUBDIR",
    "EXT_DEPRECATION_MESSAGE",
    "EXT_JSON_SERIALIZER",
    "EXT_VALIDATION_CONSTRAINT",
]
