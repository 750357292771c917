"""
Analyzer - resolves references, infers types and builds the IR.
"""

from .ir_nodes import AnnotationInfo, EnumDescriptor, PropertyDescriptor, RecordDescriptor, TypeDescriptor
from .model_builders import EnumBuilder, PropertyBuilder, RecordBuilder
from .schema_registry import SchemaKind, SchemaRegistry, find_schema_files
from .type_resolver import NullabilityMode, TypeResolver

__all__ = [
    "AnnotationInfo",
    "TypeDescriptor",
    "PropertyDescriptor",
    "RecordDescriptor",
    "EnumDescriptor",
    "SchemaKind",
    "SchemaRegistry",
    "find_schema_files",
    "NullabilityMode",
    "TypeResolver",
    "PropertyBuilder",
    "RecordBuilder",
    "EnumBuilder",
]
