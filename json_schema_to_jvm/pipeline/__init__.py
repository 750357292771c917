"""
Pipeline - JSON Schema to JVM model generator.

This module provides a multi-phase architecture for generating Java and
Kotlin data classes from interlinked JSON schemas:

1. Phase 1 (Schema AST): Read-only accessors over parsed schema documents
2. Phase 2 (Analyzer): Resolve references, infer types and build IR
3. Phase 3 (Emitter): Render IR through dialect templates
4. Phase 4 (Writer): Atomic output of each generated unit
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .errors import (
    CircularReferenceError,
    ConfigurationError,
    GenerationError,
    GenerationIOError,
    MalformedSchemaError,
    SchemaValidationError,
    UnresolvedReferenceError,
    UnsupportedConstructError,
    ValidationMessage,
)
from .generator import GenerationResult, ModelGenerator, generate_models
from .merger import AtomicWriter
from .validation import validate_schema, validate_schema_file, validate_schema_files

__all__ = [
    "ModelGenerator",
    "GenerationResult",
    "generate_models",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "GenerationError",
    "SchemaValidationError",
    "ValidationMessage",
    "UnsupportedConstructError",
    "UnresolvedReferenceError",
    "MalformedSchemaError",
    "CircularReferenceError",
    "ConfigurationError",
    "GenerationIOError",
    "validate_schema",
    "validate_schema_file",
    "validate_schema_files",
]
