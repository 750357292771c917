"""JSON Schema to JVM Model Generator

A Python package for generating Java and Kotlin data classes from
interlinked JSON Schema documents, annotated for Jackson binding,
MicroProfile OpenAPI documentation and Jakarta Bean Validation.
"""

__version__ = "1.0.0"
__author__ = "François Lagunas"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationError,
    GenerationResult,
    ModelGenerator,
    OutputConfig,
    OutputMode,
    generate_models,
)

__all__ = [
    "ModelGenerator",
    "GenerationResult",
    "generate_models",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "GenerationError",
    "AtomicWriter",
]
