"""
Model generator - orchestrates one generation run.

1. Phase 1 (Schema AST): Load each schema file as a SchemaDocument
2. Phase 2 (Analyzer): Resolve references, infer types and build the IR
3. Phase 3 (Emitter): Render the IR as Java or Kotlin source
4. Phase 4 (Writer): Write each unit atomically
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..utils import plural_suffix
from .analyzer import EnumBuilder, RecordBuilder, SchemaRegistry, find_schema_files
from .analyzer.ir_nodes import EnumDescriptor, RecordDescriptor
from .backends import Emitter, create_emitter
from .config import CodeGeneratorConfig
from .errors import GenerationError
from .merger import AtomicWriter
from .schema_ast import SchemaDocument
from .validation import validate_schema_files

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    enum_count: int = 0
    pojo_count: int = 0
    written_files: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, GenerationError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ModelGenerator:
    """Generates enum and record source files from schema files."""

    def __init__(
        self,
        config: CodeGeneratorConfig,
        registry: SchemaRegistry | None = None,
        emitter: Emitter | None = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Generator configuration
            registry: Schema registry for this run (a fresh one by default)
            emitter: Dialect emitter (selected from config.language by default)
        """
        self.config = config
        self.registry = registry or SchemaRegistry(config)
        self.emitter = emitter or create_emitter(config)
        self.writer = AtomicWriter(config.output)

    def generate(self, schema_files: Iterable[str | Path]) -> GenerationResult:
        """Generate one unit per enum or object schema file.

        A failure aborts the file it occurs in. With `continue_on_error` the
        remaining files are still attempted and failures are collected,
        otherwise the first failure is raised.

        Raises:
            GenerationError: On the first failure unless continue_on_error is set
        """
        result = GenerationResult()
        try:
            for schema_file in schema_files:
                path = Path(schema_file)
                try:
                    self._generate_file(path, result)
                except GenerationError as e:
                    if not self.config.continue_on_error:
                        raise
                    logger.error("Failed to generate model from %s: %s", path, e)
                    result.failures.append((path, e))
        finally:
            self.registry.clear()

        logger.info(
            "Generated %d enum%s, %d pojo%s in directory %s",
            result.enum_count,
            plural_suffix(result.enum_count),
            result.pojo_count,
            plural_suffix(result.pojo_count),
            self.config.get_model_output_dir(),
        )
        return result

    def _generate_file(self, schema_file: Path, result: GenerationResult) -> None:
        schema = self.registry.load(schema_file)
        name = schema.name + self.config.pojo_name_suffix

        if schema.is_enum():
            result.written_files.append(self.generate_enum_file(name, schema))
            result.enum_count += 1

        if schema.is_class():
            result.written_files.append(self.generate_record_file(name, schema))
            result.pojo_count += 1

    def generate_enum_file(self, name: str, schema: SchemaDocument) -> Path:
        if self.config.verbose:
            logger.info("Generating model enum %s", name)
        enum = EnumBuilder(self.config).build_enum(name, schema)
        return self._write(enum, self.emitter.emit_enum(enum))

    def generate_record_file(self, name: str, schema: SchemaDocument) -> Path:
        if self.config.verbose:
            logger.info("Generating model class %s", name)
        record = RecordBuilder(self.config, self.registry).build_record(name, schema)
        return self._write(record, self.emitter.emit_record(record))

    def _write(self, unit: RecordDescriptor | EnumDescriptor, content: str) -> Path:
        output_dir = Path(self.config.get_model_output_dir(unit.model_subdir))
        path = output_dir / self.emitter.file_name(unit.name)
        self.writer.write(path, content)
        return path


def generate_models(
    config: CodeGeneratorConfig,
    schema_files: Iterable[str | Path] | None = None,
    validate: bool = False,
) -> GenerationResult:
    """Run the generator for a configuration.

    Args:
        config: Generator configuration
        schema_files: Files to generate from (default: discovered below the search root)
        validate: Check every file against the meta-schema before generating

    Returns:
        The run's result

    Raises:
        ConfigurationError: If the configuration is incomplete
        SchemaValidationError: If validation is requested and any file fails it
    """
    config.validate()
    if schema_files is None:
        files = find_schema_files(config.search_root_dir, config.include_pattern)
    else:
        files = [Path(f) for f in schema_files]
    logger.debug("Processing %d schema file%s", len(files), plural_suffix(len(files)))

    if validate:
        validate_schema_files(files)

    return ModelGenerator(config).generate(files)
