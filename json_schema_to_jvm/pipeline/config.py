"""
Configuration for the model generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigurationError

SUPPORTED_LANGUAGES = ("java", "kotlin")


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    FORCE = "force"  # Default: overwrite, generated sources are build output
    ERROR_IF_EXISTS = "error"  # Raise error if file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to write through a temporary file and rename
    """

    mode: OutputMode = OutputMode.FORCE
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for model generation."""

    # Root directory of the schema files
    search_root_dir: str = ""

    # Root directory of generated sources
    output_dir: str = ""

    # Identifier root stripped from $ref values to locate schema files
    schema_id_root_uri: str = ""

    # Root package of generated classes and enums
    root_package: str = ""

    # Suffix appended to every generated type name
    pojo_name_suffix: str = "Dto"

    # Output dialect: "java" or "kotlin"
    language: str = "java"

    # Java records / Kotlin @JvmRecord data classes
    pojos_as_records: bool = True

    # MicroProfile OpenAPI @Schema annotations
    add_open_api_schema_annotations: bool = False

    # Jackson @JsonProperty annotations
    add_json_property_annotations: bool = True

    # Jakarta Bean Validation annotations
    add_jakarta_bean_validation_annotations: bool = True

    # Indentation of generated code
    indent_with_tab: bool = False
    indent_size: int = 4

    # File name glob used when discovering schema files
    include_pattern: str = "*.json"

    # Keep generating independent files after one fails
    continue_on_error: bool = False

    # Log every generated unit
    verbose: bool = False

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "search_root_dir": self.search_root_dir,
            "output_dir": self.output_dir,
            "schema_id_root_uri": self.schema_id_root_uri,
            "root_package": self.root_package,
            "pojo_name_suffix": self.pojo_name_suffix,
            "language": self.language,
            "pojos_as_records": self.pojos_as_records,
            "add_open_api_schema_annotations": self.add_open_api_schema_annotations,
            "add_json_property_annotations": self.add_json_property_annotations,
            "add_jakarta_bean_validation_annotations": self.add_jakarta_bean_validation_annotations,
            "indent_with_tab": self.indent_with_tab,
            "indent_size": self.indent_size,
            "include_pattern": self.include_pattern,
            "continue_on_error": self.continue_on_error,
            "verbose": self.verbose,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }

    def validate(self) -> None:
        """Check the options a generation run cannot do without.

        Raises:
            ConfigurationError: If an option is missing or invalid
        """
        if self.language not in SUPPORTED_LANGUAGES:
            raise ConfigurationError(f"Language not supported: {self.language}")
        for name in ("search_root_dir", "output_dir", "schema_id_root_uri", "root_package"):
            if not getattr(self, name):
                raise ConfigurationError(f"Missing required option '{name}'")
        if self.indent_size < 0:
            raise ConfigurationError(f"Invalid indent size: {self.indent_size}")

    @property
    def use_kotlin_syntax(self) -> bool:
        return self.language == "kotlin"

    def get_model_output_dir(self, custom_subdir: str | None = None) -> str:
        """Output directory of a unit, optionally below a custom subdirectory."""
        if not custom_subdir:
            return self.output_dir
        return f"{self.output_dir}/{custom_subdir}"

    def get_model_package(self, custom_subpackage: str | None = None) -> str:
        """Package of a unit, optionally below a custom subpackage."""
        if not custom_subpackage:
            return self.root_package
        return f"{self.root_package}.{custom_subpackage}"

    def get_indent(self) -> str:
        return "\t" if self.indent_with_tab else " " * self.indent_size
