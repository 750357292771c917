"""
Base class for code emitters.

Defines the interface that all dialect-specific emitters implement. An
emitter is a pure consumer of the IR: it renders one record or enum unit
to source text through the dialect's jinja2 templates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import jinja2

from ...utils import package_of_fqn
from ..analyzer.ir_nodes import EnumDescriptor, PropertyDescriptor, RecordDescriptor, TypeDescriptor
from ..config import CodeGeneratorConfig


class Emitter(ABC):
    """Abstract base class for dialect emitters."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the emitter.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def _template(self, kind: str) -> jinja2.Template:
        return self.jinja_env.get_template(f"{kind}.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def emit_record(self, record: RecordDescriptor) -> str:
        """
        Render a record unit.

        Args:
            record: The record descriptor

        Returns:
            Generated source code
        """

    @abstractmethod
    def emit_enum(self, enum: EnumDescriptor) -> str:
        """
        Render an enum unit.

        Args:
            enum: The enum descriptor

        Returns:
            Generated source code
        """

    @abstractmethod
    def render_type(self, type_descriptor: TypeDescriptor) -> str:
        """Type as written in a declaration, including annotated type arguments."""

    def file_name(self, unit_name: str) -> str:
        return f"{unit_name}.{self.FILE_EXTENSION}"

    @property
    def indent(self) -> str:
        return self.config.get_indent()

    def _render_type_argument(self, type_descriptor: TypeDescriptor) -> str:
        return " ".join([a.annotation for a in type_descriptor.annotations] + [self.render_type(type_descriptor)])

    def _render_generic(self, type_descriptor: TypeDescriptor, name: str) -> str:
        if type_descriptor.is_map:
            key = self._render_type_argument(type_descriptor.key_type)
            item = self._render_type_argument(type_descriptor.item_type)
            return f"{name}<{key}, {item}>"
        if type_descriptor.is_array:
            return f"{name}<{self._render_type_argument(type_descriptor.item_type)}>"
        return name

    def collect_imports(self, unit: RecordDescriptor | EnumDescriptor) -> set[str]:
        """All imports a unit needs, except model types living in its own package."""
        own_package = self.config.get_model_package(unit.model_subpackage)
        imports = set(unit.imports())

        properties: Iterable[PropertyDescriptor] = getattr(unit, "properties", ())
        for prop in properties:
            imports.update(prop.imports())
            for fqn in prop.type.all_type_imports():
                if package_of_fqn(fqn) != own_package:
                    imports.add(fqn)
            for fqn in prop.type.all_annotation_imports():
                if package_of_fqn(fqn) != own_package:
                    imports.add(fqn)
        return imports

    @abstractmethod
    def group_imports(self, imports: set[str]) -> list[list[str]]:
        """Split imports into the blocks written at the top of a unit."""

    def _unit_context(self, unit: RecordDescriptor | EnumDescriptor) -> dict[str, Any]:
        return {
            "package": self.config.get_model_package(unit.model_subpackage),
            "import_groups": self.group_imports(self.collect_imports(unit)),
            "deprecation_message": unit.deprecation_message,
            "annotations": [a.annotation for a in unit.annotations],
            "name": unit.name,
            "indent": self.indent,
        }
