"""
Kotlin emitter.

Renders data classes (optionally `@JvmRecord`) and enum classes. Java type
names from the IR are mapped to their Kotlin counterparts and property
annotations target the backing field.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import EnumDescriptor, PropertyDescriptor, RecordDescriptor, TypeDescriptor
from .base import Emitter

# Java types with a different name in Kotlin
KOTLIN_TYPE_MAP = {
    "Integer": "Int",
    "byte": "Byte",
    "byte[]": "ByteArray",
}

# Kotlin's own collection types need no import
KOTLIN_IMPLICIT_IMPORTS = frozenset({"java.util.List", "java.util.Set", "java.util.Map"})

_KOTLIN_STRING_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "$": "\\$", "\n": "\\n", "\r": "\\r", "\t": "\\t"})


def kotlin_string(text: str) -> str:
    """Quote text as a Kotlin string literal."""
    return '"' + text.translate(_KOTLIN_STRING_ESCAPES) + '"'


class KotlinEmitter(Emitter):
    """Emits Kotlin source code."""

    TEMPLATE_LANG = "kotlin"
    FILE_EXTENSION = "kt"

    def __init__(self, config):
        super().__init__(config)
        self.jinja_env.filters["kotlin_string"] = kotlin_string

    def render_type(self, type_descriptor: TypeDescriptor) -> str:
        name = KOTLIN_TYPE_MAP.get(type_descriptor.name, type_descriptor.name)
        return self._render_generic(type_descriptor, name)

    def group_imports(self, imports: set[str]) -> list[list[str]]:
        """A single sorted block."""
        kept = sorted(i for i in imports if i not in KOTLIN_IMPLICIT_IMPORTS)
        return [kept] if kept else []

    def _property_context(self, prop: PropertyDescriptor) -> dict:
        lines = []
        if prop.is_deprecated:
            lines.append(f"@Deprecated({kotlin_string(prop.deprecation_message)})")
        lines.extend(self._field_annotation(a.annotation) for a in prop.annotations)
        lines.extend(self._field_annotation(a.annotation) for a in prop.type.annotations)
        return {
            "name": prop.name,
            "type": self.render_type(prop.type),
            "nullable": prop.type.nullable,
            "annotations": lines,
        }

    @staticmethod
    def _field_annotation(annotation: str) -> str:
        return "@field:" + annotation.removeprefix("@")

    def emit_record(self, record: RecordDescriptor) -> str:
        context = self._unit_context(record)
        context["properties"] = [self._property_context(p) for p in record.properties]
        context["as_record"] = self.config.pojos_as_records
        return self._template("data_class").render(context)

    def emit_enum(self, enum: EnumDescriptor) -> str:
        context = self._unit_context(enum)
        context["constants"] = list(enum.constants)
        return self._template("enum").render(context)
