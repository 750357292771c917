"""
Java emitter.

Renders records (or plain classes with public fields) and enums.
"""

from __future__ import annotations

from ..analyzer.ir_nodes import EnumDescriptor, PropertyDescriptor, RecordDescriptor, TypeDescriptor
from .base import Emitter


class JavaEmitter(Emitter):
    """Emits Java source code."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    def render_type(self, type_descriptor: TypeDescriptor) -> str:
        return self._render_generic(type_descriptor, type_descriptor.name)

    def group_imports(self, imports: set[str]) -> list[list[str]]:
        """Non-JDK imports first, then `java.*` imports, each block sorted."""
        java_imports = sorted(i for i in imports if i.startswith("java."))
        other_imports = sorted(i for i in imports if not i.startswith("java."))
        return [group for group in (other_imports, java_imports) if group]

    def _property_context(self, prop: PropertyDescriptor) -> dict:
        lines = []
        if prop.is_deprecated:
            lines.append(f"/// @deprecated {prop.deprecation_message}")
            lines.append("@Deprecated")
        lines.extend(a.annotation for a in prop.annotations)
        lines.extend(a.annotation for a in prop.type.annotations)
        return {
            "name": prop.name,
            "type": self.render_type(prop.type),
            "annotations": lines,
        }

    def emit_record(self, record: RecordDescriptor) -> str:
        context = self._unit_context(record)
        context["properties"] = [self._property_context(p) for p in record.properties]

        if self.config.pojos_as_records:
            return self._template("record").render(context)

        context["constructor_params"] = ", ".join(f"{p['type']} {p['name']}" for p in context["properties"])
        return self._template("class").render(context)

    def emit_enum(self, enum: EnumDescriptor) -> str:
        context = self._unit_context(enum)
        context["constants"] = list(enum.constants)
        return self._template("enum").render(context)
