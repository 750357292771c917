"""
Builders for the generatable units: records (pojos), enums and their properties.
"""

from __future__ import annotations

from ...utils import dir_path_to_package_path
from ..config import CodeGeneratorConfig
from ..errors import UnsupportedConstructError
from ..schema_ast import EXT_DEPRECATION_MESSAGE, EXT_MODEL_SUBDIR, Extensions, SchemaDocument
from . import annotations
from .ir_nodes import AnnotationInfo, EnumDescriptor, PropertyDescriptor, RecordDescriptor
from .schema_registry import SchemaRegistry
from .type_resolver import NullabilityMode, TypeResolver


class BaseBuilder:
    """Shared helpers of the unit and property builders."""

    def __init__(self, config: CodeGeneratorConfig):
        self.config = config

    def model_name_to_schema_name(self, model_name: str) -> str:
        """Strip the configured suffix from a generated type name."""
        suffix = self.config.pojo_name_suffix
        if suffix and model_name.endswith(suffix):
            return model_name[: -len(suffix)]
        return model_name

    @staticmethod
    def format_deprecation_message(extensions: Extensions) -> str:
        return extensions.get_string(EXT_DEPRECATION_MESSAGE) or annotations.DEFAULT_DEPRECATION_MESSAGE

    def unit_location(self, schema: SchemaDocument) -> tuple[str | None, str | None]:
        """Output subdirectory and subpackage declared by `x-model-subdir`."""
        subdir = schema.extensions().get_string(EXT_MODEL_SUBDIR)
        subpackage = dir_path_to_package_path(subdir) if subdir else None
        return subdir, subpackage

    def unit_annotations(self, name: str, schema: SchemaDocument) -> tuple[AnnotationInfo, ...]:
        if not self.config.add_open_api_schema_annotations:
            return ()
        return (annotations.unit_schema(self.model_name_to_schema_name(name), schema),)


class PropertyBuilder(BaseBuilder):
    """Builds one property of a record."""

    def __init__(self, config: CodeGeneratorConfig, type_resolver: TypeResolver):
        super().__init__(config)
        self.type_resolver = type_resolver

    def build_property(self, name: str, schema: SchemaDocument, required: bool) -> PropertyDescriptor:
        """
        Build a property descriptor.

        An optional property is always nullable, whatever its schema says.

        Args:
            name: JSON property name
            schema: The property's schema
            required: Whether the property is listed in the owner's `required`

        Returns:
            The property descriptor
        """
        mode = NullabilityMode.FROM_SCHEMA if required else NullabilityMode.FORCE_NULLABLE
        type_descriptor = self.type_resolver.resolve_type(schema, mode)

        property_annotations: list[AnnotationInfo] = []
        if self.config.add_open_api_schema_annotations:
            schema_required = not self.type_resolver.is_nullable(schema) and not type_descriptor.nullable
            property_annotations.append(
                annotations.property_schema(
                    schema,
                    schema_required,
                    type_descriptor.schema_format,
                    type_descriptor.schema_pattern,
                )
            )
        if self.config.add_json_property_annotations:
            property_annotations.append(annotations.json_property(name))

        deprecation_message = None
        if schema.is_deprecated():
            deprecation_message = self.format_deprecation_message(schema.extensions())

        return PropertyDescriptor(
            name=name,
            required=required,
            type=type_descriptor,
            annotations=tuple(property_annotations),
            deprecation_message=deprecation_message,
        )


class RecordBuilder(BaseBuilder):
    """Builds a record (pojo) unit from an object or allOf schema."""

    def __init__(self, config: CodeGeneratorConfig, registry: SchemaRegistry):
        super().__init__(config)
        self.registry = registry
        self.property_builder = PropertyBuilder(config, TypeResolver(config, registry))

    def build_record(self, name: str, schema: SchemaDocument) -> RecordDescriptor:
        """
        Build a record descriptor.

        Raises:
            UnsupportedConstructError: If the schema itself declares a
                schema-valued additionalProperties
        """
        if isinstance(schema.additional_properties(), SchemaDocument):
            raise UnsupportedConstructError(f"Schema-based 'additionalProperties' not supported for Pojos: {name}")

        subdir, subpackage = self.unit_location(schema)
        deprecation_message = None
        if schema.is_deprecated():
            deprecation_message = self.format_deprecation_message(schema.extensions())

        return RecordDescriptor(
            name=name,
            model_subdir=subdir,
            model_subpackage=subpackage,
            annotations=self.unit_annotations(name, schema),
            deprecation_message=deprecation_message,
            properties=tuple(self.collect_properties(schema)),
        )

    def collect_properties(self, schema: SchemaDocument) -> list[PropertyDescriptor]:
        """Collect properties in declaration order.

        allOf branches are concatenated in order and a bare $ref inherits
        the properties of its target.
        """
        props: list[PropertyDescriptor] = []

        if schema.has_all_of():
            for sub_schema in schema.all_of():
                props.extend(self.collect_properties(sub_schema))
        elif schema.ref is not None:
            ref = schema.ref
            target = self.registry.resolve_or_fail(ref)
            with self.registry.guard(ref):
                props.extend(self.collect_properties(target))
        else:
            for prop_name, prop_schema in schema.properties().items():
                props.append(self.property_builder.build_property(prop_name, prop_schema, schema.is_required(prop_name)))

        return props


class EnumBuilder(BaseBuilder):
    """Builds an enum unit from a string schema with `enum`."""

    def build_enum(self, name: str, schema: SchemaDocument) -> EnumDescriptor:
        subdir, subpackage = self.unit_location(schema)
        deprecation_message = None
        if schema.is_deprecated():
            deprecation_message = self.format_deprecation_message(schema.extensions())

        return EnumDescriptor(
            name=name,
            model_subdir=subdir,
            model_subpackage=subpackage,
            annotations=self.unit_annotations(name, schema),
            deprecation_message=deprecation_message,
            constants=tuple(schema.enums()),
        )
