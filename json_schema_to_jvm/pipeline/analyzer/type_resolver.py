"""
Type inference for schema nodes.

Maps a schema node to a TypeDescriptor: the target type name, its imports,
its nullability and the validation/binding annotations that go with it.
Composition keywords are handled here as well:

- oneOf: nullable if any branch is nullable; typed by the first non-nullable branch
- allOf: nullable only if every branch is nullable; a single branch is a transparent wrapper
- anyOf: not supported
- $ref to a primitive schema: flattened into the referenced schema
- $ref to anything else: a named type reference
"""

from __future__ import annotations

import logging
from enum import Enum
from urllib.parse import urldefrag

from ...utils import is_blank
from ..config import CodeGeneratorConfig
from ..errors import MalformedSchemaError, UnsupportedConstructError
from ..schema_ast import EXT_JSON_SERIALIZER, EXT_NULLABLE, EXT_VALIDATION_CONSTRAINT, SchemaDocument
from . import annotations
from .ir_nodes import TypeDescriptor
from .schema_registry import SchemaRegistry

logger = logging.getLogger(__name__)


class NullabilityMode(str, Enum):
    """How the nullability of a resolved type is decided."""

    FROM_SCHEMA = "from_schema"
    FORCE_NULLABLE = "force_nullable"
    FORCE_NOT_NULLABLE = "force_not_nullable"

    @staticmethod
    def forced(nullable: bool) -> NullabilityMode:
        return NullabilityMode.FORCE_NULLABLE if nullable else NullabilityMode.FORCE_NOT_NULLABLE


class TypeResolver:
    """Resolves schema nodes to type descriptors."""

    def __init__(self, config: CodeGeneratorConfig, registry: SchemaRegistry):
        self.config = config
        self.registry = registry

    @property
    def _validation(self) -> bool:
        return self.config.add_jakarta_bean_validation_annotations

    def resolve_type(
        self,
        schema: SchemaDocument,
        mode: NullabilityMode = NullabilityMode.FROM_SCHEMA,
    ) -> TypeDescriptor:
        """
        Resolve the target type of a schema node.

        Args:
            schema: The schema node
            mode: Whether nullability comes from the schema or is forced

        Returns:
            The resolved type descriptor

        Raises:
            UnsupportedConstructError: For anyOf, oneOf without a non-nullable
                branch, multi-branch allOf, inline object schemas
                and named references into a schema fragment
            MalformedSchemaError: If the node has neither a type nor a $ref
            UnresolvedReferenceError: If a $ref cannot be loaded
        """
        if schema.has_types():
            return self._resolve_json_type(schema, mode)

        if schema.has_any_of():
            raise UnsupportedConstructError(f"Schema 'anyOf' not supported: {schema}")

        nullable = self._is_nullable(schema, mode)

        if schema.has_one_of():
            sub_schema = self.get_non_nullable_sub_schema(schema.one_of())
            if sub_schema is None:
                raise UnsupportedConstructError(f"Schema 'oneOf' must contain a non-nullable sub-schema: {schema}")
            return self.resolve_type(sub_schema, NullabilityMode.forced(nullable))

        all_of = schema.all_of()
        if len(all_of) == 1:
            return self.resolve_type(all_of[0], NullabilityMode.forced(nullable))

        ref = schema.ref
        if ref is not None:
            return self._resolve_reference(schema, ref, nullable)

        if all_of:
            raise UnsupportedConstructError(f"Schema 'allOf' with more than one sub-schema not supported inline: {schema}")
        raise MalformedSchemaError(f"No types, no $ref: {schema}")

    def _resolve_reference(self, schema: SchemaDocument, ref: str, nullable: bool) -> TypeDescriptor:
        if self.registry.is_primitive_type(ref):
            target = self.registry.resolve_or_fail(ref)
            logger.debug("Flattening primitive reference %s", ref)
            with self.registry.guard(ref):
                descriptor = self.resolve_type(target, NullabilityMode.forced(nullable))
        else:
            # Only whole files become generated units
            if urldefrag(ref).fragment:
                self.registry.resolve_or_fail(ref)
                raise UnsupportedConstructError(f"Reference to a non-primitive schema fragment not supported: {ref}")
            name = self.registry.get_type_name(ref) + self.config.pojo_name_suffix
            package = self.config.get_model_package(self.registry.get_model_subpackage(ref))
            descriptor = TypeDescriptor(name=name, nullable=nullable).with_added_import(f"{package}.{name}")

            if self._validation:
                if not self.registry.is_enum_type(ref):
                    descriptor = descriptor.with_added_annotation(annotations.valid())
                if not nullable:
                    descriptor = descriptor.with_added_annotation(annotations.not_null())

        if not is_blank(schema.description):
            descriptor = descriptor.with_description(schema.description)
        return descriptor

    def get_non_nullable_sub_schema(self, sub_schemas: list[SchemaDocument]) -> SchemaDocument | None:
        """First branch that is not itself nullable, or None."""
        return next((s for s in sub_schemas if not self.is_nullable(s)), None)

    # Nullability

    def _is_nullable(self, schema: SchemaDocument, mode: NullabilityMode) -> bool:
        if mode == NullabilityMode.FORCE_NULLABLE:
            return True
        if mode == NullabilityMode.FORCE_NOT_NULLABLE:
            return False
        return self.is_nullable(schema)

    def is_nullable(self, schema: SchemaDocument) -> bool:
        """Whether a schema node admits null.

        A bare $ref is nullable only through its own `x-nullable`; the
        referenced schema is never consulted.

        Raises:
            MalformedSchemaError: If the node has no type, composition or $ref
        """
        if not schema.has_types():
            if schema.has_all_of():
                return all(self.is_nullable(s) for s in schema.all_of())
            if schema.has_one_of():
                return any(self.is_nullable(s) for s in schema.one_of())
            if schema.ref is not None:
                return self._is_nullable_by_extension(schema)
            raise MalformedSchemaError(f"No types, no $ref: {schema}")

        return schema.has_type("null") or self._is_nullable_by_extension(schema)

    @staticmethod
    def _is_nullable_by_extension(schema: SchemaDocument) -> bool:
        return schema.extensions().get_boolean(EXT_NULLABLE) is True

    # JSON types

    def _resolve_json_type(self, schema: SchemaDocument, mode: NullabilityMode) -> TypeDescriptor:
        descriptor = TypeDescriptor(
            description=schema.description,
            primitive=True,
            nullable=self._is_nullable(schema, mode),
        )

        json_type = next((t for t in schema.types() if t != "null"), None)
        if json_type is None:
            raise MalformedSchemaError(f"Unexpected types: {schema}")

        if json_type == "string":
            descriptor = self._string_type(descriptor, schema)
        elif json_type == "number":
            descriptor = self._number_type(descriptor, schema)
        elif json_type == "integer":
            descriptor = self._integer_type(descriptor, schema)
        elif json_type == "boolean":
            descriptor = self._boolean_type(descriptor)
        elif json_type == "array":
            descriptor = self._array_type(descriptor, schema)
        elif json_type == "object" and isinstance(schema.additional_properties(), SchemaDocument):
            descriptor = self._map_type(descriptor, schema)
        else:
            # Object schemas are expected to be named (referenced), not inline
            raise UnsupportedConstructError(f"Unexpected schema: {schema}")

        serializer = schema.extensions().get_string(EXT_JSON_SERIALIZER)
        if serializer is not None:
            descriptor = descriptor.with_added_annotation(
                annotations.json_serialize(serializer, self.config.use_kotlin_syntax)
            )

        constraint = schema.extensions().get_string(EXT_VALIDATION_CONSTRAINT)
        if constraint is not None:
            descriptor = descriptor.with_added_annotation(annotations.validation_constraint(constraint))

        return descriptor

    def _string_type(self, descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        fmt = schema.format
        descriptor = descriptor.with_schema_format(fmt)

        scalar_formats = {
            "uri": ("URI", "java.net.URI"),
            "uuid": ("UUID", "java.util.UUID"),
            "duration": ("Duration", "java.time.Duration"),
            "date": ("LocalDate", "java.time.LocalDate"),
            "date-time": ("LocalDateTime", "java.time.LocalDateTime"),
        }
        if fmt in scalar_formats:
            name, fqn = scalar_formats[fmt]
            descriptor = descriptor.with_name(name).with_added_import(fqn)
            if not descriptor.nullable and self._validation:
                descriptor = descriptor.with_added_annotation(annotations.not_null())
            if fmt == "date":
                descriptor = descriptor.with_added_annotation(annotations.json_format(annotations.DATE_PATTERN))
            elif fmt == "date-time":
                descriptor = descriptor.with_added_annotation(annotations.json_format(annotations.DATE_TIME_PATTERN))
            return descriptor

        if fmt == "email":
            descriptor = descriptor.with_name("String")
            if self._validation:
                if not descriptor.nullable:
                    descriptor = descriptor.with_added_annotation(annotations.not_blank())
                descriptor = descriptor.with_added_annotation(annotations.email())
            return descriptor

        if fmt == "binary":
            descriptor = descriptor.with_name("byte[]")
            if self._validation:
                if not descriptor.nullable:
                    descriptor = descriptor.with_added_annotation(annotations.not_empty())
                if schema.min_items is not None or schema.max_items is not None:
                    descriptor = descriptor.with_added_annotation(annotations.array_size(schema))
            return descriptor

        descriptor = descriptor.with_name("String")
        if self._validation:
            if not descriptor.nullable:
                descriptor = descriptor.with_added_annotation(annotations.not_blank())
            if not is_blank(schema.pattern):
                descriptor = descriptor.with_schema_pattern(schema.pattern).with_added_annotation(
                    annotations.pattern(schema)
                )
            if schema.min_length is not None or schema.max_length is not None:
                descriptor = descriptor.with_added_annotation(annotations.string_size(schema))
        return descriptor

    def _number_type(self, descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        if schema.format == "double":
            descriptor = descriptor.with_name("Double")
        elif schema.format == "float":
            descriptor = descriptor.with_name("Float")
        else:
            descriptor = descriptor.with_name("BigDecimal").with_added_import("java.math.BigDecimal")
        descriptor = descriptor.with_schema_format(schema.format)

        if self._validation:
            if not descriptor.nullable:
                descriptor = descriptor.with_added_annotation(annotations.not_null())
            # Bounds only apply to arbitrary-precision decimals
            if descriptor.name == "BigDecimal":
                descriptor = self._add_bounds(descriptor, schema)
        return descriptor

    def _integer_type(self, descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        descriptor = descriptor.with_name("Long" if schema.format == "int64" else "Integer")
        descriptor = descriptor.with_schema_format(schema.format)

        if self._validation:
            if not descriptor.nullable:
                descriptor = descriptor.with_added_annotation(annotations.not_null())
            descriptor = self._add_bounds(descriptor, schema)
        return descriptor

    @staticmethod
    def _add_bounds(descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        if schema.minimum is not None:
            descriptor = descriptor.with_added_annotation(annotations.min_value(schema))
        if schema.maximum is not None:
            descriptor = descriptor.with_added_annotation(annotations.max_value(schema))
        return descriptor

    def _boolean_type(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        descriptor = descriptor.with_name("Boolean")
        if not descriptor.nullable and self._validation:
            descriptor = descriptor.with_added_annotation(annotations.not_null())
        return descriptor

    def _array_type(self, descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        items = schema.items()
        if items is None:
            raise MalformedSchemaError(f"Array schema without 'items': {schema}")

        descriptor = descriptor.with_primitive(False)
        if schema.unique_items:
            descriptor = descriptor.with_name("Set").with_added_import("java.util.Set")
        else:
            descriptor = descriptor.with_name("List").with_added_import("java.util.List")

        if self._validation:
            descriptor = descriptor.with_added_annotation(annotations.valid())

        # Element slots only carry @NotNull; the item's own nullable flag is kept as resolved
        item_type = self.resolve_type(items).with_annotations(())
        if self._validation:
            item_type = item_type.with_added_annotation(annotations.not_null())

        descriptor = self._add_collection_constraints(descriptor, schema)
        return descriptor.with_item_type(item_type)

    def _map_type(self, descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        descriptor = descriptor.with_primitive(False).with_name("Map").with_added_import("java.util.Map")

        if self._validation:
            descriptor = descriptor.with_added_annotation(annotations.valid())

        key_type = TypeDescriptor(name="String")
        if self._validation:
            key_type = key_type.with_added_annotation(annotations.not_blank())

        item_type = self.resolve_type(schema.additional_properties())
        descriptor = descriptor.with_item_type(item_type).with_key_type(key_type)

        return self._add_collection_constraints(descriptor, schema)

    def _add_collection_constraints(self, descriptor: TypeDescriptor, schema: SchemaDocument) -> TypeDescriptor:
        if self._validation:
            if not descriptor.nullable:
                descriptor = descriptor.with_added_annotation(annotations.not_null())
            if schema.min_items is not None or schema.max_items is not None:
                descriptor = descriptor.with_added_annotation(annotations.array_size(schema))
        return descriptor
