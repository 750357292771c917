"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed and resolved schema, ready for
code generation. All references are resolved and types are determined.
Nodes are immutable; the `with_*` helpers return updated copies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class AnnotationInfo:
    """An annotation text plus the fully qualified names it needs imported."""

    annotation: str
    imports: tuple[str, ...] = ()

    def with_added_import(self, fqn: str) -> AnnotationInfo:
        if fqn in self.imports:
            return self
        return replace(self, imports=self.imports + (fqn,))


@dataclass(frozen=True)
class TypeDescriptor:
    """A resolved target type.

    Exactly one shape holds: scalar (no item type), collection (item type
    only) or map (key and item type).
    """

    name: str = ""
    description: str | None = None
    nullable: bool = False
    primitive: bool = False

    key_type: TypeDescriptor | None = None
    item_type: TypeDescriptor | None = None

    # Used only for documentation annotations
    schema_format: str | None = None
    schema_pattern: str | None = None

    annotations: tuple[AnnotationInfo, ...] = ()
    type_imports: tuple[str, ...] = ()

    def __post_init__(self):
        if self.key_type is not None and self.item_type is None:
            raise ValueError(f"Map type {self.name} has a key type but no item type")

    @property
    def is_array(self) -> bool:
        return self.item_type is not None and self.key_type is None

    @property
    def is_map(self) -> bool:
        return self.key_type is not None

    @property
    def full_name(self) -> str:
        """The type name including its (annotated) type arguments, e.g. `List<@NotNull ItemDto>`."""
        if self.is_map:
            return f"{self.name}<{self.key_type.annotated_name}, {self.item_type.annotated_name}>"
        if self.is_array:
            return f"{self.name}<{self.item_type.annotated_name}>"
        return self.name

    @property
    def annotated_name(self) -> str:
        return " ".join([a.annotation for a in self.annotations] + [self.full_name])

    def with_name(self, name: str) -> TypeDescriptor:
        return replace(self, name=name)

    def with_description(self, description: str | None) -> TypeDescriptor:
        return replace(self, description=description)

    def with_nullable(self, nullable: bool) -> TypeDescriptor:
        return replace(self, nullable=nullable)

    def with_primitive(self, primitive: bool) -> TypeDescriptor:
        return replace(self, primitive=primitive)

    def with_key_type(self, key_type: TypeDescriptor) -> TypeDescriptor:
        return replace(self, key_type=key_type)

    def with_item_type(self, item_type: TypeDescriptor) -> TypeDescriptor:
        return replace(self, item_type=item_type)

    def with_schema_format(self, schema_format: str | None) -> TypeDescriptor:
        return replace(self, schema_format=schema_format)

    def with_schema_pattern(self, schema_pattern: str | None) -> TypeDescriptor:
        return replace(self, schema_pattern=schema_pattern)

    def with_annotations(self, annotations: tuple[AnnotationInfo, ...]) -> TypeDescriptor:
        return replace(self, annotations=tuple(annotations))

    def with_added_annotation(self, annotation: AnnotationInfo) -> TypeDescriptor:
        if annotation in self.annotations:
            return self
        return replace(self, annotations=self.annotations + (annotation,))

    def with_added_import(self, fqn: str) -> TypeDescriptor:
        if fqn in self.type_imports:
            return self
        return replace(self, type_imports=self.type_imports + (fqn,))

    def all_type_imports(self) -> Iterator[str]:
        """Type imports of this type and its type arguments."""
        yield from self.type_imports
        if self.key_type is not None:
            yield from self.key_type.all_type_imports()
        if self.item_type is not None:
            yield from self.item_type.all_type_imports()

    def all_annotation_imports(self) -> Iterator[str]:
        """Annotation imports of this type and its type arguments."""
        for annotation in self.annotations:
            yield from annotation.imports
        if self.key_type is not None:
            yield from self.key_type.all_annotation_imports()
        if self.item_type is not None:
            yield from self.item_type.all_annotation_imports()


@dataclass(frozen=True)
class PropertyDescriptor:
    """A property of a record."""

    name: str
    required: bool
    type: TypeDescriptor
    annotations: tuple[AnnotationInfo, ...] = ()
    deprecation_message: str | None = None

    def __post_init__(self):
        if not self.required and not self.type.nullable:
            object.__setattr__(self, "type", self.type.with_nullable(True))

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation_message is not None

    def imports(self) -> Iterator[str]:
        for annotation in self.annotations:
            yield from annotation.imports


@dataclass(frozen=True)
class RecordDescriptor:
    """A generatable record (pojo) unit."""

    name: str
    model_subdir: str | None = None
    model_subpackage: str | None = None
    annotations: tuple[AnnotationInfo, ...] = ()
    deprecation_message: str | None = None
    properties: tuple[PropertyDescriptor, ...] = field(default_factory=tuple)

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation_message is not None

    def imports(self) -> Iterator[str]:
        for annotation in self.annotations:
            yield from annotation.imports


@dataclass(frozen=True)
class EnumDescriptor:
    """A generatable enum unit."""

    name: str
    model_subdir: str | None = None
    model_subpackage: str | None = None
    annotations: tuple[AnnotationInfo, ...] = ()
    deprecation_message: str | None = None
    constants: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation_message is not None

    def imports(self) -> Iterator[str]:
        for annotation in self.annotations:
            yield from annotation.imports
