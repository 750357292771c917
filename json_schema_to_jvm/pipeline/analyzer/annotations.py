"""
Factories for the annotations attached to generated types and properties.

Validation annotations come from Jakarta Bean Validation, JSON binding
annotations from Jackson and documentation annotations from MicroProfile
OpenAPI.
"""

from __future__ import annotations

from ...utils import class_name_from_fqn, is_blank, join_params
from ..errors import MalformedSchemaError
from ..schema_ast import SchemaDocument
from .ir_nodes import AnnotationInfo

JAKARTA_VALID = "jakarta.validation.Valid"
JAKARTA_CONSTRAINTS = "jakarta.validation.constraints"
JACKSON_JSON_FORMAT = "com.fasterxml.jackson.annotation.JsonFormat"
JACKSON_JSON_PROPERTY = "com.fasterxml.jackson.annotation.JsonProperty"
JACKSON_JSON_SERIALIZE = "com.fasterxml.jackson.databind.annotation.JsonSerialize"
MP_OPENAPI_SCHEMA = "org.eclipse.microprofile.openapi.annotations.media.Schema"

DATE_PATTERN = "yyyy-MM-dd"
DATE_TIME_PATTERN = "yyyy-MM-dd'T'HH:mm:ss"

DEFAULT_DEPRECATION_MESSAGE = "Deprecated"
UNDOCUMENTED = "TBD"


def _constraint(name: str, params: str | None = None) -> AnnotationInfo:
    text = f"@{name}" if params is None else f"@{name}({params})"
    return AnnotationInfo(text, (f"{JAKARTA_CONSTRAINTS}.{name}",))


def valid() -> AnnotationInfo:
    return AnnotationInfo("@Valid", (JAKARTA_VALID,))


def not_null() -> AnnotationInfo:
    return _constraint("NotNull")


def not_blank() -> AnnotationInfo:
    return _constraint("NotBlank")


def not_empty() -> AnnotationInfo:
    return _constraint("NotEmpty")


def email() -> AnnotationInfo:
    return _constraint("Email")


def min_value(schema: SchemaDocument) -> AnnotationInfo:
    return _constraint("Min", str(int(schema.minimum)))


def max_value(schema: SchemaDocument) -> AnnotationInfo:
    return _constraint("Max", str(int(schema.maximum)))


def pattern(schema: SchemaDocument) -> AnnotationInfo:
    return _constraint("Pattern", f'regexp = "{schema.pattern}"')


def _size(lower: int | None, upper: int | None) -> AnnotationInfo:
    params = []
    if lower is not None:
        params.append(f"min = {lower}")
    if upper is not None:
        params.append(f"max = {upper}")
    return _constraint("Size", join_params(params))


def array_size(schema: SchemaDocument) -> AnnotationInfo:
    """@Size from the item-count keywords."""
    return _size(schema.min_items, schema.max_items)


def string_size(schema: SchemaDocument) -> AnnotationInfo:
    """@Size from the length keywords."""
    return _size(schema.min_length, schema.max_length)


def json_format(date_pattern: str) -> AnnotationInfo:
    return AnnotationInfo(f'@JsonFormat(pattern = "{date_pattern}")', (JACKSON_JSON_FORMAT,))


def _simple_name(fqn: str) -> str:
    try:
        return class_name_from_fqn(fqn)
    except ValueError as e:
        raise MalformedSchemaError(str(e)) from e


def format_class_ref(class_name: str, use_kotlin_syntax: bool) -> str:
    """Class literal as written in an annotation argument."""
    return f"{class_name}::class" if use_kotlin_syntax else f"{class_name}.class"


def json_serialize(serializer_fqn: str, use_kotlin_syntax: bool) -> AnnotationInfo:
    serializer_class = format_class_ref(_simple_name(serializer_fqn), use_kotlin_syntax)
    return AnnotationInfo(
        f"@JsonSerialize(using = {serializer_class})",
        (JACKSON_JSON_SERIALIZE, serializer_fqn),
    )


def validation_constraint(constraint_fqn: str) -> AnnotationInfo:
    """A custom constraint annotation referenced by its fully qualified name."""
    return AnnotationInfo(f"@{_simple_name(constraint_fqn)}", (constraint_fqn,))


def json_property(name: str) -> AnnotationInfo:
    return AnnotationInfo(f'@JsonProperty("{name}")', (JACKSON_JSON_PROPERTY,))


def normalize_description(description: str | None) -> str:
    return UNDOCUMENTED if is_blank(description) else description


def unit_schema(schema_name: str, schema: SchemaDocument) -> AnnotationInfo:
    """@Schema for a record or enum unit."""
    params = [
        f'name = "{schema_name}"',
        f'description = "{normalize_description(schema.description)}"',
    ]
    if schema.is_deprecated():
        params.append("deprecated = true")
    return AnnotationInfo(f"@Schema({join_params(params)})", (MP_OPENAPI_SCHEMA,))


def property_schema(
    schema: SchemaDocument,
    required: bool,
    schema_format: str | None,
    schema_pattern: str | None,
) -> AnnotationInfo:
    """@Schema for a property."""
    params = [f'description = "{normalize_description(schema.description)}"']
    if required:
        params.append("required = true")
    if not is_blank(schema.default_value):
        params.append(f'defaultValue = "{schema.default_value}"')
    if schema_format is not None:
        params.append(f'format = "{schema_format}"')
    if schema_pattern is not None:
        params.append(f'pattern = "{schema_pattern}"')
    if schema.is_deprecated():
        params.append("deprecated = true")
    return AnnotationInfo(f"@Schema({join_params(params)})", (MP_OPENAPI_SCHEMA,))
