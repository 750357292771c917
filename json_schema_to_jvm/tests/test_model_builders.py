import pytest

from json_schema_to_jvm.pipeline.analyzer import (
    EnumBuilder,
    PropertyBuilder,
    RecordBuilder,
    SchemaRegistry,
    TypeResolver,
)
from json_schema_to_jvm.pipeline.analyzer.model_builders import BaseBuilder
from json_schema_to_jvm.pipeline.errors import CircularReferenceError, UnsupportedConstructError
from json_schema_to_jvm.pipeline.schema_ast import Extensions, SchemaDocument


def names(record):
    return [p.name for p in record.properties]


class TestRecordBuilder:
    def test_properties_in_declaration_order(self, config, registry, schemas_dir):
        record = RecordBuilder(config, registry).build_record("UserV1Dto", registry.load(schemas_dir / "UserV1.json"))
        assert names(record) == [
            "firstName",
            "lastName",
            "address",
            "emailAddress",
            "mobileNumber",
            "mobileNumberVerified",
            "type",
            "createdTime",
            "lastLoginTime",
        ]
        assert record.annotations[0].annotation == '@Schema(name = "UserV1", description = "User (customer) of the web shop")'

    def test_optional_properties_are_nullable(self, config, registry, schemas_dir):
        record = RecordBuilder(config, registry).build_record("UserV1Dto", registry.load(schemas_dir / "UserV1.json"))
        nullable = {p.name for p in record.properties if p.type.nullable}
        assert nullable == {"emailAddress", "lastLoginTime"}

    def test_all_of_concatenates_branches(self, config, registry, schemas_dir):
        schema = registry.load(schemas_dir / "InternalUserV1.json")
        record = RecordBuilder(config, registry).build_record("InternalUserV1Dto", schema)

        assert names(record)[:9] == names(
            RecordBuilder(config, registry).build_record("UserV1Dto", registry.load(schemas_dir / "UserV1.json"))
        )
        assert names(record)[9:] == ["employeeNo", "department"]
        employee_no, department = record.properties[9:]
        assert employee_no.required and not employee_no.type.nullable
        assert not department.required and department.type.nullable

    def test_all_of_of_inline_branches(self, config, registry):
        schema = SchemaDocument(
            "Pair",
            {
                "allOf": [
                    {"type": "object", "properties": {"a": {"type": "string"}, "b": {"type": "integer"}}},
                    {"type": "object", "properties": {"c": {"type": "boolean"}, "d": {"type": "string"}}},
                ]
            },
        )
        assert names(RecordBuilder(config, registry).build_record("PairDto", schema)) == ["a", "b", "c", "d"]

    def test_model_subdir(self, config, registry, schemas_dir):
        record = RecordBuilder(config, registry).build_record(
            "AddressV1Dto", registry.load(schemas_dir / "common" / "AddressV1.json")
        )
        assert record.model_subdir == "common"
        assert record.model_subpackage == "common"

    def test_record_additional_properties(self, config, registry):
        schema = SchemaDocument("Bag", {"type": "object", "additionalProperties": {"type": "string"}})
        with pytest.raises(UnsupportedConstructError, match="not supported for Pojos: BagDto"):
            RecordBuilder(config, registry).build_record("BagDto", schema)

    def test_record_additional_properties_with_declared_properties(self, config, registry):
        schema = SchemaDocument(
            "Bag",
            {
                "type": "object",
                "properties": {"label": {"type": "string"}, "size": {"type": "integer"}},
                "additionalProperties": {"type": "string"},
            },
        )
        with pytest.raises(UnsupportedConstructError, match="not supported for Pojos: BagDto"):
            RecordBuilder(config, registry).build_record("BagDto", schema)

    def test_boolean_additional_properties_allowed(self, config, registry):
        schema = SchemaDocument("Bag", {"type": "object", "additionalProperties": False, "properties": {}})
        assert RecordBuilder(config, registry).build_record("BagDto", schema).properties == ()

    def test_deprecated_record(self, config, registry):
        schema = SchemaDocument("Old", {"type": "object", "deprecated": True})
        record = RecordBuilder(config, registry).build_record("OldDto", schema)
        assert record.deprecation_message == "Deprecated"
        assert "deprecated = true" in record.annotations[0].annotation

    def test_no_openapi_annotations(self, config, registry, schemas_dir):
        config.add_open_api_schema_annotations = False
        record = RecordBuilder(config, registry).build_record("OrderV1Dto", registry.load(schemas_dir / "OrderV1.json"))
        assert record.annotations == ()
        assert all(p.annotations == () for p in record.properties)

    def test_circular_inheritance(self, config, schema_writer, tmp_path, id_root):
        config.search_root_dir = str(tmp_path)
        schema_writer(tmp_path, "LoopV1.json", {"$id": f"{id_root}/LoopV1.json", "allOf": [{"$ref": "LoopV1.json"}]})
        registry = SchemaRegistry(config)
        with pytest.raises(CircularReferenceError):
            RecordBuilder(config, registry).build_record("LoopV1Dto", registry.load(tmp_path / "LoopV1.json"))


class TestPropertyBuilder:
    @pytest.fixture
    def builder(self, config, registry):
        return PropertyBuilder(config, TypeResolver(config, registry))

    def test_schema_annotation(self, builder):
        prop = builder.build_property(
            "count", SchemaDocument("$", {"type": "integer", "description": "Count", "default": 3}), True
        )
        assert [a.annotation for a in prop.annotations] == [
            '@Schema(description = "Count", required = true, defaultValue = "3")'
        ]

    def test_schema_annotation_for_undocumented_nullable(self, builder):
        prop = builder.build_property("note", SchemaDocument("$", {"type": ["string", "null"]}), True)
        assert prop.annotations[0].annotation == '@Schema(description = "TBD")'

    def test_json_property(self, config, registry):
        config.add_json_property_annotations = True
        builder = PropertyBuilder(config, TypeResolver(config, registry))
        prop = builder.build_property("first_name", SchemaDocument("$", {"type": "string"}), True)
        assert prop.annotations[-1].annotation == '@JsonProperty("first_name")'
        assert "com.fasterxml.jackson.annotation.JsonProperty" in set(prop.imports())

    def test_deprecation_message(self, builder):
        schema = SchemaDocument("$", {"type": "string", "deprecated": True, "x-deprecation-message": "Use other"})
        assert builder.build_property("old", schema, False).deprecation_message == "Use other"
        plain = SchemaDocument("$", {"type": "string"})
        assert not builder.build_property("new", plain, False).is_deprecated


class TestEnumBuilder:
    def test_build_enum(self, config, registry, schemas_dir):
        enum = EnumBuilder(config).build_enum("OrderStatusV1Dto", registry.load(schemas_dir / "OrderStatusV1.json"))
        assert enum.constants == ("Created", "Processing", "Dispatched")
        assert enum.model_subdir is None
        assert enum.annotations[0].annotation == '@Schema(name = "OrderStatusV1", description = "Order status")'

    def test_deprecated_enum(self, config):
        schema = SchemaDocument(
            "Old", {"type": "string", "enum": ["A"], "deprecated": True, "x-deprecation-message": "Gone"}
        )
        assert EnumBuilder(config).build_enum("OldDto", schema).deprecation_message == "Gone"


class TestBaseBuilder:
    def test_model_name_to_schema_name(self, config):
        builder = BaseBuilder(config)
        assert builder.model_name_to_schema_name("UserV1Dto") == "UserV1"
        assert builder.model_name_to_schema_name("UserV1") == "UserV1"
        config.pojo_name_suffix = ""
        assert builder.model_name_to_schema_name("UserV1Dto") == "UserV1Dto"

    def test_format_deprecation_message(self):
        assert BaseBuilder.format_deprecation_message(Extensions({})) == "Deprecated"
        assert BaseBuilder.format_deprecation_message(Extensions({"x-deprecation-message": "Bye"})) == "Bye"
