from pathlib import Path

import pytest

from json_schema_to_jvm.pipeline.analyzer import SchemaKind, SchemaRegistry, find_schema_files
from json_schema_to_jvm.pipeline.errors import (
    CircularReferenceError,
    ConfigurationError,
    GenerationIOError,
    MalformedSchemaError,
    UnresolvedReferenceError,
)

ROOT = "https://my-domain.com/my-api/schemas"


class TestReferenceMapping:
    def test_map_to_file(self, registry, schemas_dir):
        path = registry.map_to_file(f"{ROOT}/common/address-v1.json")
        assert path == Path(schemas_dir, "common", "AddressV1.json")

    def test_map_to_file_at_root(self, registry, schemas_dir):
        assert registry.map_to_file(f"{ROOT}/UserV1.json#/properties/type") == schemas_dir / "UserV1.json"

    def test_root_with_trailing_slash(self, config, schemas_dir):
        config.schema_id_root_uri = ROOT + "/"
        assert SchemaRegistry(config).map_to_file(f"{ROOT}/UserV1.json") == schemas_dir / "UserV1.json"

    def test_reference_outside_root(self, registry):
        with pytest.raises(ConfigurationError, match="Unexpected root URI"):
            registry.map_to_file("https://elsewhere.com/schemas/UserV1.json")

    @pytest.mark.parametrize(
        "ref, name",
        [
            (f"{ROOT}/common/address-v1.json", "AddressV1"),
            (f"{ROOT}/order_item_v1.json", "OrderItemV1"),
            ("UserV1.json", "UserV1"),
            ("user", "User"),
        ],
    )
    def test_get_type_name(self, ref, name):
        assert SchemaRegistry.get_type_name(ref) == name

    def test_get_schema_name(self):
        assert SchemaRegistry.get_schema_name("/tmp/schemas/order-status-v1.json") == "OrderStatusV1"


class TestResolution:
    def test_resolve_is_cached(self, registry):
        first = registry.resolve(f"{ROOT}/UserV1.json")
        assert first is not None
        assert registry.resolve(f"{ROOT}/UserV1.json") is first

    def test_relative_reference(self, registry):
        document = registry.resolve("UserTypeV1.json", f"{ROOT}/OrderV1.json")
        assert document.name == "UserTypeV1"
        assert document.enums() == ["Private", "Business"]

    def test_resolved_document_uses_file_id_as_base(self, registry):
        document = registry.resolve(f"{ROOT}/common/AddressV1.json")
        assert document.base_uri == f"{ROOT}/common/AddressV1.json"

    def test_missing_file(self, registry):
        assert registry.resolve(f"{ROOT}/MissingV1.json") is None
        with pytest.raises(UnresolvedReferenceError, match="MissingV1.json not found"):
            registry.resolve_or_fail(f"{ROOT}/MissingV1.json")

    def test_fragment(self, config, schema_writer, tmp_path):
        config.search_root_dir = str(tmp_path)
        schema_writer(
            tmp_path,
            "CatalogV1.json",
            {"$id": f"{ROOT}/CatalogV1.json", "$defs": {"Line": {"type": "object", "properties": {}}}},
        )
        registry = SchemaRegistry(config)

        line = registry.resolve(f"{ROOT}/CatalogV1.json#/$defs/Line")
        assert line.name == "Line"
        assert line.has_type("object")
        assert registry.resolve(f"{ROOT}/CatalogV1.json#/$defs/Missing") is None

    def test_unparseable_file_is_unresolved(self, config, tmp_path):
        config.search_root_dir = str(tmp_path)
        (tmp_path / "BrokenV1.json").write_text("{ not json", encoding="utf-8")
        assert SchemaRegistry(config).resolve(f"{ROOT}/BrokenV1.json") is None

    def test_clear(self, registry):
        first = registry.resolve(f"{ROOT}/UserV1.json")
        registry.clear()
        assert registry.resolve(f"{ROOT}/UserV1.json") is not first

    def test_model_subpackage(self, registry):
        assert registry.get_model_subdir(f"{ROOT}/common/AddressV1.json") == "common"
        assert registry.get_model_subpackage(f"{ROOT}/common/AddressV1.json") == "common"
        assert registry.get_model_subpackage(f"{ROOT}/UserV1.json") is None

    def test_guard(self, registry):
        with registry.guard("A.json"):
            with pytest.raises(CircularReferenceError):
                with registry.guard("A.json"):
                    pass
        # released after the block
        with registry.guard("A.json"):
            pass


class TestClassification:
    @pytest.mark.parametrize(
        "name, kind",
        [
            ("UserTypeV1.json", SchemaKind.ENUM),
            ("UserV1.json", SchemaKind.OBJECT),
            ("InternalUserV1.json", SchemaKind.COMPOUND),
            ("MobileNumberV1.json", SchemaKind.PRIMITIVE),
        ],
    )
    def test_classify(self, registry, name, kind):
        assert registry.classify(registry.resolve(f"{ROOT}/{name}")) == kind

    def test_predicates(self, registry):
        assert registry.is_enum_type(f"{ROOT}/OrderStatusV1.json")
        assert registry.is_object_type(f"{ROOT}/OrderV1.json")
        assert registry.is_compound_type(f"{ROOT}/InternalUserV1.json")
        assert registry.is_primitive_type(f"{ROOT}/MobileNumberV1.json")
        assert not registry.is_array_type(f"{ROOT}/OrderV1.json")
        # unresolvable references are of no kind
        assert not registry.is_primitive_type(f"{ROOT}/MissingV1.json")


class TestLoading:
    def test_load(self, registry, schemas_dir):
        document = registry.load(schemas_dir / "OrderV1.json")
        assert document.name == "OrderV1"
        assert document.base_uri == f"{ROOT}/OrderV1.json"

    def test_load_invalid_json(self, registry, tmp_path):
        path = tmp_path / "Broken.json"
        path.write_text("[1,", encoding="utf-8")
        with pytest.raises(MalformedSchemaError):
            registry.load(path)

    def test_load_invalid_utf8(self, registry, tmp_path):
        path = tmp_path / "Latin1.json"
        path.write_bytes(b'{"type": "object", "description": "\xff"}')
        with pytest.raises(MalformedSchemaError, match="not valid UTF-8"):
            registry.load(path)

    def test_load_non_object(self, registry, tmp_path):
        path = tmp_path / "List.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(MalformedSchemaError, match="does not contain a JSON object"):
            registry.load(path)

    def test_load_missing_file(self, registry, tmp_path):
        with pytest.raises(GenerationIOError):
            registry.load(tmp_path / "Missing.json")

    def test_find_schema_files(self, schemas_dir):
        files = find_schema_files(schemas_dir)
        assert len(files) == 10
        assert files == sorted(files)
        assert schemas_dir / "common" / "AddressV1.json" in files

    def test_find_schema_files_with_pattern(self, schemas_dir):
        files = find_schema_files(schemas_dir, "Order*.json")
        assert [f.name for f in files] == ["OrderItemV1.json", "OrderStatusV1.json", "OrderV1.json"]

    def test_find_schema_files_requires_directory(self, tmp_path):
        with pytest.raises(GenerationIOError):
            find_schema_files(tmp_path / "missing")
