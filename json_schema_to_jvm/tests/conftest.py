import json
from pathlib import Path

import pytest

from json_schema_to_jvm.pipeline import CodeGeneratorConfig
from json_schema_to_jvm.pipeline.analyzer import SchemaRegistry

TEST_DATA_DIR = Path(__file__).parent / "test_data"
ID_ROOT = "https://my-domain.com/my-api/schemas"


@pytest.fixture
def schemas_dir():
    return TEST_DATA_DIR / "schemas"


@pytest.fixture
def expected_dir():
    return TEST_DATA_DIR / "expected"


@pytest.fixture
def id_root():
    return ID_ROOT


@pytest.fixture
def config(schemas_dir, tmp_path):
    """Java records with OpenAPI and validation annotations, no @JsonProperty."""
    return CodeGeneratorConfig(
        search_root_dir=str(schemas_dir),
        output_dir=str(tmp_path / "out"),
        schema_id_root_uri=ID_ROOT,
        root_package="com.example.model",
        add_open_api_schema_annotations=True,
        add_json_property_annotations=False,
    )


@pytest.fixture
def registry(config):
    return SchemaRegistry(config)


def write_schema(directory, name, schema):
    """Write a schema file below `directory` and return its path."""
    path = Path(directory) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=4), encoding="utf-8")
    return path


@pytest.fixture
def schema_writer():
    return write_schema
