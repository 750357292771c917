"""
Schema registry for $ref resolution.

Loads schema files, maps reference identifiers to files under the search
root and classifies schemas. Resolved documents are memoized for the
lifetime of one generation run, so a given reference always yields the
same SchemaDocument object. One registry serves one single-threaded run.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urldefrag, urljoin

from ...utils import dir_path_to_package_path, to_pascal_case
from ..config import CodeGeneratorConfig
from ..errors import (
    CircularReferenceError,
    ConfigurationError,
    GenerationIOError,
    MalformedSchemaError,
    UnresolvedReferenceError,
)
from ..schema_ast import EXT_MODEL_SUBDIR, SchemaDocument

logger = logging.getLogger(__name__)


class SchemaKind(str, Enum):
    """Kind of a schema as seen by the generator."""

    ENUM = "enum"
    OBJECT = "object"
    ARRAY = "array"
    COMPOUND = "compound"  # allOf without a concrete object/array type
    PRIMITIVE = "primitive"  # string, number, integer or boolean


def find_schema_files(root_dir: str | Path, pattern: str = "*.json") -> list[Path]:
    """Recursively find schema files below a root directory.

    Args:
        root_dir: Directory to search
        pattern: Glob matched against file names

    Returns:
        Matching files in a stable (sorted) order
    """
    root = Path(root_dir)
    if not root.is_dir():
        raise GenerationIOError("Schema search root is not a directory:", root)
    return sorted(p for p in root.rglob(pattern) if p.is_file())


def _navigate(node: Any, pointer: str) -> Any:
    """Follow a JSON pointer ("/a/b/0") inside a parsed document."""
    if not pointer:
        return node
    for token in pointer.lstrip("/").split("/"):
        token = unquote(token).replace("~1", "/").replace("~0", "~")
        if isinstance(node, list):
            try:
                node = node[int(token)]
            except (ValueError, IndexError):
                return None
        elif isinstance(node, dict):
            if token not in node:
                return None
            node = node[token]
        else:
            return None
    return node


class SchemaRegistry:
    """Resolves (loads) schemas referenced from other schemas."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the registry.

        Args:
            config: Generator configuration (search root and identifier root)
        """
        self.config = config
        self._documents: dict[str, SchemaDocument] = {}
        self._files: dict[Path, dict[str, Any]] = {}
        self._in_progress: set[str] = set()

    def clear(self) -> None:
        """Discard everything cached during a run."""
        self._documents.clear()
        self._files.clear()
        self._in_progress.clear()

    # Loading

    def load(self, schema_file: str | Path) -> SchemaDocument:
        """Parse one input schema file.

        The document is named after the file's base name in PascalCase.

        Raises:
            GenerationIOError: If the file cannot be read
            MalformedSchemaError: If the file is not UTF-8 encoded JSON or not an object
        """
        path = Path(schema_file)
        try:
            raw = self._read_json(path)
        except json.JSONDecodeError as e:
            raise MalformedSchemaError(f"Failed to parse schema file {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise MalformedSchemaError(f"Schema file {path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise GenerationIOError("Failed to open schema file", path) from e
        if not isinstance(raw, dict):
            raise MalformedSchemaError(f"Schema file {path} does not contain a JSON object")
        return SchemaDocument(self.get_schema_name(path), raw)

    def _read_json(self, path: Path) -> Any:
        key = path.resolve()
        if key not in self._files:
            with open(path, encoding="utf-8") as f:
                self._files[key] = json.load(f)
        return self._files[key]

    @staticmethod
    def get_schema_name(schema_file: str | Path) -> str:
        return to_pascal_case(Path(schema_file).stem)

    # Reference mapping

    @staticmethod
    def absolute_ref(ref: str, base_uri: str | None = None) -> str:
        return urljoin(base_uri, ref) if base_uri else ref

    def _root_uri(self) -> str:
        return str(self.config.schema_id_root_uri).rstrip("/")

    def map_to_file(self, ref: str) -> Path:
        """Map a reference identifier to the schema file it lives in.

        The identifier root is stripped, the remaining directory part is taken
        relative to the search root and the last segment, PascalCased, names the file.

        Raises:
            ConfigurationError: If the reference is outside the identifier root
        """
        iri, _ = urldefrag(ref)
        root = self._root_uri()
        if not root or not iri.startswith(root):
            raise ConfigurationError(f"Unexpected root URI in $id: {ref}")

        sub_iri = iri[len(root) + 1 :]
        idx = sub_iri.rfind("/")
        sub_dir = "" if idx == -1 else sub_iri[:idx]

        return Path(self.config.search_root_dir, sub_dir, f"{self.get_type_name(iri)}.json")

    @staticmethod
    def get_type_name(ref: str) -> str:
        """Derive a type name from the last segment of a reference.

        Examples:
            ".../common/address-v1.json" -> "AddressV1"
            ".../OrderV1.json#/$defs/Line" -> "Line"
        """
        name = ref
        idx = name.rfind("/")
        if idx != -1:
            name = name[idx + 1 :]
        idx = name.rfind(".")
        if idx != -1:
            name = name[:idx]
        return to_pascal_case(name)

    # Resolution

    def resolve(self, ref: str, base_uri: str | None = None) -> SchemaDocument | None:
        """Resolve a reference to a schema document.

        Returns:
            The document, or None when the mapped file does not exist, does
            not parse or lacks the referenced fragment

        Raises:
            ConfigurationError: If the reference is outside the identifier root
        """
        iri = self.absolute_ref(ref, base_uri)
        if iri in self._documents:
            return self._documents[iri]

        path = self.map_to_file(iri)
        if not path.is_file():
            logger.debug("Schema file %s for %s does not exist", path, iri)
            return None
        try:
            raw = self._read_json(path)
        except (OSError, ValueError) as e:
            logger.debug("Failed to load schema file %s for %s: %s", path, iri, e)
            return None

        file_iri, fragment = urldefrag(iri)
        node = _navigate(raw, fragment)
        if not isinstance(node, dict):
            logger.debug("Fragment %r not found in %s", fragment, path)
            return None

        file_id = raw.get("$id") if isinstance(raw, dict) else None
        file_base = urljoin(file_iri, file_id) if isinstance(file_id, str) and file_id else file_iri
        document = SchemaDocument(self.get_type_name(iri), node, base_uri=file_base, source_path=fragment)
        self._documents[iri] = document
        logger.debug("Resolved %s to %s", iri, path)
        return document

    def resolve_or_fail(self, ref: str, base_uri: str | None = None) -> SchemaDocument:
        """Resolve a reference, raising UnresolvedReferenceError when it cannot be."""
        document = self.resolve(ref, base_uri)
        if document is None:
            raise UnresolvedReferenceError(self.absolute_ref(ref, base_uri))
        return document

    @contextmanager
    def guard(self, ref: str) -> Iterator[None]:
        """Mark a reference as being followed for the duration of the block.

        Raises:
            CircularReferenceError: If the reference is already being followed
        """
        if ref in self._in_progress:
            raise CircularReferenceError(ref)
        self._in_progress.add(ref)
        try:
            yield
        finally:
            self._in_progress.discard(ref)

    # Output location

    def get_model_subdir(self, ref: str) -> str | None:
        schema = self.resolve_or_fail(ref)
        return schema.extensions().get_string(EXT_MODEL_SUBDIR)

    def get_model_subpackage(self, ref: str) -> str | None:
        subdir = self.get_model_subdir(ref)
        return dir_path_to_package_path(subdir) if subdir else None

    # Classification

    @staticmethod
    def classify(schema: SchemaDocument) -> SchemaKind:
        if schema.is_enum():
            return SchemaKind.ENUM
        if schema.has_type("object"):
            return SchemaKind.OBJECT
        if schema.has_type("array"):
            return SchemaKind.ARRAY
        if schema.has_all_of():
            return SchemaKind.COMPOUND
        return SchemaKind.PRIMITIVE

    def _is_kind(self, ref: str, kind: SchemaKind) -> bool:
        schema = self.resolve(ref)
        return schema is not None and self.classify(schema) == kind

    def is_enum_type(self, ref: str) -> bool:
        return self._is_kind(ref, SchemaKind.ENUM)

    def is_object_type(self, ref: str) -> bool:
        return self._is_kind(ref, SchemaKind.OBJECT)

    def is_array_type(self, ref: str) -> bool:
        return self._is_kind(ref, SchemaKind.ARRAY)

    def is_compound_type(self, ref: str) -> bool:
        return self._is_kind(ref, SchemaKind.COMPOUND)

    def is_primitive_type(self, ref: str) -> bool:
        return self._is_kind(ref, SchemaKind.PRIMITIVE)
