"""
Validation mode: checks input schemas against the JSON Schema draft 2020-12
meta-schema before any code is generated.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from jsonschema import Draft202012Validator

from .errors import GenerationIOError, SchemaValidationError, ValidationMessage

logger = logging.getLogger(__name__)

_META_VALIDATOR = Draft202012Validator(
    Draft202012Validator.META_SCHEMA,
    format_checker=Draft202012Validator.FORMAT_CHECKER,
)


def validate_schema(schema: object) -> list[ValidationMessage]:
    """Validate a parsed schema against the meta-schema.

    Custom `x-*` keywords are annotations only and never cause violations.

    Returns:
        One (path, message) pair per violation, sorted by path
    """
    errors = sorted(_META_VALIDATOR.iter_errors(schema), key=lambda e: e.json_path)
    return [ValidationMessage(error.json_path, error.message) for error in errors]


def validate_schema_file(schema_file: str | Path) -> list[ValidationMessage]:
    """Validate one schema file.

    A file that is not valid UTF-8 encoded JSON is reported as a single violation.

    Raises:
        GenerationIOError: If the file cannot be read
    """
    path = Path(schema_file)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return [ValidationMessage("$", f"is not valid UTF-8: {e}")]
    except OSError as e:
        raise GenerationIOError("Failed to read schema file", path) from e

    try:
        schema = json.loads(content)
    except json.JSONDecodeError as e:
        return [ValidationMessage("$", f"is not valid JSON: {e}")]

    return validate_schema(schema)


def validate_schema_files(schema_files: Iterable[str | Path]) -> None:
    """Validate a batch of files, reporting every violation at once.

    Raises:
        SchemaValidationError: If any file has violations
    """
    messages: list[ValidationMessage] = []
    for schema_file in schema_files:
        file_messages = validate_schema_file(schema_file)
        for message in file_messages:
            logger.error("%s: %s", schema_file, message)
        messages.extend(ValidationMessage(f"{Path(schema_file).name}:{m.path}", m.message) for m in file_messages)

    if messages:
        raise SchemaValidationError(messages)
