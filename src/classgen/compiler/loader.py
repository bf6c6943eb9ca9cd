# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of schema documents into a single merged schema.

Schema documents are JSON (``.json``) or YAML (``.yaml`` / ``.yml``) files
with a ``version`` string and a ``dataTypes`` list. Documents are merged by
concatenating their data types in file order; duplicates are left for the
registry to report.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from classgen.errors import SchemaParseError
from classgen.logging_config import get_logger
from classgen.model.entities import ParseOptions, Schema, decode_schema

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})
SCHEMA_SUFFIXES = JSON_SUFFIXES | YAML_SUFFIXES


def parse_schema_text(text: str, *, source: str = "<string>", options: ParseOptions | None = None) -> Schema:
    """Parse one schema document from text.

    JSON is tried when *source* ends in ``.json`` (or has no recognized
    suffix); YAML otherwise.

    Raises:
        SchemaParseError: If the text is not a well-formed schema document.
    """
    data = _load_document(text, source)
    try:
        return decode_schema(data, options)
    except ValidationError as exc:
        raise SchemaParseError(source, _describe(exc)) from exc


def load_schema_file(path: Path, options: ParseOptions | None = None) -> Schema:
    """Read and parse a single schema document."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaParseError(str(path), f"cannot read file: {exc}") from exc
    return parse_schema_text(text, source=str(path), options=options)


def schema_files(directory: Path) -> list[Path]:
    """Return the schema documents in *directory*, sorted by file name.

    Entries that are not files with a schema suffix are skipped.
    """
    files: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_file() and entry.suffix.lower() in SCHEMA_SUFFIXES:
            files.append(entry)
        else:
            logger.info("Skipping input file: %s", entry.name)
    return files


def merge_schemas(schemas: Sequence[Schema]) -> Schema:
    """Concatenate the data types of several schemas into one container.

    The merged version is the version of the first schema.
    """
    version = schemas[0].version if schemas else ""
    data_types = [data_type for schema in schemas for data_type in schema.data_types]
    return Schema(version=version, data_types=data_types)


def load_schemas(paths: Iterable[Path], options: ParseOptions | None = None) -> Schema:
    """Parse every document in *paths* and merge them into one schema."""
    schemas: list[Schema] = []
    for path in paths:
        schema = load_schema_file(path, options)
        logger.debug("Parsed %d data type(s) from %s", len(schema.data_types), path.name)
        schemas.append(schema)
    return merge_schemas(schemas)


# ################
# Implementation
# ################


def _load_document(text: str, source: str) -> Any:
    suffix = Path(source).suffix.lower()
    if suffix in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SchemaParseError(source, f"invalid YAML: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaParseError(source, f"invalid JSON: {exc}") from exc


def _describe(exc: ValidationError) -> str:
    """Condense a pydantic validation error into one line per problem."""
    problems: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"]
        problems.append(f"{location}: {message}" if location else message)
    return "; ".join(problems)
