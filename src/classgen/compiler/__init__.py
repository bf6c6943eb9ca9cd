# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema loading and type graph validation."""

from classgen.compiler.loader import (
    SCHEMA_SUFFIXES,
    load_schema_file,
    load_schemas,
    merge_schemas,
    parse_schema_text,
    schema_files,
)
from classgen.compiler.registry import TypeRegistry, validate

__all__ = [
    "SCHEMA_SUFFIXES",
    "load_schema_file",
    "load_schemas",
    "merge_schemas",
    "parse_schema_text",
    "schema_files",
    "TypeRegistry",
    "validate",
]
