# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type model for classgen schemas (classes, enums, properties, values)."""

from classgen.model.entities import (
    CLASS_KIND,
    ENUM_KIND,
    ClassType,
    DataType,
    EnumType,
    ParseOptions,
    Property,
    Schema,
    Value,
    decode_schema,
)
from classgen.model.types import TypeExpression, format_type_expression, parse_type_expression

__all__ = [
    # Type expressions
    "TypeExpression",
    "parse_type_expression",
    "format_type_expression",
    # Entities
    "CLASS_KIND",
    "ENUM_KIND",
    "ClassType",
    "DataType",
    "EnumType",
    "ParseOptions",
    "Property",
    "Schema",
    "Value",
    "decode_schema",
]
