# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for parsing and formatting property type expressions."""

import pytest

from classgen.errors import ErrorKind, TypeExpressionError
from classgen.model.types import TypeExpression, format_type_expression, parse_type_expression

# ###############
# Parsing
# ###############


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("String", TypeExpression(False, False, "String")),
        ("String?", TypeExpression(False, True, "String")),
        ("[User]", TypeExpression(True, False, "User")),
        ("[User]?", TypeExpression(True, True, "User")),
        ("Map_Entry2", TypeExpression(False, False, "Map_Entry2")),
    ],
)
def test_parse_valid_expressions(expression: str, expected: TypeExpression) -> None:
    assert parse_type_expression(expression) == expected


@pytest.mark.parametrize(
    "expression",
    ["String", "String?", "[User]", "[User]?", "Date", "[Int]"],
)
def test_format_reconstructs_expression(expression: str) -> None:
    """Formatting the parsed parts reproduces the original text exactly."""
    assert parse_type_expression(expression).format() == expression


def test_format_type_expression_from_parts() -> None:
    assert format_type_expression("User", is_collection=True, is_optional=True) == "[User]?"
    assert format_type_expression("Int") == "Int"
    assert format_type_expression("Int", is_optional=True) == "Int?"


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "?",
        "[]",
        "[",
        "[User",
        "User]",
        "[[User]]",
        "[User?]",
        "User??",
        "Us er",
        "[User]]",
    ],
)
def test_malformed_expressions_raise(expression: str) -> None:
    with pytest.raises(TypeExpressionError) as exc_info:
        parse_type_expression(expression)
    assert exc_info.value.expression == expression
    assert exc_info.value.kind is ErrorKind.SCHEMA_PARSE


def test_type_expression_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_type_expression("[User")


def test_non_string_expression_raises() -> None:
    with pytest.raises(TypeExpressionError):
        parse_type_expression(42)  # type: ignore[arg-type]
