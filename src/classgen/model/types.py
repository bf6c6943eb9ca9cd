# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type expressions used by class properties.

A type expression names a single type, optionally wrapped in brackets to mark
a collection and optionally suffixed with ``?`` to mark it optional::

    TypeExpr := "[" Name "]" | Name
    Expr     := TypeExpr | TypeExpr "?"
"""

from __future__ import annotations

import re
from typing import NamedTuple

from classgen.errors import TypeExpressionError

# ###############
# Public Interface
# ###############

COLLECTION_START = "["
COLLECTION_END = "]"
OPTIONAL_MARKER = "?"


class TypeExpression(NamedTuple):
    """The structural parts of a property type expression."""

    is_collection: bool
    is_optional: bool
    raw_data_type: str

    def format(self) -> str:
        """Rebuild the type expression text from its parts."""
        text = self.raw_data_type
        if self.is_collection:
            text = f"{COLLECTION_START}{text}{COLLECTION_END}"
        if self.is_optional:
            text += OPTIONAL_MARKER
        return text


def parse_type_expression(expression: str) -> TypeExpression:
    """Split a type expression into its collection, optional, and raw type parts.

    Parsing is purely syntactic: the raw type name is not looked up anywhere.

    Raises:
        TypeExpressionError: If the expression does not match the grammar.
    """
    if not isinstance(expression, str):
        raise TypeExpressionError(repr(expression), "expected a string")

    text = expression
    is_optional = text.endswith(OPTIONAL_MARKER)
    if is_optional:
        text = text[: -len(OPTIONAL_MARKER)]

    is_collection = text.startswith(COLLECTION_START)
    if is_collection:
        if not text.endswith(COLLECTION_END) or len(text) < 2:
            raise TypeExpressionError(expression, "unbalanced collection brackets")
        text = text[1:-1]
    elif text.endswith(COLLECTION_END):
        raise TypeExpressionError(expression, "unbalanced collection brackets")

    _check_name(expression, text)
    return TypeExpression(is_collection=is_collection, is_optional=is_optional, raw_data_type=text)


def format_type_expression(raw_data_type: str, *, is_collection: bool = False, is_optional: bool = False) -> str:
    """Build a type expression from a raw type name and its modifiers."""
    return TypeExpression(is_collection, is_optional, raw_data_type).format()


# ################
# Implementation
# ################

_FORBIDDEN = re.compile(r"[\[\]?\s]")


def _check_name(expression: str, name: str) -> None:
    if not name:
        raise TypeExpressionError(expression, "missing type name")
    match = _FORBIDDEN.search(name)
    if match is not None:
        if match.group() in (COLLECTION_START, COLLECTION_END):
            raise TypeExpressionError(expression, "nested or unbalanced collection brackets")
        if match.group() == OPTIONAL_MARKER:
            raise TypeExpressionError(expression, "misplaced optional marker")
        raise TypeExpressionError(expression, "type names cannot contain whitespace")
