# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structured error taxonomy shared by every stage of a generation run.

Each error carries a :class:`ErrorKind` and the offending identifier (a path,
a type name, a function name) so that callers can format or localize the
message without parsing strings.
"""

from __future__ import annotations

import enum
from pathlib import Path

# ###############
# Public Interface
# ###############


class ErrorKind(enum.Enum):
    """The stage of the run that detected an error."""

    CONFIGURATION = "configuration"
    INPUT_LOCATION = "input-location"
    SCHEMA_PARSE = "schema-parse"
    VALIDATION = "validation"
    EXTENSION = "extension"
    RENDERING = "rendering"


class ClassgenError(Exception):
    """Base class for all errors raised by classgen.

    Attributes:
        kind: The stage that detected the error.
        identifier: The offending path, type name, or function name.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, identifier: str = "") -> None:
        super().__init__(message)
        self.identifier = identifier


class PathReason(enum.Enum):
    """Why an input or output location was rejected."""

    DOES_NOT_EXIST = "does not exist"
    NOT_A_DIRECTORY = "is not a directory"
    NOT_A_FILE = "is not a file"
    IS_EMPTY = "is empty"
    NOT_EMPTY = "is not empty"


class PathValidationError(ClassgenError):
    """An input, output, template, or extensions location is unusable."""

    kind = ErrorKind.INPUT_LOCATION

    def __init__(self, role: str, reason: PathReason, path: Path) -> None:
        super().__init__(f"{role} '{path}' {reason.value}", identifier=str(path))
        self.role = role
        self.reason = reason
        self.path = path


class SchemaParseError(ClassgenError):
    """A schema document is malformed."""

    kind = ErrorKind.SCHEMA_PARSE

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Invalid schema document '{source}': {message}", identifier=source)
        self.source = source


class TypeExpressionError(ClassgenError, ValueError):
    """A property type expression does not match the type grammar."""

    kind = ErrorKind.SCHEMA_PARSE

    def __init__(self, expression: str, message: str) -> None:
        super().__init__(f"Malformed type expression {expression!r}: {message}", identifier=expression)
        self.expression = expression


class TypeValidationError(ClassgenError):
    """Base class for errors found while validating the merged type graph."""

    kind = ErrorKind.VALIDATION


class DuplicateTypeError(TypeValidationError):
    """Two data types share the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate type defined: '{name}'", identifier=name)
        self.name = name


class UndefinedTypeError(TypeValidationError):
    """A property or enum references a type that is neither defined nor predefined."""

    def __init__(self, name: str, owner: str | None = None, property_name: str | None = None) -> None:
        location = ""
        if owner is not None:
            location = f" in property '{property_name}' of '{owner}'" if property_name else f" in '{owner}'"
        super().__init__(f"Undefined type used: '{name}'{location}", identifier=name)
        self.name = name
        self.owner = owner
        self.property_name = property_name


class ExtensionError(ClassgenError):
    """An extension used the host API incorrectly."""

    kind = ErrorKind.EXTENSION


class ExtensionLoadError(ExtensionError):
    """An extension script raised while being evaluated. Fatal for the run."""

    def __init__(self, script: str, cause: BaseException) -> None:
        super().__init__(f"Extension script '{script}' failed: {cause}", identifier=script)
        self.script = script
        self.cause = cause


class ExtensionCallError(ExtensionError):
    """A script function backing a filter or tag failed or returned an unusable value."""

    def __init__(self, function_name: str, message: str) -> None:
        super().__init__(f"Script function '{function_name}': {message}", identifier=function_name)
        self.function_name = function_name


class RenderError(ClassgenError):
    """Rendering the template for one data type failed."""

    kind = ErrorKind.RENDERING

    def __init__(self, data_type_name: str, description: str) -> None:
        super().__init__(f"Failed to render '{data_type_name}': {description}", identifier=data_type_name)
        self.data_type_name = data_type_name
        self.description = description
