# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data types described by schema documents.

A data type is either a class (an ordered list of typed properties) or an enum
(a backing scalar type and an ordered list of named values). Every entity keeps
the source keys it does not model in ``model_extra`` so that templates written
against a richer schema still see them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, ValidationInfo, field_validator, model_validator
from pydantic import Field as _Field

from classgen.model.types import TypeExpression, parse_type_expression

# ###############
# Public Interface
# ###############

CLASS_KIND = "class"
ENUM_KIND = "enum"


@dataclass(frozen=True)
class ParseOptions:
    """Ordering policy applied while constructing data types.

    Attributes:
        alphabetize_properties: Sort class properties by name (case-sensitive).
        alphabetize_enum_values: Sort enum values by name (case-insensitive).
    """

    alphabetize_properties: bool = False
    alphabetize_enum_values: bool = False

    def as_context(self) -> dict[str, Any]:
        """Return the pydantic validation context carrying these options."""
        return {"parse_options": self}


class _SchemaModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    @property
    def extras(self) -> dict[str, Any]:
        """Source keys that are not part of the model, in source order."""
        return dict(self.model_extra or {})


class Property(_SchemaModel):
    """A named, typed field of a class.

    ``data_type`` holds the full type expression, e.g. ``"[User]?"``.
    """

    name: str
    data_type: str = _Field(alias="dataType")
    description: str | None = None

    @field_validator("data_type")
    @classmethod
    def _check_type_expression(cls, value: str) -> str:
        parse_type_expression(value)
        return value

    @property
    def type_expression(self) -> TypeExpression:
        return parse_type_expression(self.data_type)

    @property
    def is_collection(self) -> bool:
        return self.type_expression.is_collection

    @property
    def is_optional(self) -> bool:
        return self.type_expression.is_optional

    @property
    def raw_data_type(self) -> str:
        """The type name with collection brackets and optional marker removed."""
        return self.type_expression.raw_data_type


class Value(_SchemaModel):
    """A named value of an enum; ``value`` is the serialized wire form."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    value: str


class ClassType(_SchemaModel):
    """A data type with an ordered list of properties."""

    name: str
    kind: Literal["class"] = _Field(default=CLASS_KIND, alias="type")
    properties: list[Property]

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _check_data_type_name(value)

    @field_validator("properties")
    @classmethod
    def _order_properties(cls, value: list[Property], info: ValidationInfo) -> list[Property]:
        if _parse_options(info).alphabetize_properties:
            return sorted(value, key=lambda p: p.name)
        return value

    @model_validator(mode="after")
    def _check_unique_property_names(self) -> ClassType:
        seen: set[str] = set()
        for prop in self.properties:
            if prop.name in seen:
                raise ValueError(f"duplicate property '{prop.name}' in class '{self.name}'")
            seen.add(prop.name)
        return self

    def referenced_types(self) -> Iterable[tuple[str, str | None]]:
        """Yield ``(raw type name, property name)`` for every property."""
        for prop in self.properties:
            yield prop.raw_data_type, prop.name


class EnumType(_SchemaModel):
    """A data type with a backing scalar type and an ordered list of values."""

    name: str
    kind: Literal["enum"] = _Field(default=ENUM_KIND, alias="type")
    raw_data_type: str = _Field(alias="dataType")
    values: list[Value]

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _check_data_type_name(value)

    @field_validator("values")
    @classmethod
    def _order_values(cls, value: list[Value], info: ValidationInfo) -> list[Value]:
        if _parse_options(info).alphabetize_enum_values:
            return sorted(value, key=lambda v: v.name.lower())
        return value

    def referenced_types(self) -> Iterable[tuple[str, str | None]]:
        """Yield the backing type of the enum."""
        yield self.raw_data_type, None


def _data_type_kind(value: Any) -> str | None:
    """Read the kind discriminant of a raw mapping or a constructed data type."""
    if isinstance(value, dict):
        kind = value.get("type", CLASS_KIND)
        return kind if isinstance(kind, str) else None
    return getattr(value, "kind", None)


# A data type is decoded by reading its "type" key (default "class") before
# the kind-specific payload is validated.
DataType = Annotated[
    Annotated[ClassType, Tag(CLASS_KIND)] | Annotated[EnumType, Tag(ENUM_KIND)],
    Discriminator(_data_type_kind),
]


class Schema(_SchemaModel):
    """The contents of one schema document, or several merged together."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    version: str
    data_types: list[DataType] = _Field(alias="dataTypes")


def decode_schema(data: Any, options: ParseOptions | None = None) -> Schema:
    """Validate a raw schema document into a :class:`Schema`.

    Raises:
        pydantic.ValidationError: If the document or any type expression is malformed.
    """
    return Schema.model_validate(data, context=(options or ParseOptions()).as_context())


# ################
# Implementation
# ################


def _check_data_type_name(name: str) -> str:
    # Data type names become output file names.
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise ValueError(f"data type name {name!r} must be usable as a file name")
    return name


def _parse_options(info: ValidationInfo) -> ParseOptions:
    context = info.context or {}
    options = context.get("parse_options")
    return options if isinstance(options, ParseOptions) else ParseOptions()
