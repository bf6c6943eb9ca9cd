# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of data types into plain template contexts.

The context of a data type is a ``dict`` whose nested lists (properties,
values) hold further dicts. Source keys that the model does not know about are
copied first so that modeled and derived fields take precedence over them.
"""

from __future__ import annotations

from typing import Any

from classgen.model.entities import ClassType, DataType, EnumType, Property, Value

# ###############
# Public Interface
# ###############


def build_context(data_type: DataType) -> dict[str, Any]:
    """Return the template context for a single data type."""
    if isinstance(data_type, ClassType):
        return _class_to_dict(data_type)
    if isinstance(data_type, EnumType):
        return _enum_to_dict(data_type)
    raise TypeError(f"Unsupported data type: {type(data_type).__name__}")


def property_context(prop: Property) -> dict[str, Any]:
    """Return the template context of one property, derived fields included."""
    d = prop.extras
    d.update(
        {
            "name": prop.name,
            "dataType": prop.data_type,
            "description": prop.description,
            "isCollection": prop.is_collection,
            "isOptional": prop.is_optional,
            "rawDataType": prop.raw_data_type,
        }
    )
    return d


# ################
# Implementation
# ################


def _class_to_dict(class_type: ClassType) -> dict[str, Any]:
    d = class_type.extras
    d.update(
        {
            "name": class_type.name,
            "type": class_type.kind,
            "properties": [property_context(p) for p in class_type.properties],
        }
    )
    return d


def _enum_to_dict(enum_type: EnumType) -> dict[str, Any]:
    d = enum_type.extras
    d.update(
        {
            "name": enum_type.name,
            "type": enum_type.kind,
            "dataType": enum_type.raw_data_type,
            "rawDataType": enum_type.raw_data_type,
            "values": [_value_to_dict(v) for v in enum_type.values],
        }
    )
    return d


def _value_to_dict(value: Value) -> dict[str, Any]:
    d = value.extras
    d.update({"name": value.name, "value": value.value})
    return d
