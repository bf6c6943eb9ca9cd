# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of script return values into template values.

Every filter declares a :class:`ResultKind`; the value returned by its script
function is converted according to that kind only. Values that cannot be
converted raise :class:`ValueError`.
"""

from __future__ import annotations

import datetime as _dt
import enum
import json
from collections.abc import Mapping
from typing import Any

# ###############
# Public Interface
# ###############


class ResultKind(enum.Enum):
    """How a filter result is converted before it reaches the template."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    DATE = "date"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"

    @classmethod
    def parse(cls, value: str) -> ResultKind:
        """Look up a kind by its name, e.g. ``"string"``.

        Raises:
            ValueError: If *value* is not one of the known kinds.
        """
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(k.value for k in cls)
            raise ValueError(f"unknown result kind {value!r} (expected one of: {names})") from None


def convert_result(value: Any, kind: ResultKind) -> Any:
    """Convert a script return value to the host value described by *kind*."""
    return _CONVERTERS[kind](value)


# ################
# Implementation
# ################


def _to_array(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"expected a list, got {type(value).__name__}")


def _to_boolean(value: Any) -> bool:
    return bool(value)


def _to_date(value: Any) -> _dt.date:
    if isinstance(value, _dt.date):
        return value
    if isinstance(value, bool):
        raise ValueError("expected a date, got bool")
    if isinstance(value, (int, float)):
        try:
            return _dt.datetime.fromtimestamp(value, tz=_dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"epoch seconds out of range: {value!r}") from None
    if isinstance(value, str):
        try:
            return _dt.datetime.fromisoformat(value)
        except ValueError:
            raise ValueError(f"expected an ISO-8601 date, got {value!r}") from None
    raise ValueError(f"expected a date, got {type(value).__name__}")


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"expected a number, got {value!r}") from None
    raise ValueError(f"expected a number, got {type(value).__name__}")


def _to_object(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    raise ValueError(f"expected a mapping, got {type(value).__name__}")


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(dict(value) if isinstance(value, Mapping) else list(value), default=str)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"cannot serialize {type(value).__name__} as JSON: {exc}") from None
    return str(value)


_CONVERTERS = {
    ResultKind.ARRAY: _to_array,
    ResultKind.BOOLEAN: _to_boolean,
    ResultKind.DATE: _to_date,
    ResultKind.NUMBER: _to_number,
    ResultKind.OBJECT: _to_object,
    ResultKind.STRING: _to_string,
}
