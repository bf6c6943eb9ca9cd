# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for extension script loading and the host API."""

import datetime as dt
import logging
from pathlib import Path

import pytest

from classgen.errors import ErrorKind, ExtensionCallError, ExtensionError, ExtensionLoadError
from classgen.extensions.bridge import ExtensionBridge, FilterRegistration, TagRegistration
from classgen.extensions.marshal import ResultKind

# ###############
# Helpers
# ###############


def _loaded(*sources: str) -> ExtensionBridge:
    bridge = ExtensionBridge()
    for index, source in enumerate(sources):
        bridge.load_source(source, filename=f"script{index}.py")
    return bridge


# ###############
# Host API
# ###############


def test_log_forwards_to_logger(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="classgen"):
        _loaded('log("hello from script")')
    records = [r for r in caplog.records if r.name == "classgen.extensions"]
    assert [r.getMessage() for r in records] == ["hello from script"]


def test_register_predefined_types_last_writer_wins() -> None:
    bridge = _loaded(
        'registerPredefinedTypes(["Int", "String"])',
        'registerPredefinedTypes(["Bool"])',
    )
    assert bridge.predefined_types == ("Bool",)


def test_register_predefined_types_alias() -> None:
    bridge = _loaded('registerPreDefinedTypes(["Date", "Decimal"])')
    assert bridge.predefined_types == ("Date", "Decimal")


def test_predefined_types_empty_by_default() -> None:
    assert ExtensionBridge().predefined_types == ()


def test_register_predefined_types_rejects_a_string() -> None:
    with pytest.raises(ExtensionLoadError) as exc_info:
        _loaded('registerPredefinedTypes("Int")')
    assert isinstance(exc_info.value.cause, ExtensionError)


def test_register_filter_and_tag() -> None:
    bridge = _loaded(
        """
def f(value):
    return value

def t(context):
    return ""

registerFilter("same", "f", "object")
registerTag("nothing", "t")
"""
    )
    assert bridge.filters == {"same": FilterRegistration("same", "f", ResultKind.OBJECT)}
    assert bridge.tags == {"nothing": TagRegistration("nothing", "t")}


@pytest.mark.parametrize(
    "source",
    [
        'registerTag(1, "t")',
        'registerTag("t", None)',
        'registerFilter(["f"], "f", "string")',
        'registerFilter("f", "", "string")',
    ],
)
def test_registration_names_must_be_strings(source: str) -> None:
    with pytest.raises(ExtensionLoadError) as exc_info:
        _loaded(source)
    assert isinstance(exc_info.value.cause, ExtensionError)
    assert "expects non-empty strings" in str(exc_info.value)


def test_later_script_overwrites_registration() -> None:
    bridge = _loaded(
        'registerFilter("fmt", "first", "string")',
        'registerFilter("fmt", "second", "number")',
    )
    assert bridge.filters["fmt"] == FilterRegistration("fmt", "second", ResultKind.NUMBER)


def test_unknown_result_kind_fails_loading() -> None:
    with pytest.raises(ExtensionLoadError, match="unknown result kind"):
        _loaded('registerFilter("f", "f", "integer")')


def test_scripts_share_one_namespace() -> None:
    bridge = _loaded(
        "PREFIX = 'm_'",
        """
def prefixed(value):
    return PREFIX + value

registerFilter("prefixed", "prefixed", "string")
""",
    )
    assert bridge.call_filter("prefixed", "name") == "m_name"


# ###############
# Loading
# ###############


def test_script_error_is_fatal(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(ExtensionLoadError) as exc_info:
        _loaded("raise RuntimeError('bad plugin')")
    error = exc_info.value
    assert error.kind is ErrorKind.EXTENSION
    assert error.script == "script0.py"
    assert isinstance(error.cause, RuntimeError)
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)


def test_syntax_error_is_fatal() -> None:
    with pytest.raises(ExtensionLoadError) as exc_info:
        _loaded("def broken(:\n    pass")
    assert isinstance(exc_info.value.cause, SyntaxError)


def test_load_directory_in_name_order(tmp_path: Path) -> None:
    (tmp_path / "b.py").write_text('registerPredefinedTypes(["FromB"])', encoding="utf-8")
    (tmp_path / "a.py").write_text('registerPredefinedTypes(["FromA"])', encoding="utf-8")
    (tmp_path / "README.md").write_text("not a script", encoding="utf-8")

    bridge = ExtensionBridge()
    loaded = bridge.load_directory(tmp_path)

    assert [p.name for p in loaded] == ["a.py", "b.py"]
    assert bridge.predefined_types == ("FromB",)


def test_unreadable_script(tmp_path: Path) -> None:
    with pytest.raises(ExtensionLoadError):
        ExtensionBridge().load_script(tmp_path / "missing.py")


def test_frozen_bridge_rejects_registrations() -> None:
    bridge = _loaded()
    bridge.freeze()
    assert bridge.frozen
    with pytest.raises(ExtensionError):
        bridge.register_tag("late", "late")
    with pytest.raises(ExtensionError):
        bridge.load_source("x = 1")


# ###############
# Invocation
# ###############


def test_call_filter_converts_result() -> None:
    bridge = _loaded(
        """
def length(value):
    return str(len(value))

def today(value):
    return "2024-05-01T10:30:00"

registerFilter("length", "length", "number")
registerFilter("today", "today", "date")
"""
    )
    assert bridge.call_filter("length", "abcd") == 4
    assert bridge.call_filter("today", None) == dt.datetime(2024, 5, 1, 10, 30)


def test_call_filter_without_argument() -> None:
    bridge = _loaded(
        """
def constant():
    return [1, 2]

registerFilter("constant", "constant", "array")
"""
    )
    assert bridge.call_filter("constant") == [1, 2]


def test_call_filter_unconvertible_result() -> None:
    bridge = _loaded(
        """
def words(value):
    return "not a list"

registerFilter("words", "words", "array")
"""
    )
    with pytest.raises(ExtensionCallError, match="cannot convert result to array"):
        bridge.call_filter("words", "x")


def test_call_filter_out_of_range_date() -> None:
    bridge = _loaded(
        """
def far_future(value):
    return 10**20

registerFilter("far", "far_future", "date")
"""
    )
    with pytest.raises(ExtensionCallError, match="cannot convert result to date"):
        bridge.call_filter("far", 1)


def test_call_unknown_filter() -> None:
    with pytest.raises(ExtensionCallError, match="no filter named"):
        ExtensionBridge().call_filter("nope", "x")


def test_call_filter_missing_function() -> None:
    bridge = _loaded('registerFilter("ghost", "ghost", "string")')
    with pytest.raises(ExtensionCallError) as exc_info:
        bridge.call_filter("ghost", "x")
    assert exc_info.value.function_name == "ghost"


def test_call_filter_non_callable_name() -> None:
    bridge = _loaded('VALUE = 3\nregisterFilter("value", "VALUE", "number")')
    with pytest.raises(ExtensionCallError, match="function not found"):
        bridge.call_filter("value", "x")


def test_call_tag() -> None:
    bridge = _loaded(
        """
def greet(context):
    return "hello " + context["name"]

registerTag("greet", "greet")
"""
    )
    assert bridge.call_tag("greet", {"name": "User"}) == "hello User"


def test_call_tag_raising_function() -> None:
    bridge = _loaded(
        """
def broken(context):
    return context["missing"]

registerTag("broken", "broken")
"""
    )
    with pytest.raises(ExtensionCallError, match="KeyError"):
        bridge.call_tag("broken", {})
