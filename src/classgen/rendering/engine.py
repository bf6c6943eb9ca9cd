# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""jinja2 environment setup and rendering of one data type at a time."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Undefined

from classgen.errors import ExtensionCallError, RenderError
from classgen.extensions.bridge import ExtensionBridge
from classgen.extensions.tags import ScriptTagExtension
from classgen.model.entities import DataType
from classgen.rendering.context import build_context

# ###############
# Public Interface
# ###############


class TemplateRenderer:
    """Renders a single template file once per data type.

    Undefined variables are errors. Script filters registered with the
    extension bridge override the built-in filters of the same name.
    """

    def __init__(self, template_file: Path, bridge: ExtensionBridge | None = None) -> None:
        self.template_file = template_file
        self.bridge = bridge or ExtensionBridge()
        self._env = create_environment(template_file.parent, self.bridge)

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, data_type: DataType) -> str:
        """Render the template with the context of *data_type*.

        Raises:
            RenderError: If the template cannot be loaded or rendering fails,
                including failures inside script filters and tags.
        """
        return self.render_context(data_type.name, build_context(data_type))

    def render_context(self, name: str, context: dict[str, Any]) -> str:
        try:
            template = self._env.get_template(self.template_file.name)
            return template.render(**context)
        except Exception as exc:
            raise RenderError(name, str(exc)) from exc


def create_environment(template_dir: Path, bridge: ExtensionBridge) -> Environment:
    """Create the jinja2 environment used for code generation."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        undefined=StrictUndefined,
        extensions=[ScriptTagExtension],
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.extension_bridge = bridge  # type: ignore[attr-defined]

    env.filters["snake_case"] = snake_case
    env.filters["camel_case"] = camel_case
    env.filters["pascal_case"] = pascal_case
    for name in bridge.filters:
        env.filters[name] = _script_filter(bridge, name)
    return env


def snake_case(value: Any) -> str:
    """Convert a name to snake_case."""
    s1 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", str(value))
    s2 = re.sub(r"[-\s]+", "_", s1)
    return s2.lower()


def camel_case(value: Any) -> str:
    """Convert a name to camelCase."""
    parts = [p for p in snake_case(value).split("_") if p]
    if not parts:
        return str(value)
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


def pascal_case(value: Any) -> str:
    """Convert a name to PascalCase."""
    return "".join(p.capitalize() for p in snake_case(value).split("_") if p)


# ################
# Implementation
# ################


def _script_filter(bridge: ExtensionBridge, filter_name: str) -> Callable[..., Any]:
    """Wrap a registered filter so jinja2 can call it.

    An undefined input value calls the script function without arguments.
    """

    def script_filter(value: Any, *args: Any) -> Any:
        if args:
            raise ExtensionCallError(filter_name, "script filters take no arguments")
        if isinstance(value, Undefined):
            return bridge.call_filter(filter_name)
        return bridge.call_filter(filter_name, value)

    script_filter.__name__ = filter_name
    return script_filter
