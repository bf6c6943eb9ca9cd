# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""jinja2 extension that turns script-registered tags into template statements.

A registered tag is used as a statement without arguments::

    {% copyrightHeader %}

The extension reads the tag names from the environment's ``extension_bridge``
each time a template is parsed, and at render time calls the tag's script
function with the current template context, locals included.
"""

from __future__ import annotations

from typing import Any

from jinja2 import nodes
from jinja2.environment import Environment
from jinja2.ext import Extension
from jinja2.parser import Parser
from jinja2.runtime import Context

# ###############
# Public Interface
# ###############


class ScriptTagExtension(Extension):
    """Dispatch ``{% name %}`` statements to the extension bridge."""

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        environment.extend(extension_bridge=None)

    @property  # type: ignore[override]
    def tags(self) -> set[str]:
        bridge = getattr(self.environment, "extension_bridge", None)
        if bridge is None:
            return set()
        return set(bridge.tags)

    def parse(self, parser: Parser) -> nodes.Node:
        token = next(parser.stream)
        call = self.call_method(
            "_render_tag",
            [nodes.Const(token.value), nodes.DerivedContextReference()],
            lineno=token.lineno,
        )
        return nodes.Output([call], lineno=token.lineno)

    def _render_tag(self, tag_name: str, context: Context) -> str:
        return self.environment.extension_bridge.call_tag(tag_name, _flatten(context, self.environment))


# ################
# Implementation
# ################


def _flatten(context: Context, environment: Environment) -> dict[str, Any]:
    """Return the template variables of *context*, without the environment globals."""
    return {
        key: value
        for key, value in context.get_all().items()
        if environment.globals.get(key) is not value
    }
