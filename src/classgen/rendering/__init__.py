# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Template contexts and rendering."""

from classgen.rendering.context import build_context, property_context
from classgen.rendering.engine import TemplateRenderer, create_environment

__all__ = [
    "build_context",
    "property_context",
    "TemplateRenderer",
    "create_environment",
]
