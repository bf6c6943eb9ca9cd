# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extension scripts: host API, filter/tag registration, result conversion."""

from classgen.extensions.bridge import ExtensionBridge, FilterRegistration, TagRegistration
from classgen.extensions.marshal import ResultKind, convert_result
from classgen.extensions.tags import ScriptTagExtension

__all__ = [
    "ExtensionBridge",
    "FilterRegistration",
    "TagRegistration",
    "ResultKind",
    "convert_result",
    "ScriptTagExtension",
]
