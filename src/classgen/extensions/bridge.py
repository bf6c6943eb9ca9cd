# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extension scripts and the host API exposed to them.

Extension scripts are Python source files evaluated, in order, inside one
shared namespace per generation run. The namespace exposes a fixed host API
and nothing else from classgen:

``log(message)``
    Forward a message to the ``classgen.extensions`` logger.
``registerPredefinedTypes(names)``
    Replace the set of type names accepted without a definition.
``registerFilter(filterName, scriptFunctionName, resultKind)``
    Expose a script function as a template filter. ``resultKind`` is one of
    ``array``, ``boolean``, ``date``, ``number``, ``object``, ``string``.
``registerTag(tagName, scriptFunctionName)``
    Expose a script function as a template tag. The function receives the
    template context as a dict and must return a string.

Script functions are looked up by name when a filter or tag is invoked, so a
later script may redefine or delete them. Registrations are only accepted
until the bridge is frozen, which happens before rendering starts.
"""

from __future__ import annotations

import builtins
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from classgen.errors import ExtensionCallError, ExtensionError, ExtensionLoadError
from classgen.extensions.marshal import ResultKind, convert_result
from classgen.logging_config import get_logger

logger = get_logger(__name__)
script_logger = get_logger("classgen.extensions")

# ###############
# Public Interface
# ###############

SCRIPT_SUFFIX = ".py"
SCRIPT_NAMESPACE_NAME = "__classgen_extensions__"


@dataclass(frozen=True)
class FilterRegistration:
    """A template filter backed by a script function."""

    name: str
    function_name: str
    result_kind: ResultKind


@dataclass(frozen=True)
class TagRegistration:
    """A template tag backed by a script function."""

    name: str
    function_name: str


class ExtensionBridge:
    """Owns the script namespace and the registrations made through it."""

    def __init__(self) -> None:
        self._predefined_types: tuple[str, ...] = ()
        self._filters: dict[str, FilterRegistration] = {}
        self._tags: dict[str, TagRegistration] = {}
        self._frozen = False
        self._namespace: dict[str, Any] = self._new_namespace()

    # -------- loading --------

    def load_directory(self, directory: Path) -> list[Path]:
        """Evaluate every ``*.py`` script in *directory*, sorted by file name."""
        scripts = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == SCRIPT_SUFFIX)
        self.load_scripts(scripts)
        return scripts

    def load_scripts(self, paths: Iterable[Path]) -> None:
        """Evaluate the given scripts in order."""
        for path in paths:
            self.load_script(path)

    def load_script(self, path: Path) -> None:
        """Read and evaluate one extension script.

        Raises:
            ExtensionLoadError: If the script cannot be read or raises while evaluated.
        """
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.critical("Cannot read extension script %s: %s", path, exc)
            raise ExtensionLoadError(str(path), exc) from exc
        self.load_source(source, filename=str(path))

    def load_source(self, source: str, filename: str = "<extension>") -> None:
        """Evaluate extension script source in the shared namespace.

        Raises:
            ExtensionLoadError: If compiling or running the script raises.
        """
        if self._frozen:
            raise ExtensionError("Extensions cannot be loaded after rendering has started", identifier=filename)
        logger.info("Loading extension: %s", filename)
        try:
            code = compile(source, filename, "exec")
            exec(code, self._namespace)
        except Exception as exc:
            logger.critical("Extension script %s failed: %s", filename, exc)
            raise ExtensionLoadError(filename, exc) from exc

    def freeze(self) -> None:
        """Stop accepting registrations; called once loading is complete."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -------- registrations --------

    @property
    def predefined_types(self) -> tuple[str, ...]:
        return self._predefined_types

    @property
    def filters(self) -> Mapping[str, FilterRegistration]:
        return dict(self._filters)

    @property
    def tags(self) -> Mapping[str, TagRegistration]:
        return dict(self._tags)

    # -------- host API --------

    def log(self, message: Any) -> None:
        script_logger.info("%s", message)

    def register_predefined_types(self, names: Iterable[str]) -> None:
        self._check_not_frozen("registerPredefinedTypes")
        if isinstance(names, str):
            raise ExtensionError("registerPredefinedTypes expects a list of type names", identifier=names)
        type_names = tuple(names)
        for name in type_names:
            if not isinstance(name, str):
                raise ExtensionError(f"Predefined type names must be strings, got {name!r}", identifier=str(name))
        self._predefined_types = type_names
        logger.debug("Predefined types: %s", ", ".join(type_names))

    def register_filter(self, filter_name: str, function_name: str, result_kind: str) -> None:
        self._check_not_frozen("registerFilter")
        _require_names("registerFilter", filter_name, function_name, result_kind)
        try:
            kind = ResultKind.parse(result_kind)
        except ValueError as exc:
            raise ExtensionError(f"Filter '{filter_name}': {exc}", identifier=filter_name) from exc
        self._filters[filter_name] = FilterRegistration(filter_name, function_name, kind)
        logger.debug("Registered filter '%s' -> %s (%s)", filter_name, function_name, kind.value)

    def register_tag(self, tag_name: str, function_name: str) -> None:
        self._check_not_frozen("registerTag")
        _require_names("registerTag", tag_name, function_name)
        self._tags[tag_name] = TagRegistration(tag_name, function_name)
        logger.debug("Registered tag '%s' -> %s", tag_name, function_name)

    # -------- invocation --------

    def call_filter(self, filter_name: str, *args: Any) -> Any:
        """Invoke a registered filter with its input value (or no argument).

        Raises:
            ExtensionCallError: If the filter or its function is unknown, the
                function raises, or its result cannot be converted.
        """
        registration = self._filters.get(filter_name)
        if registration is None:
            raise ExtensionCallError(filter_name, f"no filter named '{filter_name}' is registered")
        result = self._call(registration.function_name, args)
        try:
            return convert_result(result, registration.result_kind)
        except ValueError as exc:
            raise ExtensionCallError(
                registration.function_name, f"cannot convert result to {registration.result_kind.value}: {exc}"
            ) from exc

    def call_tag(self, tag_name: str, context: dict[str, Any]) -> str:
        """Invoke a registered tag with the flattened template context.

        Raises:
            ExtensionCallError: If the tag or its function is unknown, the
                function raises, or it does not return a string.
        """
        registration = self._tags.get(tag_name)
        if registration is None:
            raise ExtensionCallError(tag_name, f"no tag named '{tag_name}' is registered")
        result = self._call(registration.function_name, (context,))
        if not isinstance(result, str):
            raise ExtensionCallError(
                registration.function_name, f"tag '{tag_name}' must return a string, got {type(result).__name__}"
            )
        return result

    # ################
    # Implementation
    # ################

    def _new_namespace(self) -> dict[str, Any]:
        return {
            "__name__": SCRIPT_NAMESPACE_NAME,
            "__builtins__": builtins,
            "log": self.log,
            "registerPredefinedTypes": self.register_predefined_types,
            "registerPreDefinedTypes": self.register_predefined_types,
            "registerFilter": self.register_filter,
            "registerTag": self.register_tag,
        }

    def _check_not_frozen(self, operation: str) -> None:
        if self._frozen:
            raise ExtensionError(f"{operation} is not allowed after rendering has started", identifier=operation)

    def _call(self, function_name: str, args: tuple[Any, ...]) -> Any:
        function = self._namespace.get(function_name)
        if function is None or not callable(function):
            raise ExtensionCallError(function_name, "function not found")
        try:
            return function(*args)
        except ExtensionCallError:
            raise
        except Exception as exc:
            raise ExtensionCallError(function_name, f"raised {type(exc).__name__}: {exc}") from exc


def _require_names(operation: str, *names: Any) -> None:
    for name in names:
        if not isinstance(name, str) or not name:
            raise ExtensionError(f"{operation} expects non-empty strings, got {name!r}", identifier=str(name))
