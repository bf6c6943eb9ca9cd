# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the classgen project configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from classgen.errors import ClassgenError, ErrorKind

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = "classgen.yaml"


class WorkspaceConfigError(ClassgenError):
    """Raised when a configuration file is invalid or cannot be loaded."""

    kind = ErrorKind.CONFIGURATION


@dataclass
class WorkspaceConfig:
    """Generation settings read from a ``classgen.yaml`` file.

    Every setting is optional; command line options take precedence. Paths are
    absolute, resolved against the directory holding the configuration file.

    Attributes:
        schemas_directory: Directory holding the schema documents.
        template: The template file rendered for every data type.
        output_directory: Directory receiving the generated files.
        extensions_directory: Directory holding extension scripts.
        output_extension: Suffix of generated files, e.g. ``.swift``.
        alphabetize_properties: Sort class properties by name.
        alphabetize_enum_values: Sort enum values by name.
        remove_output_files: Empty a non-empty output directory before generating.
    """

    schemas_directory: Path | None = None
    template: Path | None = None
    output_directory: Path | None = None
    extensions_directory: Path | None = None
    output_extension: str | None = None
    alphabetize_properties: bool = False
    alphabetize_enum_values: bool = False
    remove_output_files: bool = False


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse a classgen configuration file.

    Args:
        path: Path to the ``classgen.yaml`` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Configuration file not found: {path}", identifier=str(path)) from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read configuration file: {exc}", identifier=str(path)) from exc

    return _parse_workspace_config(text, base_directory=path.resolve().parent, source_label=str(path))


def find_workspace_config(directory: Path) -> Path | None:
    """Return the configuration file in *directory*, if there is one."""
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


# ################
# Implementation
# ################

_PATH_KEYS = {
    "schemas-directory": "schemas_directory",
    "template": "template",
    "output-directory": "output_directory",
    "extensions-directory": "extensions_directory",
}
_FLAG_KEYS = {
    "alphabetize-properties": "alphabetize_properties",
    "alphabetize-enum-values": "alphabetize_enum_values",
    "remove-output-files": "remove_output_files",
}
_STRING_KEYS = {"output-extension": "output_extension"}


def _parse_workspace_config(
    text: str,
    base_directory: Path,
    source_label: str = "<string>",
) -> WorkspaceConfig:
    """Parse configuration YAML text into a WorkspaceConfig.

    Raises:
        WorkspaceConfigError: If the YAML is invalid, a key is unknown, or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}", identifier=source_label) from exc

    if data is None:
        return WorkspaceConfig()
    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: configuration must be a YAML mapping", identifier=source_label)

    known = _PATH_KEYS.keys() | _FLAG_KEYS.keys() | _STRING_KEYS.keys()
    for key in data:
        if key not in known:
            raise WorkspaceConfigError(f"{source_label}: unknown configuration key '{key}'", identifier=str(key))

    config = WorkspaceConfig()
    for key, attribute in _PATH_KEYS.items():
        if key in data:
            value = _require_string(data, key, source_label)
            setattr(config, attribute, (base_directory / value).resolve())
    for key, attribute in _FLAG_KEYS.items():
        if key in data:
            setattr(config, attribute, _require_bool(data, key, source_label))
    for key, attribute in _STRING_KEYS.items():
        if key in data:
            setattr(config, attribute, _require_string(data, key, source_label))
    return config


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a non-empty string", identifier=key)
    return value


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be true or false", identifier=key)
    return value
