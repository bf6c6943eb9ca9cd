# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the classgen.yaml configuration module."""

from pathlib import Path

import pytest

from classgen.errors import ErrorKind
from classgen.workspace import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    find_workspace_config,
    load_workspace_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a configuration file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """Every key is parsed and relative paths are resolved against the file's directory."""
    content = """\
schemas-directory: schemas
template: templates/model.swift
output-directory: ../generated
extensions-directory: plugins
output-extension: .swift
alphabetize-properties: true
alphabetize-enum-values: false
remove-output-files: true
"""
    config = load_workspace_config(_write_config(tmp_path, content))
    base = tmp_path.resolve()

    assert config.schemas_directory == base / "schemas"
    assert config.template == base / "templates" / "model.swift"
    assert config.output_directory == base.parent / "generated"
    assert config.extensions_directory == base / "plugins"
    assert config.output_extension == ".swift"
    assert config.alphabetize_properties is True
    assert config.alphabetize_enum_values is False
    assert config.remove_output_files is True


def test_partial_config_keeps_defaults(tmp_path: Path) -> None:
    config = load_workspace_config(_write_config(tmp_path, "template: model.txt\n"))

    assert config.template == tmp_path.resolve() / "model.txt"
    assert config.schemas_directory is None
    assert config.output_extension is None
    assert config.alphabetize_properties is False


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    assert load_workspace_config(_write_config(tmp_path, "")) == WorkspaceConfig()


def test_absolute_path_is_kept(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere"
    config = load_workspace_config(_write_config(tmp_path, f"output-directory: '{target}'\n"))
    assert config.output_directory == target.resolve()


def test_find_workspace_config(tmp_path: Path) -> None:
    assert find_workspace_config(tmp_path) is None
    config_file = _write_config(tmp_path, "")
    assert find_workspace_config(tmp_path) == config_file


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="not found") as exc_info:
        load_workspace_config(tmp_path / CONFIG_FILE_NAME)
    assert exc_info.value.kind is ErrorKind.CONFIGURATION


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="Invalid YAML"):
        load_workspace_config(_write_config(tmp_path, "template: [unclosed\n"))


def test_non_mapping_document(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="mapping"):
        load_workspace_config(_write_config(tmp_path, "- schemas\n- template\n"))


def test_unknown_key(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="unknown configuration key 'templates'") as exc_info:
        load_workspace_config(_write_config(tmp_path, "templates: model.txt\n"))
    assert exc_info.value.identifier == "templates"


@pytest.mark.parametrize(
    "content",
    [
        "template: 3\n",
        "template: ''\n",
        "output-extension: [swift]\n",
    ],
)
def test_wrongly_typed_string(tmp_path: Path, content: str) -> None:
    with pytest.raises(WorkspaceConfigError, match="non-empty string"):
        load_workspace_config(_write_config(tmp_path, content))


def test_wrongly_typed_flag(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceConfigError, match="true or false"):
        load_workspace_config(_write_config(tmp_path, "alphabetize-properties: 'yes please'\n"))
