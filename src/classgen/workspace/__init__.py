# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for classgen."""

from classgen.workspace.config import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    find_workspace_config,
    load_workspace_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "WorkspaceConfig",
    "WorkspaceConfigError",
    "find_workspace_config",
    "load_workspace_config",
]
