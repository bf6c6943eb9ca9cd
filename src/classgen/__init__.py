# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""classgen - generate source files from data type schemas through templates."""

__version__ = "0.1.0"
