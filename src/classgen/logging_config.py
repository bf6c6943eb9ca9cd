# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process logging setup."""

from __future__ import annotations

import logging
import sys

# ###############
# Public Interface
# ###############

ROOT_LOGGER_NAME = "classgen"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``classgen`` hierarchy."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Install a single stderr handler on the ``classgen`` logger.

    Calling this more than once replaces the previously installed handler.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_classgen_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._classgen_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
