# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the logging setup."""

import logging
from collections.abc import Iterator

import pytest

from classgen.logging_config import LOG_FORMAT, ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_get_logger_prefixes_names() -> None:
    assert get_logger("classgen.generator").name == "classgen.generator"
    assert get_logger("classgen").name == "classgen"
    assert get_logger("plugins").name == "classgen.plugins"


def test_configure_logging_installs_one_handler() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    installed = [h for h in logger.handlers if getattr(h, "_classgen_handler", False)]
    assert len(installed) == 1
    assert installed[0].formatter._fmt == LOG_FORMAT
    assert logger.level == logging.DEBUG


def test_configure_logging_default_level() -> None:
    assert configure_logging().level == logging.INFO
