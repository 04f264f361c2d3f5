"""Tests for the library logger configuration."""

from __future__ import annotations

import logging
import os
import subprocess
import sys

import pytest

from awskit.core.config import Settings
from awskit.core.logger import configure_logger, logger


@pytest.fixture
def restore_level():
    yield
    configure_logger(Settings(_env_file=None, DEBUG=False))


def test_configure_logger_follows_debug_flag(restore_level) -> None:
    """DEBUG switches the logger and its console handler to debug level."""
    configure_logger(Settings(_env_file=None, DEBUG=True))

    assert logger.level == logging.DEBUG
    assert all(handler.level == logging.DEBUG for handler in logger.handlers)

    configure_logger(Settings(_env_file=None, DEBUG=False))

    assert logger.level == logging.INFO


def test_import_does_not_read_settings() -> None:
    """An environment Settings would reject does not break importing the package."""
    env = {**os.environ, "DEBUG": "*"}

    completed = subprocess.run(
        [sys.executable, "-c", "import awskit"],
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
