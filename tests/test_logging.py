# mypy: ignore-errors
# tests/test_logging.py
"""Tests for application logging setup."""

import logging

from community_platform import main
from community_platform.core.settings import settings


def test_import_installs_no_root_handler() -> None:
    """Importing the app module leaves the root logger to its host."""
    formats = [
        getattr(handler.formatter, "_fmt", None)
        for handler in logging.getLogger().handlers
    ]
    assert main.LOG_FORMAT not in formats


def test_configure_logging_uses_configured_level(mocker) -> None:
    """The entry point configures logging at the settings level."""
    basic_config = mocker.patch("logging.basicConfig")
    mocker.patch.object(settings, "log_level", "debug")

    main.configure_logging()

    basic_config.assert_called_once_with(level="DEBUG", format=main.LOG_FORMAT)
