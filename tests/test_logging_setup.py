"""Tests for pocketfin.logging_setup."""

import io
import logging

import pytest

from pocketfin.logging_setup import LOGGER_NAME, configure_logging, get_logger, resolve_level


class TestResolveLevel:
    """Tests for resolve_level."""

    def test_default_is_warning(self) -> None:
        """Should default to WARNING."""
        assert resolve_level() == logging.WARNING

    def test_explicit_name(self) -> None:
        """Should accept level names in any case."""
        assert resolve_level("debug") == logging.DEBUG

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read POCKETFIN_LOG_LEVEL when no level is given."""
        monkeypatch.setenv("POCKETFIN_LOG_LEVEL", "INFO")
        assert resolve_level() == logging.INFO
        assert resolve_level("ERROR") == logging.ERROR

    def test_unknown_names_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall through unknown names."""
        monkeypatch.setenv("POCKETFIN_LOG_LEVEL", "chatty")
        assert resolve_level("loud") == logging.WARNING


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_single_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should add one stderr handler however often it is called."""
        logger = logging.getLogger(LOGGER_NAME)
        monkeypatch.setattr(logger, "handlers", [h for h in logger.handlers if not getattr(h, "pocketfin_cli", False)])
        monkeypatch.setattr(logger, "level", logger.level)
        monkeypatch.setattr(logger, "propagate", logger.propagate)
        stream = io.StringIO()

        configure_logging("INFO", stream=stream)
        configure_logging("INFO", stream=stream)
        get_logger("pocketfin.tests").info("hello")

        cli_handlers = [h for h in logger.handlers if getattr(h, "pocketfin_cli", False)]
        assert len(cli_handlers) == 1
        assert "hello" in stream.getvalue()
