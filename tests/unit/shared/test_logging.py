"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

import structlog

from src.shared.logging import _pick_renderer, setup_logging


class TestPickRenderer:
    def test_json_by_default(self):
        assert isinstance(_pick_renderer("INFO", ""), structlog.processors.JSONRenderer)

    def test_console_for_debug(self):
        assert isinstance(_pick_renderer("debug", ""), structlog.dev.ConsoleRenderer)

    def test_explicit_format_wins(self):
        assert isinstance(_pick_renderer("DEBUG", "json"), structlog.processors.JSONRenderer)
        assert isinstance(_pick_renderer("INFO", "Console"), structlog.dev.ConsoleRenderer)


class TestSetupLogging:
    def test_file_handler_created(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        try:
            setup_logging(level="WARNING", file_path=str(log_file))
            root = logging.getLogger()
            assert root.level == logging.WARNING
            assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
            assert log_file.parent.is_dir()
        finally:
            setup_logging(level="INFO")

    def test_stdout_only(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)
