"""
Tests for logging configuration.
"""

import logging
import sys

import pytest

from gomodctl.core.observability.logging_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    @pytest.mark.parametrize(
        "name, expected",
        [("DEBUG", logging.DEBUG), ("info", logging.INFO), ("", logging.WARNING),
         (None, logging.WARNING), ("LOUD", logging.WARNING)],
    )
    def test_levels(self, name, expected):
        assert _parse_level(name) == expected


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_debug_format_has_line_numbers(self):
        setup_logging("DEBUG")
        fmt = logging.getLogger().handlers[0].formatter._fmt
        assert "%(lineno)d" in fmt

    def test_warning_format_is_minimal(self):
        setup_logging("WARNING")
        assert logging.getLogger().handlers[0].formatter._fmt == "%(message)s"

    def test_console_writes_to_stderr(self):
        setup_logging("INFO")
        assert logging.getLogger().handlers[0].stream is sys.stderr

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "gomodctl.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("gomodctl.test").debug("ran go list -m")
        for handler in root.handlers:
            handler.flush()
        assert "ran go list -m" in log_file.read_text()
