"""Unit tests for the logging setup."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from bh.core.logging import _resolve_log_path, get_logger, log_with_source, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_defaults_from_yaml(self) -> None:
        """Default level is WARNING with a single stderr handler."""
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert not isinstance(root.handlers[0], RotatingFileHandler)

    def test_level_override(self) -> None:
        setup_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_console_can_be_disabled(self) -> None:
        setup_logging(enable_console=False)
        assert logging.getLogger().handlers == []

    def test_repeated_setup_does_not_stack_handlers(self) -> None:
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_log_file_writes_json_lines(self, tmp_path: Path) -> None:
        """An explicit log file enables JSONL output."""
        log_file = tmp_path / "logs" / "bh.jsonl"
        setup_logging(level="INFO", enable_console=False, log_file=log_file)

        logger = get_logger("bh.tests")
        log_with_source(logger, "cli", "info", "Something happened", job_id="abc")

        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "Something happened"
        assert record["source"] == "cli"
        assert record["job_id"] == "abc"
        assert record["level"] == "info"

    def test_httpx_loggers_are_quieted(self) -> None:
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestResolveLogPath:
    """Tests for log path resolution."""

    def test_relative_path_uses_user_config_dir(self, user_config_dir: Path) -> None:
        assert _resolve_log_path("logs/bh.jsonl") == user_config_dir / "logs" / "bh.jsonl"

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        assert _resolve_log_path(tmp_path / "x.jsonl") == tmp_path / "x.jsonl"


class TestLogWithSource:
    """Tests for log_with_source."""

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(AttributeError):
            log_with_source(get_logger("bh.tests"), "cli", "loud", "nope")
