"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from pomoctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pomo = logging.getLogger("pomoctl")
    pomo_level = pomo.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers and isinstance(handler, logging.FileHandler):
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
    pomo.setLevel(pomo_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("pomoctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("pomoctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("pomoctl.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pomoctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pomoctl.services.session").debug("Command: start")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Command: start"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "pomoctl.services.session"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pluggy").debug("hook noise")
        assert capfd.readouterr().err == ""

    def test_log_file_keeps_stderr_clean(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        log_file = tmp_path / "pomoctl.log"
        configure_logging(verbose=True, log_json=True, log_file=log_file)
        logging.getLogger("pomoctl.domain.clock").warning("sink failed")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert capfd.readouterr().err == ""
        parsed = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert parsed["event"] == "sink failed"

    def test_idempotent_calls(self, tmp_path: Path) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_file=tmp_path / "a.log")
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], logging.FileHandler)
