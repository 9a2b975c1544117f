"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from pkgboundaries.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("pkgboundaries").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("pkgboundaries").level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("pkgboundaries.test")
        log.warning("unit.unreadable", path="a.py")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "unit.unreadable"
        assert parsed["path"] == "a.py"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pkgboundaries.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pkgboundaries.domain.patterns").warning("Pattern set disabled: x")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Pattern set disabled: x"
        assert parsed["logger"] == "pkgboundaries.domain.patterns"

    def test_debug_hidden_unless_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("pkgboundaries.test").debug("check.complete")
        assert capfd.readouterr().err == ""
