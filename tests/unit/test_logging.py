"""Unit tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest

from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger, normalize_log_level


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO", json_output=True)
        get_logger("tests.logging").info("catalog_built", items=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "catalog_built"
        assert record["items"] == 3
        assert record["level"] == "info"

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING", json_output=True)
        logger = get_logger("tests.logging")
        logger.info("hidden")
        logger.warning("index_corrupt_replaced")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "index_corrupt_replaced" in err

    def test_production_env_selects_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        configure_logging("INFO")
        get_logger("tests.logging").info("strategy_matched", strategy="table")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["strategy"] == "table"

    def test_console_output_in_development(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("APP_ENV", "development")
        configure_logging("INFO")
        get_logger("tests.logging").info("source_fetched")
        assert "source_fetched" in capsys.readouterr().err

    def test_level_is_case_insensitive(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("debug", json_output=True)
        get_logger("tests.logging").debug("payload_parse_failed")
        assert "payload_parse_failed" in capsys.readouterr().err

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown log level 'bogus'"):
            configure_logging("bogus")

    def test_httpx_quiet_unless_debug(self) -> None:
        configure_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
        configure_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.NOTSET


class TestNormalizeLogLevel:
    """Tests for log level validation."""

    @pytest.mark.parametrize("raw", ["warning", " Warning ", "WARNING"])
    def test_normalized(self, raw: str) -> None:
        assert normalize_log_level(raw) == "WARNING"

    @pytest.mark.parametrize("raw", ["", "verbose", "FATAL"])
    def test_rejected(self, raw: str) -> None:
        with pytest.raises(ConfigurationError):
            normalize_log_level(raw)
