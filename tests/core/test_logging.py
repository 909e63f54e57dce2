"""
Tests for transmute.core.logging module.

Tests verify:
- configure_logging installs a level-filtering structlog configuration
- JSON output uses ECS field names
- Context binding helpers
- Nothing is written before configure_logging is called
"""

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from transmute.core.errors import InvalidConfigError
from transmute.core.lift import lift_mapping, lift_sequence
from transmute.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)
from transmute.core.settings import TransmuteSettings
from transmute.core.transformer import from_callables


class TestConfigureLogging:
    def test_debug_suppressed_at_info(self):
        configure_logging(level="INFO", json_format=True)
        with capture_logs() as logs:
            logger = get_logger("transmute.test")
            logger.debug("hidden")
            logger.info("shown")
        assert [log["event"] for log in logs] == ["shown"]

    def test_debug_emitted_at_debug(self):
        configure_logging(level="DEBUG", json_format=True)
        with capture_logs() as logs:
            get_logger("transmute.test").debug("visible", count=3)
        assert logs == [{"event": "visible", "count": 3, "log_level": "debug"}]

    def test_level_is_case_insensitive(self):
        configure_logging(level="warning", json_format=False)
        assert logging.getLogger("transmute").level == logging.WARNING

    def test_invalid_level(self):
        with pytest.raises(InvalidConfigError):
            configure_logging(level="LOUD")

    def test_json_output_is_ecs_compatible(self, caplog):
        configure_logging(level="INFO", json_format=True, service="billing")
        with caplog.at_level(logging.INFO, logger="transmute.test"):
            get_logger("transmute.test").info("converted", rows=2)
        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "converted"
        assert payload["rows"] == 2
        assert payload["service.name"] == "billing"
        assert payload["log.level"] == "info"
        assert "@timestamp" in payload

    def test_configure_from_settings(self):
        settings = TransmuteSettings(log_level="ERROR", log_json=True, service="svc")
        configure_from_settings(settings)
        assert logging.getLogger("transmute").level == logging.ERROR

    def test_configure_from_cached_settings(self, monkeypatch):
        monkeypatch.setenv("TRANSMUTE_LOG_LEVEL", "debug")
        configure_from_settings()
        assert logging.getLogger("transmute").level == logging.DEBUG


class TestContext:
    def test_bind_and_unbind(self):
        bind_context(record_id="r-1", source="ledger")
        assert structlog.contextvars.get_contextvars() == {"record_id": "r-1", "source": "ledger"}
        unbind_context("source")
        assert structlog.contextvars.get_contextvars() == {"record_id": "r-1"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_scopes_keys(self):
        bind_context(outer="kept")
        with LogContext(record_id="r-17") as ctx:
            assert isinstance(ctx, LogContext)
            assert structlog.contextvars.get_contextvars()["record_id"] == "r-17"
        assert structlog.contextvars.get_contextvars() == {"outer": "kept"}


class TestUnconfigured:
    """Library output before any application calls configure_logging."""

    def test_lifts_write_nothing(self, capsys):
        structlog.reset_defaults()
        lift_mapping({"one": 1, "uno": 1}, "null", 0)
        numbers = lift_sequence(from_callables(str, int, name="int<->str"))
        assert numbers.reverse_transformed_value(["13", "13.5"]).is_err()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_logger_routes_through_stdlib(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="transmute.test"):
            get_logger("transmute.test").debug("routed", rows=1)
        assert [record.name for record in caplog.records] == ["transmute.test"]
        assert "routed" in caplog.records[0].getMessage()

    def test_debug_dropped_at_default_level(self, caplog):
        get_logger("transmute.test").debug("hidden")
        assert caplog.records == []
