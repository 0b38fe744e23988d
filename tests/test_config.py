# ============================================================================
# CONFIGURATION & LOGGING TESTS
# ============================================================================
# STATUS: Tests - Defaults, environment overrides, structured logging
# PURPOSE: Verify HealthDefaults normalization and log context handling
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration & Logging Tests

Run with:
    pytest tests/test_config.py -v
"""

import asyncio
import importlib
import json
import logging

import pytest

from __version__ import __version__
from core.config import HealthDefaults, get_defaults, reset_defaults
from core.contracts import ReportType
from core.logging import (
    ComponentType,
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_context,
)


@pytest.fixture(autouse=True)
def _fresh_defaults():
    reset_defaults()
    yield
    reset_defaults()


# ============================================================================
# DEFAULTS
# ============================================================================

class TestHealthDefaults:
    """Test HealthDefaults."""

    def test_built_in_values(self):
        defaults = HealthDefaults()

        assert defaults.service_name == "service"
        assert defaults.version == __version__
        assert defaults.cache_timeout_ms == 5000
        assert defaults.default_timeout_ms == 3000
        assert defaults.memory_warning_percent == 85
        assert defaults.coalesce_refresh is True

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_probe_timeout_falls_back(self, value):
        assert HealthDefaults(default_timeout_ms=value).default_timeout_ms == 3000

    def test_zero_cache_timeout_disables(self):
        assert HealthDefaults(cache_timeout_ms=0).cache_timeout_ms == 0

    def test_negative_cache_timeout_falls_back(self):
        assert HealthDefaults(cache_timeout_ms=-10).cache_timeout_ms == 5000

    def test_non_positive_threshold_falls_back(self):
        assert HealthDefaults(memory_warning_percent=0).memory_warning_percent == 85

    def test_with_overrides(self):
        defaults = HealthDefaults().with_overrides(service_name="orders-api")

        assert defaults.service_name == "orders-api"
        assert defaults.cache_timeout_ms == 5000

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HEALTH_SERVICE_NAME", "billing")
        monkeypatch.setenv("SERVICE_VERSION", "3.4.5")
        monkeypatch.setenv("HEALTH_CACHE_TIMEOUT_MS", "250")
        monkeypatch.setenv("HEALTH_DEFAULT_TIMEOUT_MS", "900")
        monkeypatch.setenv("HEALTH_MEMORY_WARNING_PERCENT", "70")
        monkeypatch.setenv("HEALTH_COALESCE_REFRESH", "false")

        defaults = get_defaults()

        assert defaults.service_name == "billing"
        assert defaults.version == "3.4.5"
        assert defaults.cache_timeout_ms == 250
        assert defaults.default_timeout_ms == 900
        assert defaults.memory_warning_percent == 70
        assert defaults.coalesce_refresh is False

    def test_get_defaults_is_cached(self):
        assert get_defaults() is get_defaults()


class TestReportTypeParse:
    """Test ReportType.parse()."""

    @pytest.mark.parametrize("value,expected", [
        ("liveness", ReportType.LIVENESS),
        ("Detailed", ReportType.DETAILED),
        ("ready", ReportType.READY),
        (ReportType.READY, ReportType.READY),
    ])
    def test_known(self, value, expected):
        assert ReportType.parse(value) == expected

    @pytest.mark.parametrize("value", ["", "full", None])
    def test_unknown(self, value):
        assert ReportType.parse(value) is None


# ============================================================================
# LOGGING
# ============================================================================

def _record(message="Probe finished", extra=None):
    record = logging.LogRecord(
        name="health.executor",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    if extra is not None:
        record.extra = extra
    return record


class TestLogContext:
    """Test log_context() nesting."""

    def test_nested_context_merges(self):
        with log_context(report_type="detailed"):
            with log_context(probe="db"):
                context = get_current_context()
                assert context.report_type == "detailed"
                assert context.probe == "db"
            assert get_current_context().probe is None
        assert get_current_context().report_type is None

    def test_context_isolated_between_tasks(self):
        seen = {}

        async def probe(name):
            with log_context(probe=name):
                await asyncio.sleep(0.01)
                seen[name] = get_current_context().probe

        async def run():
            await asyncio.gather(probe("db"), probe("cache"))

        asyncio.run(run())

        assert seen == {"db": "db", "cache": "cache"}


class TestFormatters:
    """Test the JSON and human formatters."""

    def test_structured_formatter(self):
        with log_context(report_type="ready", probe="db"):
            output = StructuredFormatter().format(_record(extra={"component": "executor"}))

        data = json.loads(output)
        assert data["level"] == "WARNING"
        assert data["logger"] == "health.executor"
        assert data["message"] == "Probe finished"
        assert data["context"] == {"report_type": "ready", "probe": "db"}
        assert data["data"] == {"component": "executor"}
        assert data["timestamp"].endswith("Z")

    def test_human_formatter(self):
        with log_context(report_type="detailed", probe="cache"):
            output = HumanFormatter().format(_record())

        assert "WARNING" in output
        assert "[report=detailed, probe=cache]" in output
        assert output.endswith("health.executor [report=detailed, probe=cache]: Probe finished")

    @pytest.mark.parametrize("module,component", [
        ("health.registry", "registry"),
        ("health.executor", "executor"),
        ("health.aggregator", "aggregator"),
        ("health.cache", "cache"),
        ("health.reports", "reports"),
        ("health.checker", "api"),
        ("health.router", "api"),
    ])
    def test_module_loggers_tagged_with_component(self, module, component):
        logger = importlib.import_module(module).logger

        assert logger.extra["component"] == component
        assert logger.logger.name == module

    def test_context_logger_attaches_component(self):
        logger = get_logger("health.test", ComponentType.CACHE)

        with log_context(report_type="liveness"):
            _, kwargs = logger.process("hit", {})

        assert kwargs["extra"]["extra"] == {
            "report_type": "liveness",
            "component": "cache",
        }
