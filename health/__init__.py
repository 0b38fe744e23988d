# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Infrastructure - Health aggregation core
# PURPOSE: Probe registry, concurrent execution, cached health reports
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Module

Health aggregation core for one service process:
- liveness: process alive (instant, for Kubernetes liveness probe)
- ready:    critical, readiness-eligible probes pass
- detailed: every probe plus memory, overall status by precedence

Architecture:
- ProbeRegistry: named probe definitions with resolved policy
- TimedExecutor: one probe raced against its deadline
- FanOutAggregator: all probes concurrently, failures isolated
- resolve_overall_status: unhealthy > degraded > healthy
- ReportBuilder: the three report shapes
- ResultCache: per report-type TTL cache
- HealthChecker: facade tying them together

Usage:
    from health import HealthChecker, create_health_router

    checker = HealthChecker("orders-api")
    checker.add_component("db", ping_db, timeout_ms=1000)

    app.include_router(create_health_router(checker))
"""

from health.core import (
    ComponentOutcome,
    ProbeDefinition,
    ProbePolicy,
    ServiceMetadata,
)
from health.exceptions import (
    HealthCheckError,
    InvalidProbeError,
    NotReadyError,
    ProbeTimeoutError,
)
from health.registry import ProbeRegistry
from health.executor import TimedExecutor
from health.aggregator import FanOutAggregator, ProbeSettlement
from health.resolver import resolve_overall_status, is_ready_outcome
from health.memory import MemoryStats, classify_memory, read_process_memory
from health.cache import ResultCache
from health.reports import ReportBuilder
from health.checker import HealthChecker
from health.probes import http_probe, process_probe
from health.router import create_health_router

__all__ = [
    # Core types
    "ComponentOutcome",
    "ProbeDefinition",
    "ProbePolicy",
    "ServiceMetadata",
    # Errors
    "HealthCheckError",
    "InvalidProbeError",
    "NotReadyError",
    "ProbeTimeoutError",
    # Engine
    "ProbeRegistry",
    "TimedExecutor",
    "FanOutAggregator",
    "ProbeSettlement",
    "resolve_overall_status",
    "is_ready_outcome",
    "MemoryStats",
    "classify_memory",
    "read_process_memory",
    "ResultCache",
    "ReportBuilder",
    "HealthChecker",
    # Host
    "http_probe",
    "process_probe",
    "create_health_router",
]
