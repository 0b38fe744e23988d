# ============================================================================
# HEALTH CHECKER
# ============================================================================
# STATUS: Infrastructure - Public entry point of the health aggregator
# PURPOSE: Register components and serve cached health reports
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Checker

Facade the host talks to. Owns one registry, one report builder and one
result cache; nothing is process-global.

Request flow:
    RECEIVED -> CACHE_CHECK -> CACHE_HIT -> RESPOND
                            -> CACHE_MISS -> EXECUTE_PROBES -> RESOLVE_STATUS
                               -> BUILD_REPORT -> STORE_CACHE -> RESPOND
    readiness: EXECUTE_PROBES -> ANY_CRITICAL_FAILED -> NotReadyError

Usage:
    checker = HealthChecker("orders-api", HealthDefaults(version="2.1.0"))
    checker.add_component("db", ping_db, timeout_ms=1000)
    checker.add_component("cache", ping_cache, critical=False)

    report = await checker.get_health("detailed")
"""

import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from core.config.defaults import HealthDefaults, get_defaults
from core.contracts import ReportType
from core.logging import ComponentType, get_logger, log_context
from health.aggregator import FanOutAggregator
from health.cache import ResultCache
from health.core import ProbeOperation, ProbePolicy, ServiceMetadata
from health.executor import TimedExecutor
from health.memory import MemoryReader
from health.registry import ProbeRegistry
from health.reports import ReportBuilder

logger = get_logger(__name__, ComponentType.API)


class HealthChecker:
    """
    Health aggregator for one service.

    Args:
        service_name: Name reported in every report
        options: Configuration; defaults to get_defaults()
        memory_reader: Raw memory reader (default: psutil-backed)
        clock: Monotonic clock in seconds, shared by cache and executor
        wall_clock: UTC clock for report timestamps
    """

    def __init__(
        self,
        service_name: Optional[str] = None,
        options: Optional[HealthDefaults] = None,
        memory_reader: Optional[MemoryReader] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Optional[Callable[[], datetime]] = None,
    ):
        self.options = options or get_defaults()
        self.metadata = ServiceMetadata(
            name=service_name or self.options.service_name,
            version=self.options.version,
            start_time=clock(),
        )
        self.registry = ProbeRegistry(default_timeout_ms=self.options.default_timeout_ms)
        self.cache = ResultCache(
            ttl_ms=self.options.cache_timeout_ms,
            clock=clock,
            coalesce=self.options.coalesce_refresh,
        )
        self.builder = ReportBuilder(
            metadata=self.metadata,
            registry=self.registry,
            aggregator=FanOutAggregator(TimedExecutor(clock=clock)),
            memory_reader=memory_reader,
            memory_warning_percent=self.options.memory_warning_percent,
            clock=clock,
            wall_clock=wall_clock,
        )

    @property
    def service_name(self) -> str:
        return self.metadata.name

    # ========================================================================
    # REGISTRATION
    # ========================================================================

    def add_component(
        self,
        name: str,
        operation: ProbeOperation,
        *,
        critical: Optional[bool] = None,
        timeout_ms: Optional[int] = None,
        readiness_eligible: Optional[bool] = None,
    ) -> "HealthChecker":
        """
        Register (or replace) a component probe.

        Unset policy fields use the configured defaults: critical=True,
        timeout_ms=default_timeout_ms, readiness_eligible=True.
        """
        self.registry.add(
            name,
            operation,
            ProbePolicy(
                critical=critical,
                timeout_ms=timeout_ms,
                readiness_eligible=readiness_eligible,
            ),
        )
        self.cache.invalidate()
        return self

    def remove_component(self, name: str) -> "HealthChecker":
        """Remove a component probe. Unknown names are ignored."""
        if self.registry.remove(name):
            self.cache.invalidate()
        return self

    # ========================================================================
    # REPORTS
    # ========================================================================

    async def get_health(
        self,
        report_type: Union[str, ReportType] = ReportType.LIVENESS,
    ) -> Dict[str, Any]:
        """
        Get a health report.

        Args:
            report_type: "liveness", "detailed" or "ready". Anything else
                falls back to liveness.

        Returns:
            Report as a wire dictionary

        Raises:
            NotReadyError: Readiness failed (not cached)
        """
        resolved = ReportType.parse(report_type)
        if resolved is None:
            logger.warning(f"Unknown report type {report_type!r}, using liveness")
            resolved = ReportType.LIVENESS

        with log_context(report_type=resolved.value):
            return await self.cache.get_or_compute(
                resolved.value,
                lambda: self._build(resolved),
            )

    async def _build(self, report_type: ReportType) -> Dict[str, Any]:
        if report_type == ReportType.DETAILED:
            report = await self.builder.detailed()
        elif report_type == ReportType.READY:
            report = await self.builder.readiness()
        else:
            report = self.builder.liveness()
        return report.to_dict()


__all__ = [
    "HealthChecker",
]
