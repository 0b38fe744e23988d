# ============================================================================
# REPORT BUILDER
# ============================================================================
# STATUS: Infrastructure - Assembles the three report shapes
# PURPOSE: Liveness, detailed and readiness reports
# CREATED: 18 OCT 2026
# ============================================================================
"""
Report Builder

Three report tiers:

    liveness   - instant, no probes, no awaits. Must answer under load or
                 partial outage.
    detailed   - every registered probe, overall status via the resolver,
                 plus process memory classification.
    readiness  - critical and readiness-eligible probes only. Any failed
                 execution, or any outcome that is not healthy/ok, raises
                 NotReadyError for the host to turn into a not-ready answer.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional

from core.config.defaults import DEFAULT_MEMORY_WARNING_PERCENT
from core.logging import ComponentType, get_logger
from health.aggregator import FanOutAggregator
from health.core import ServiceMetadata
from health.exceptions import NotReadyError
from health.memory import MemoryReader, classify_memory, read_process_memory
from health.models import DetailedReport, LivenessReport, ReadinessReport
from health.registry import ProbeRegistry
from health.resolver import is_ready_outcome, resolve_overall_status

logger = get_logger(__name__, ComponentType.REPORTS)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ReportBuilder:
    """Builds reports from service metadata and the probe registry."""

    def __init__(
        self,
        metadata: ServiceMetadata,
        registry: ProbeRegistry,
        aggregator: Optional[FanOutAggregator] = None,
        memory_reader: Optional[MemoryReader] = None,
        memory_warning_percent: int = DEFAULT_MEMORY_WARNING_PERCENT,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Optional[Callable[[], datetime]] = None,
    ):
        self.metadata = metadata
        self.registry = registry
        self.aggregator = aggregator or FanOutAggregator()
        self.memory_reader = memory_reader or read_process_memory
        self.memory_warning_percent = memory_warning_percent
        self._clock = clock
        self._wall_clock = wall_clock or (lambda: datetime.now(timezone.utc))

    def _timestamp(self) -> str:
        return utc_timestamp(self._wall_clock())

    def _uptime(self) -> int:
        return self.metadata.uptime_seconds(self._clock())

    # ========================================================================
    # LIVENESS
    # ========================================================================

    def liveness(self) -> LivenessReport:
        """Process is alive. Never touches probes."""
        return LivenessReport(
            service=self.metadata.name,
            timestamp=self._timestamp(),
            version=self.metadata.version,
            uptime_seconds=self._uptime(),
        )

    # ========================================================================
    # DETAILED
    # ========================================================================

    async def detailed(self) -> DetailedReport:
        """Run every probe and resolve the overall status."""
        components = await self.aggregator.aggregate(self.registry.list())
        status = resolve_overall_status(components.values())
        memory = classify_memory(self.memory_reader(), self.memory_warning_percent)

        logger.info(
            f"Detailed health: {status.value} ({len(components)} components)"
        )

        return DetailedReport(
            status=status,
            service=self.metadata.name,
            timestamp=self._timestamp(),
            version=self.metadata.version,
            uptime_seconds=self._uptime(),
            memory=memory,
            components=components,
        )

    # ========================================================================
    # READINESS
    # ========================================================================

    async def readiness(self) -> ReadinessReport:
        """
        Check critical, readiness-eligible probes.

        Raises:
            NotReadyError: If any selected probe failed, timed out or
                reported a status other than healthy/ok
        """
        selected = self.registry.list_readiness()

        # Fast path: nothing gates readiness
        if not selected:
            return ReadinessReport(
                service=self.metadata.name,
                timestamp=self._timestamp(),
            )

        settlements = await self.aggregator.settle(selected)
        failed = [
            s.name for s in settlements
            if not s.succeeded or not is_ready_outcome(s.outcome)
        ]

        if failed:
            logger.warning(
                f"Not ready: {len(failed)} of {len(selected)} critical components failed "
                f"({', '.join(failed)})"
            )
            raise NotReadyError(len(failed), len(selected), failed)

        return ReadinessReport(
            service=self.metadata.name,
            timestamp=self._timestamp(),
            critical_components=len(selected),
        )


__all__ = [
    "ReportBuilder",
    "utc_timestamp",
]
