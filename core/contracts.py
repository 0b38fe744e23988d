# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by the health modules
# PURPOSE: Define status and report-type enums for health aggregation
# CREATED: 18 OCT 2026
# EXPORTS: ComponentStatus, OverallStatus, ReportType
# ============================================================================
"""
Base contracts for the health aggregator.

These enums are the vocabulary that crosses boundaries:
- Probe operations (component status they report)
- Report payloads (overall status)
- Host layer (report type requested)
"""

from enum import Enum
from typing import Optional, Union


# ============================================================================
# STATUS ENUMS
# ============================================================================

class ComponentStatus(str, Enum):
    """
    Status reported by a single probe.

    Probes classify themselves; the aggregator only ever produces
    UNHEALTHY (for failed or timed-out executions).
    """
    HEALTHY = "healthy"
    OK = "ok"
    WARNING = "warning"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    ERROR = "error"

    def is_failure(self) -> bool:
        """Check if this status counts as a failed component."""
        return self in (ComponentStatus.UNHEALTHY, ComponentStatus.ERROR)

    def is_ready(self) -> bool:
        """Check if this status admits traffic for readiness."""
        return self in (ComponentStatus.HEALTHY, ComponentStatus.OK)


class OverallStatus(str, Enum):
    """
    Overall status of a detailed report.

    Precedence (worst wins):
        UNHEALTHY > DEGRADED > HEALTHY
    """
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ReportType(str, Enum):
    """Report shapes a host can request."""
    LIVENESS = "liveness"
    DETAILED = "detailed"
    READY = "ready"

    @classmethod
    def parse(cls, value: Optional[Union[str, "ReportType"]]) -> Optional["ReportType"]:
        """
        Parse a report type, returning None when unrecognized.

        Accepts enum members and case-insensitive strings.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


__all__ = [
    "ComponentStatus",
    "OverallStatus",
    "ReportType",
]
