# ============================================================================
# REPORT MODELS
# ============================================================================
# STATUS: Infrastructure - Wire shapes of the three health reports
# PURPOSE: Pydantic models for liveness, detailed and readiness reports
# CREATED: 18 OCT 2026
# ============================================================================
"""
Report Models

Field names on the wire are camelCase and load-bearing for consumers such
as orchestrator probes; Python attributes are snake_case with aliases.

    liveness  = {status, service, timestamp, version, uptimeSeconds}
    detailed  = liveness + {memory, components}
    readiness = {status: "ready", service, timestamp, criticalComponents?}
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.contracts import ComponentStatus, OverallStatus
from health.core import ComponentOutcome, wire_dump


class ReportModel(BaseModel):
    """Base for report payloads."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to wire dictionary (camelCase, unset fields omitted)."""
        return wire_dump(self)


class MemoryReport(ReportModel):
    """Memory block of the detailed report (MB values, whole numbers)."""
    heap_used_mb: int = Field(alias="heapUsedMB")
    heap_total_mb: int = Field(alias="heapTotalMB")
    external_mb: int = Field(alias="externalMB")
    rss_mb: int = Field(alias="rssMB")
    usage_percent: int = Field(alias="usagePercent")
    status: ComponentStatus


class LivenessReport(ReportModel):
    """Process is alive; no component checks."""
    status: OverallStatus = OverallStatus.HEALTHY
    service: str
    timestamp: str
    version: str
    uptime_seconds: int = Field(alias="uptimeSeconds")


class DetailedReport(LivenessReport):
    """All probes plus memory classification."""
    status: OverallStatus
    memory: MemoryReport
    components: Dict[str, ComponentOutcome] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        # Each component drops its own unset fields but keeps probe extras
        data["components"] = {
            name: outcome.to_dict() for name, outcome in self.components.items()
        }
        return data


class ReadinessReport(ReportModel):
    """Critical, readiness-eligible probes all passed."""
    status: Literal["ready"] = "ready"
    service: str
    timestamp: str
    critical_components: Optional[int] = Field(default=None, alias="criticalComponents")


__all__ = [
    "ReportModel",
    "MemoryReport",
    "LivenessReport",
    "DetailedReport",
    "ReadinessReport",
]
