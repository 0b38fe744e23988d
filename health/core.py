# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Infrastructure - Probe definitions and outcome types
# PURPOSE: Probe policy, probe definition, component outcome, service metadata
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Core Types

Defines the probe definition and the result types for health checks.

A probe is a named zero-argument operation plus a policy:
- critical: failure forces the detailed status to unhealthy and blocks readiness
- timeout_ms: per-probe deadline
- readiness_eligible: include in the readiness subset (critical probes only)

Policy defaults are resolved once, when the probe is registered.
"""

import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.contracts import ComponentStatus
from health.exceptions import InvalidProbeError


# Zero-argument callable producing (or awaiting to) a ComponentOutcome or mapping
ProbeOperation = Callable[[], Union[Awaitable[Any], Any]]


def error_message(exc: BaseException) -> str:
    """Message for a failed probe; falls back to the exception class name."""
    message = str(exc)
    return message if message else type(exc).__name__


def wire_dump(model: BaseModel) -> Dict[str, Any]:
    """
    Dump a model to its camelCase wire dictionary.

    Declared fields left at None are omitted; extra fields pass through
    untouched, None values included.
    """
    omitted = {
        name for name in type(model).model_fields
        if getattr(model, name) is None
    }
    return model.model_dump(mode="json", by_alias=True, exclude=omitted)


# ============================================================================
# COMPONENT OUTCOME
# ============================================================================

class ComponentOutcome(BaseModel):
    """
    Result of one probe execution.

    Well-known fields are typed; probe-specific fields are kept as extras
    and passed through to the report untouched. Instances are frozen:
    annotation produces a copy.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
    )

    status: ComponentStatus
    details: Optional[str] = None
    error: Optional[str] = None
    response_time_ms: Optional[float] = Field(default=None, alias="responseTimeMillis")
    critical: Optional[bool] = None
    timeout_ms: Optional[int] = Field(default=None, alias="timeoutMillis")

    @classmethod
    def healthy(cls, details: str = None, **fields) -> "ComponentOutcome":
        """Create healthy outcome."""
        return cls(status=ComponentStatus.HEALTHY, details=details, **fields)

    @classmethod
    def warning(cls, details: str, **fields) -> "ComponentOutcome":
        """Create warning outcome."""
        return cls(status=ComponentStatus.WARNING, details=details, **fields)

    @classmethod
    def unhealthy(cls, error: str, details: str = None, **fields) -> "ComponentOutcome":
        """Create unhealthy outcome."""
        return cls(status=ComponentStatus.UNHEALTHY, error=error, details=details, **fields)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ComponentOutcome":
        """Normalize a failed or timed-out execution."""
        message = error_message(exc)
        return cls(
            status=ComponentStatus.UNHEALTHY,
            error=message,
            details=f"Check failed: {message}",
        )

    @classmethod
    def from_result(cls, value: Any) -> "ComponentOutcome":
        """
        Coerce a probe's return value.

        Raises:
            TypeError: If the probe returned neither an outcome nor a mapping
            pydantic.ValidationError: If the mapping has no valid status
        """
        if isinstance(value, ComponentOutcome):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(
            f"Probe returned {type(value).__name__}, expected a status mapping"
        )

    @property
    def extras(self) -> Dict[str, Any]:
        """Probe-specific fields outside the well-known set."""
        return dict(self.model_extra or {})

    def annotate(self, critical: bool, timeout_ms: int) -> "ComponentOutcome":
        """Copy with the probe's policy attached."""
        return self.model_copy(update={"critical": critical, "timeout_ms": timeout_ms})

    def with_response_time(self, response_time_ms: float) -> "ComponentOutcome":
        """Copy with a measured response time, unless the probe reported one."""
        if self.response_time_ms is not None:
            return self
        return self.model_copy(update={"response_time_ms": round(response_time_ms, 2)})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to wire dictionary (camelCase, unset fields omitted)."""
        return wire_dump(self)


# ============================================================================
# PROBE POLICY & DEFINITION
# ============================================================================

@dataclass(frozen=True)
class ProbePolicy:
    """
    Per-probe overrides. Unset fields take the configured defaults.

    Attributes:
        critical: Failure forces overall unhealthy (default True)
        timeout_ms: Deadline in milliseconds (default: configured default)
        readiness_eligible: Include in readiness subset (default True)
    """
    critical: Optional[bool] = None
    timeout_ms: Optional[int] = None
    readiness_eligible: Optional[bool] = None


@dataclass(frozen=True)
class ProbeDefinition:
    """A registered probe with its resolved policy."""
    name: str
    operation: ProbeOperation = field(compare=False)
    critical: bool = True
    timeout_ms: int = 3000
    readiness_eligible: bool = True

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def in_readiness(self) -> bool:
        """Critical and readiness-eligible."""
        return self.critical and self.readiness_eligible

    @classmethod
    def create(
        cls,
        name: str,
        operation: ProbeOperation,
        policy: Optional[ProbePolicy],
        default_timeout_ms: int,
    ) -> "ProbeDefinition":
        """
        Build a definition, resolving policy defaults.

        Raises:
            InvalidProbeError: Empty name, non-callable operation or
                negative timeout
        """
        if not isinstance(name, str) or not name:
            raise InvalidProbeError(str(name), "name must be a non-empty string")
        if not callable(operation):
            raise InvalidProbeError(name, "operation must be callable")

        policy = policy or ProbePolicy()
        timeout_ms = policy.timeout_ms
        if timeout_ms is not None and timeout_ms < 0:
            raise InvalidProbeError(name, f"timeout must be positive, got {timeout_ms}")

        return cls(
            name=name,
            operation=operation,
            critical=policy.critical is not False,
            # Fractional deadlines round up; never 0ms
            timeout_ms=math.ceil(timeout_ms) if timeout_ms else default_timeout_ms,
            readiness_eligible=policy.readiness_eligible is not False,
        )


# ============================================================================
# SERVICE METADATA
# ============================================================================

@dataclass(frozen=True)
class ServiceMetadata:
    """Service identity, fixed for the process lifetime."""
    name: str
    version: str
    start_time: float = field(default_factory=time.monotonic)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def uptime_seconds(self, now: Optional[float] = None) -> int:
        """Whole seconds since construction."""
        now = time.monotonic() if now is None else now
        return max(0, int(now - self.start_time))


__all__ = [
    "ProbeOperation",
    "ComponentOutcome",
    "ProbePolicy",
    "ProbeDefinition",
    "ServiceMetadata",
    "error_message",
    "wire_dump",
]
