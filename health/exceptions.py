# ============================================================================
# HEALTH CHECK EXCEPTIONS
# ============================================================================
# STATUS: Infrastructure - Error taxonomy for health aggregation
# PURPOSE: Timeout, readiness and usage errors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Exceptions

- ProbeTimeoutError: synthetic failure from the timed executor. Always
  recovered into an unhealthy component outcome by the aggregator.
- NotReadyError: readiness failure, intentionally propagated to the host.
- InvalidProbeError: a probe that could never run (bad name, operation
  or timeout).
"""

from typing import List, Optional


class HealthCheckError(Exception):
    """Base exception for health check errors."""
    pass


class ProbeTimeoutError(HealthCheckError):
    """Raised when a probe does not settle before its deadline."""
    def __init__(self, probe_name: str, timeout_ms: int):
        self.probe_name = probe_name
        self.timeout_ms = timeout_ms
        super().__init__(f"Timeout after {timeout_ms}ms")


class NotReadyError(HealthCheckError):
    """Raised when one or more critical, readiness-eligible probes fail."""
    def __init__(
        self,
        failed: int,
        total: int,
        failed_components: Optional[List[str]] = None,
    ):
        self.failed = failed
        self.total = total
        self.failed_components = list(failed_components or [])
        super().__init__(f"Critical components not ready: {failed} failed")


class InvalidProbeError(HealthCheckError):
    """Raised when a probe definition cannot be registered."""
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid probe {name!r}: {reason}")


__all__ = [
    "HealthCheckError",
    "ProbeTimeoutError",
    "NotReadyError",
    "InvalidProbeError",
]
