# ============================================================================
# STATUS RESOLVER
# ============================================================================
# STATUS: Infrastructure - Overall status precedence
# PURPOSE: Roll component outcomes up into one overall status
# CREATED: 18 OCT 2026
# ============================================================================
"""
Status Resolver

Pure, order-independent rules, in precedence order:
1. any critical component unhealthy/error  -> unhealthy
2. any component unhealthy/error or warning -> degraded
3. otherwise                                -> healthy

Readiness does not use these rules; it only admits healthy/ok outcomes.
"""

from typing import Iterable

from core.contracts import ComponentStatus, OverallStatus
from health.core import ComponentOutcome


def resolve_overall_status(outcomes: Iterable[ComponentOutcome]) -> OverallStatus:
    """Resolve the overall status of a detailed report."""
    has_failure = False
    has_warning = False

    for outcome in outcomes:
        if outcome.status.is_failure():
            if outcome.critical:
                return OverallStatus.UNHEALTHY
            has_failure = True
        elif outcome.status == ComponentStatus.WARNING:
            has_warning = True

    if has_failure or has_warning:
        return OverallStatus.DEGRADED
    return OverallStatus.HEALTHY


def is_ready_outcome(outcome: ComponentOutcome) -> bool:
    """Readiness rule for a returned outcome."""
    return outcome.status.is_ready()


__all__ = [
    "resolve_overall_status",
    "is_ready_outcome",
]
