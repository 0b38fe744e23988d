# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Kubernetes probes and health monitoring endpoints
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Router

FastAPI router exposing the three report tiers of a HealthChecker:

Endpoints:
    GET /livez   - Liveness probe (is the process alive?)
                   Always 200; no component checks.

    GET /readyz  - Readiness probe (can we accept traffic?)
                   200 if every critical, readiness-eligible probe passes,
                   503 otherwise.

    GET /health  - Detailed status of every registered probe plus memory.

Response Codes (/health):
    200 - Healthy
    206 - Degraded (partial content)
    503 - Unhealthy (service unavailable)
"""


from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.contracts import OverallStatus, ReportType
from core.logging import ComponentType, get_logger
from health.checker import HealthChecker
from health.exceptions import NotReadyError
from health.reports import utc_timestamp

logger = get_logger(__name__, ComponentType.API)


def _status_to_http_code(status: str) -> int:
    """Map overall status to HTTP status code."""
    return {
        OverallStatus.HEALTHY.value: 200,
        OverallStatus.DEGRADED.value: 206,  # Partial Content
        OverallStatus.UNHEALTHY.value: 503,  # Service Unavailable
    }.get(status, 503)


def create_health_router(checker: HealthChecker) -> APIRouter:
    """
    Build the health router for one checker.

    Args:
        checker: The service's HealthChecker

    Returns:
        APIRouter with /livez, /readyz and /health
    """
    router = APIRouter(tags=["Health"])

    # ========================================================================
    # LIVENESS PROBE
    # ========================================================================

    @router.get("/livez")
    async def liveness_probe():
        """
        Kubernetes liveness probe.

        Instant check with no external dependencies. If this fails,
        Kubernetes restarts the container.
        """
        return await checker.get_health(ReportType.LIVENESS)

    # ========================================================================
    # READINESS PROBE
    # ========================================================================

    @router.get("/readyz")
    async def readiness_probe():
        """
        Kubernetes readiness probe.

        Runs only critical, readiness-eligible probes. If this fails,
        Kubernetes removes the pod from the service load balancer.
        """
        try:
            return await checker.get_health(ReportType.READY)
        except NotReadyError as e:
            logger.warning(f"Readiness check answered 503: {e}")
            return JSONResponse(
                status_code=503,
                content={
                    "status": "not_ready",
                    "service": checker.service_name,
                    "timestamp": utc_timestamp(),
                    "error": str(e),
                    "failedComponents": e.failed_components,
                },
            )

    # ========================================================================
    # FULL HEALTH CHECK
    # ========================================================================

    @router.get("/health")
    async def full_health_check():
        """
        Comprehensive health check.

        Runs every registered probe and returns per-component status,
        overall status and process memory.
        """
        report = await checker.get_health(ReportType.DETAILED)
        return JSONResponse(
            status_code=_status_to_http_code(report["status"]),
            content=report,
        )

    return router


__all__ = [
    "create_health_router",
]
