# ============================================================================
# BUILT-IN PROBES
# ============================================================================
# STATUS: Infrastructure - Ready-made probe operations
# PURPOSE: HTTP dependency probe and process probe
# CREATED: 18 OCT 2026
# ============================================================================
"""
Built-in Probes

Probe factories for common dependencies. Each returns a zero-argument
async operation suitable for HealthChecker.add_component().

Transport errors are not caught: the aggregator turns them into an
unhealthy outcome with the error message preserved.
"""

import os
import platform
import sys
from typing import Any, Dict, Optional

import httpx

from core.contracts import ComponentStatus
from health.core import ComponentOutcome, ProbeOperation


def http_probe(
    url: str,
    expected_status: int = 200,
    method: str = "GET",
    timeout_seconds: float = 10.0,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ProbeOperation:
    """
    Probe an HTTP dependency.

    Healthy when the response has expected_status. If the body is a JSON
    object with a "status" field it is reported as upstreamStatus.

    Args:
        url: Endpoint to call
        expected_status: Status code counted as healthy
        method: HTTP method
        timeout_seconds: Client-side timeout (the probe deadline still applies)
        headers: Optional request headers
        transport: Optional httpx transport (for tests)
    """

    async def check() -> ComponentOutcome:
        async with httpx.AsyncClient(timeout=timeout_seconds, transport=transport) as client:
            response = await client.request(method, url, headers=headers)

        fields: Dict[str, Any] = {"url": url, "statusCode": response.status_code}

        # Try to pass through an upstream health status
        if response.headers.get("content-type", "").startswith("application/json"):
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and "status" in body:
                fields["upstreamStatus"] = body["status"]

        if response.status_code != expected_status:
            return ComponentOutcome.unhealthy(
                error=f"Expected {expected_status}, got {response.status_code}",
                details=f"{method} {url} returned {response.status_code}",
                **fields,
            )

        return ComponentOutcome.healthy(
            details=f"{method} {url} returned {response.status_code}",
            **fields,
        )

    return check


async def process_probe() -> ComponentOutcome:
    """
    Basic process probe.

    Always healthy if it runs (proves the event loop is responsive).
    """
    return ComponentOutcome(
        status=ComponentStatus.HEALTHY,
        details="Process running",
        pid=os.getpid(),
        pythonVersion=sys.version.split()[0],
        platform=platform.platform(),
    )


__all__ = [
    "http_probe",
    "process_probe",
]
