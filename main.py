# ============================================================================
# SERVICE HEALTH - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Host application exposing the health reports over HTTP
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Health Main Application

FastAPI application that:
1. Configures structured logging
2. Builds a HealthChecker from environment defaults
3. Registers the built-in process probe and any HEALTH_HTTP_PROBES
4. Mounts /livez, /readyz and /health

HEALTH_HTTP_PROBES is a comma-separated list of name=url pairs; those
probes are non-critical.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from typing import Optional

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE
from core.config import HealthDefaults, get_defaults
from core.logging import configure_logging, get_logger
from health import HealthChecker, create_health_router, http_probe, process_probe

logger = get_logger(__name__)


def _register_http_probes(checker: HealthChecker, entries: str) -> None:
    for item in entries.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, url = item.partition("=")
        if not sep or not name.strip() or not url.strip():
            logger.warning(f"Ignoring malformed HEALTH_HTTP_PROBES entry: {item!r}")
            continue
        checker.add_component(name.strip(), http_probe(url.strip()), critical=False)


def create_app(
    checker: Optional[HealthChecker] = None,
    options: Optional[HealthDefaults] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        checker: Pre-built checker (tests); built from options otherwise
        options: Defaults; read from the environment when None
    """
    if checker is None:
        checker = HealthChecker(options=options or get_defaults())
        checker.add_component("process", process_probe, timeout_ms=1000)
        _register_http_probes(checker, os.environ.get("HEALTH_HTTP_PROBES", ""))

    app = FastAPI(
        title="Service Health",
        description="Health aggregation for liveness, readiness and detailed status",
        version=__version__,
    )
    app.state.health_checker = checker

    # Health check routes (no prefix - /livez, /readyz, /health)
    app.include_router(create_health_router(checker))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": checker.service_name,
            "version": __version__,
            "build_date": BUILD_DATE,
            "registered_probes": len(checker.registry),
        }

    logger.info(
        f"Service Health v{__version__} ready "
        f"({len(checker.registry)} probes registered)"
    )
    return app


configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )
