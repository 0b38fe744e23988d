# ============================================================================
# VERSION - SERVICE HEALTH AGGREGATOR
# ============================================================================
"""
Version information for the health aggregator.

This is the single source of truth for the package version and the
default service version reported by liveness and detailed reports.
"""
# Version format: major.minor.patch
__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"
