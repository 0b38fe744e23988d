# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for cache TTL, probe timeouts, thresholds
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the defaults for the health aggregator. They can be overridden
via environment variables or by passing a HealthDefaults instance to
HealthChecker.

Design:
- Immutable dataclass for defaults
- Environment variable overrides
- Defaults resolved once at construction, never at read time
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from __version__ import __version__


DEFAULT_SERVICE_NAME = "service"
DEFAULT_CACHE_TIMEOUT_MS = 5000
DEFAULT_PROBE_TIMEOUT_MS = 3000
DEFAULT_MEMORY_WARNING_PERCENT = 85


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _positive_or(value: Optional[int], fallback: int) -> int:
    """Non-positive or missing values fall back to the built-in default."""
    if not value or value <= 0:
        return fallback
    return value


@dataclass(frozen=True)
class HealthDefaults:
    """
    Defaults for the health aggregator.

    Attributes:
        service_name: Name reported in every report
        version: Free-form service version string
        cache_timeout_ms: Maximum age of a cached report
        default_timeout_ms: Per-probe timeout when a probe sets none
        memory_warning_percent: Heap usage above this is a warning
        coalesce_refresh: Share one in-flight recomputation per report type
    """
    service_name: str = DEFAULT_SERVICE_NAME
    version: str = __version__
    cache_timeout_ms: int = DEFAULT_CACHE_TIMEOUT_MS
    default_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS
    memory_warning_percent: int = DEFAULT_MEMORY_WARNING_PERCENT
    coalesce_refresh: bool = True

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(
            self,
            "default_timeout_ms",
            _positive_or(self.default_timeout_ms, DEFAULT_PROBE_TIMEOUT_MS),
        )
        if self.cache_timeout_ms is None or self.cache_timeout_ms < 0:
            object.__setattr__(self, "cache_timeout_ms", DEFAULT_CACHE_TIMEOUT_MS)
        object.__setattr__(
            self,
            "memory_warning_percent",
            _positive_or(self.memory_warning_percent, DEFAULT_MEMORY_WARNING_PERCENT),
        )
        if not self.version:
            object.__setattr__(self, "version", __version__)

    def with_overrides(self, **kwargs) -> "HealthDefaults":
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)

    @classmethod
    def from_env(cls) -> "HealthDefaults":
        """Create from environment variables."""
        return cls(
            service_name=os.getenv("HEALTH_SERVICE_NAME", DEFAULT_SERVICE_NAME),
            version=os.getenv("SERVICE_VERSION", __version__),
            cache_timeout_ms=int(os.getenv("HEALTH_CACHE_TIMEOUT_MS", DEFAULT_CACHE_TIMEOUT_MS)),
            default_timeout_ms=int(os.getenv("HEALTH_DEFAULT_TIMEOUT_MS", DEFAULT_PROBE_TIMEOUT_MS)),
            memory_warning_percent=int(
                os.getenv("HEALTH_MEMORY_WARNING_PERCENT", DEFAULT_MEMORY_WARNING_PERCENT)
            ),
            coalesce_refresh=_env_bool("HEALTH_COALESCE_REFRESH", True),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

_defaults: Optional[HealthDefaults] = None


def get_defaults() -> HealthDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = HealthDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "DEFAULT_CACHE_TIMEOUT_MS",
    "DEFAULT_PROBE_TIMEOUT_MS",
    "DEFAULT_MEMORY_WARNING_PERCENT",
    "HealthDefaults",
    "get_defaults",
    "reset_defaults",
]
