# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the health aggregator.
"""

from core.config.defaults import (
    HealthDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "HealthDefaults",
    "get_defaults",
    "reset_defaults",
]
