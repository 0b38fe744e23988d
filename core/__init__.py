# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, configuration and logging helpers
# CREATED: 18 OCT 2026
# ============================================================================

from core.contracts import ComponentStatus, OverallStatus, ReportType
from core.config import HealthDefaults, get_defaults, reset_defaults
from core.logging import configure_logging, get_logger, log_context

__all__ = [
    # Enums
    "ComponentStatus",
    "OverallStatus",
    "ReportType",
    # Config
    "HealthDefaults",
    "get_defaults",
    "reset_defaults",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]
