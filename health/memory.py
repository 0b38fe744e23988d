# ============================================================================
# MEMORY CLASSIFICATION
# ============================================================================
# STATUS: Infrastructure - Process memory block for detailed reports
# PURPOSE: Classify raw memory byte counts into the report memory block
# CREATED: 18 OCT 2026
# ============================================================================
"""
Memory Classification

classify_memory() turns raw byte counts into the detailed report's
memory block. read_process_memory() is the default reader, backed by
psutil; HealthChecker accepts any other zero-argument reader.
"""

import math
from dataclasses import dataclass
from typing import Callable

import psutil

from core.config.defaults import DEFAULT_MEMORY_WARNING_PERCENT
from core.contracts import ComponentStatus
from health.models import MemoryReport

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class MemoryStats:
    """Raw memory figures in bytes."""
    heap_used: int
    heap_total: int
    external: int = 0
    rss: int = 0


MemoryReader = Callable[[], MemoryStats]


def _round(value: float) -> int:
    # Half-up, not banker's rounding
    return int(math.floor(value + 0.5))


def _to_mb(value: int) -> int:
    return _round(value / BYTES_PER_MB)


def classify_memory(
    stats: MemoryStats,
    warning_percent: int = DEFAULT_MEMORY_WARNING_PERCENT,
) -> MemoryReport:
    """
    Build the memory block.

    usagePercent is heap_used / heap_total rounded to a whole percent;
    above warning_percent the block is a warning.
    """
    if stats.heap_total > 0:
        usage_percent = _round(stats.heap_used / stats.heap_total * 100)
    else:
        usage_percent = 0

    status = ComponentStatus.WARNING if usage_percent > warning_percent else ComponentStatus.HEALTHY

    return MemoryReport(
        heap_used_mb=_to_mb(stats.heap_used),
        heap_total_mb=_to_mb(stats.heap_total),
        external_mb=_to_mb(stats.external),
        rss_mb=_to_mb(stats.rss),
        usage_percent=usage_percent,
        status=status,
    )


def read_process_memory() -> MemoryStats:
    """
    Read memory figures for the current process and host.

    Python has no bounded heap, so the usage figures describe the memory
    this process competes for: heap_used is host memory in use
    (total - available, the figure behind psutil's percent) and heap_total
    is total host memory. rss is the process resident set; shared pages
    (where the platform reports them) are the external figure.
    """
    process_memory = psutil.Process().memory_info()
    system_memory = psutil.virtual_memory()

    return MemoryStats(
        heap_used=system_memory.total - system_memory.available,
        heap_total=system_memory.total,
        external=getattr(process_memory, "shared", 0),
        rss=process_memory.rss,
    )


__all__ = [
    "MemoryStats",
    "MemoryReader",
    "classify_memory",
    "read_process_memory",
]
