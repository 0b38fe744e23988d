# ============================================================================
# MEMORY CLASSIFICATION TESTS
# ============================================================================
# STATUS: Tests - Memory block of the detailed report
# PURPOSE: Verify MB conversion, usage percent and warning threshold
# CREATED: 18 OCT 2026
# ============================================================================
"""
Memory Classification Tests

Run with:
    pytest tests/test_memory.py -v
"""

from types import SimpleNamespace
from unittest.mock import patch

from core.contracts import ComponentStatus
from health.memory import MemoryStats, classify_memory, read_process_memory

MB = 1024 * 1024


class TestClassifyMemory:
    """Test classify_memory()."""

    def test_healthy_below_threshold(self):
        report = classify_memory(MemoryStats(
            heap_used=50 * MB, heap_total=100 * MB, external=3 * MB, rss=150 * MB,
        ))

        assert report.to_dict() == {
            "heapUsedMB": 50,
            "heapTotalMB": 100,
            "externalMB": 3,
            "rssMB": 150,
            "usagePercent": 50,
            "status": "healthy",
        }

    def test_warning_above_threshold(self):
        report = classify_memory(MemoryStats(heap_used=90 * MB, heap_total=100 * MB))

        assert report.usage_percent == 90
        assert report.status == ComponentStatus.WARNING

    def test_exactly_threshold_is_healthy(self):
        report = classify_memory(MemoryStats(heap_used=85 * MB, heap_total=100 * MB))

        assert report.usage_percent == 85
        assert report.status == ComponentStatus.HEALTHY

    def test_just_over_threshold_rounds_up(self):
        # 85.6% rounds to 86
        report = classify_memory(MemoryStats(heap_used=856, heap_total=1000))

        assert report.usage_percent == 86
        assert report.status == ComponentStatus.WARNING

    def test_half_percent_rounds_up(self):
        # 12.5% is exact in binary; banker's rounding would give 12
        report = classify_memory(MemoryStats(heap_used=1, heap_total=8))

        assert report.usage_percent == 13

    def test_custom_threshold(self):
        report = classify_memory(
            MemoryStats(heap_used=60 * MB, heap_total=100 * MB),
            warning_percent=50,
        )

        assert report.status == ComponentStatus.WARNING

    def test_zero_heap_total(self):
        report = classify_memory(MemoryStats(heap_used=0, heap_total=0))

        assert report.usage_percent == 0
        assert report.status == ComponentStatus.HEALTHY

    def test_mb_rounding(self):
        report = classify_memory(MemoryStats(
            heap_used=int(1.5 * MB), heap_total=int(2.4 * MB),
        ))

        assert report.heap_used_mb == 2
        assert report.heap_total_mb == 2


class TestReadProcessMemory:
    """Test the psutil-backed reader."""

    def test_reads_positive_figures(self):
        stats = read_process_memory()

        assert stats.rss > 0
        assert stats.heap_total > 0
        assert stats.heap_used <= stats.heap_total

    def test_usage_tracks_host_pressure(self):
        process = SimpleNamespace(rss=300 * MB, shared=20 * MB)
        host = SimpleNamespace(total=1000 * MB, available=100 * MB)

        with patch("health.memory.psutil") as mock_psutil:
            mock_psutil.Process.return_value.memory_info.return_value = process
            mock_psutil.virtual_memory.return_value = host
            stats = read_process_memory()

        assert stats.heap_used == 900 * MB
        assert stats.heap_total == 1000 * MB
        assert stats.rss == 300 * MB
        assert stats.external == 20 * MB

        report = classify_memory(stats)
        assert report.usage_percent == 90
        assert report.status == ComponentStatus.WARNING
        assert report.heap_used_mb != report.rss_mb
