#!/usr/bin/env python3
"""Tests for buildreport/statistics.py"""

import pytest
from typing import List

from buildreport.report_types import UnitRecord
from buildreport.statistics import calculate_module_stats, compute_duration_statistics


def unit(unit_id: str, duration: float, size: int = 0) -> UnitRecord:
    return UnitRecord(id=unit_id, duration=duration, size=size)


class TestCalculateModuleStats:
    """Tests for calculate_module_stats function."""

    def test_three_unit_scenario(self, sample_units: List[UnitRecord]) -> None:
        """Average size, slowest unit and slow subset for the reference build."""
        stats = calculate_module_stats(sample_units, 200)

        assert stats.avg_size == 2000
        assert stats.max_duration_module is not None
        assert stats.max_duration_module.id == "b.js"
        assert [u.id for u in stats.slow_modules] == ["b.js"]

    def test_empty_input(self) -> None:
        """Empty input is a defined case, not an error."""
        stats = calculate_module_stats([], 200)

        assert stats.avg_size == 0
        assert stats.max_duration_module is None
        assert stats.slow_modules == ()

    def test_avg_size_is_float(self) -> None:
        """Mean of integer sizes is computed as a float."""
        stats = calculate_module_stats([unit("a", 1, 1), unit("b", 1, 2)], 200)

        assert isinstance(stats.avg_size, float)
        assert stats.avg_size == pytest.approx(1.5)

    def test_avg_size_matches_sum_over_count(self) -> None:
        sizes = [17, 4096, 333, 0, 12345, 99]
        units = [unit(f"u{i}", 10, size) for i, size in enumerate(sizes)]

        stats = calculate_module_stats(units, 200)

        assert stats.avg_size == pytest.approx(sum(sizes) / len(sizes))

    def test_max_duration_tie_picks_first(self) -> None:
        """On equal durations the first unit in input order wins."""
        units = [unit("a", 10), unit("b", 500), unit("c", 500), unit("d", 20)]

        stats = calculate_module_stats(units, 200)

        assert stats.max_duration_module is units[1]

    def test_max_duration_is_greatest(self) -> None:
        units = [unit("a", 3), unit("b", 1), unit("c", 7), unit("d", 5)]

        stats = calculate_module_stats(units, 200)

        assert stats.max_duration_module is not None
        assert all(stats.max_duration_module.duration >= u.duration for u in units)

    def test_slow_threshold_is_exclusive(self) -> None:
        """Units exactly at the threshold are not slow."""
        units = [unit("at", 200), unit("over", 200.5), unit("under", 199)]

        stats = calculate_module_stats(units, 200)

        assert [u.id for u in stats.slow_modules] == ["over"]

    @pytest.mark.parametrize("threshold", [0, 50, 100, 250, 1000])
    def test_slow_modules_preserve_order(self, threshold: float) -> None:
        """slow_modules is exactly the subset over the threshold, in input order."""
        units = [unit("a", 300), unit("b", 60), unit("c", 1200), unit("d", 100), unit("e", 260)]

        stats = calculate_module_stats(units, threshold)

        assert list(stats.slow_modules) == [u for u in units if u.duration > threshold]

    def test_default_threshold(self) -> None:
        """Without an explicit threshold the 200ms default applies."""
        stats = calculate_module_stats([unit("a", 201), unit("b", 199)])

        assert [u.id for u in stats.slow_modules] == ["a"]


class TestDurationStatistics:
    """Tests for compute_duration_statistics function."""

    def test_empty_returns_none(self) -> None:
        assert compute_duration_statistics([]) is None

    def test_single_unit(self) -> None:
        stats = compute_duration_statistics([unit("a", 42)])

        assert stats is not None
        assert stats.mean == 42
        assert stats.median == 42
        assert stats.stddev == 0.0
        assert stats.p95 == 42

    def test_distribution(self, sample_units: List[UnitRecord]) -> None:
        stats = compute_duration_statistics(sample_units)

        assert stats is not None
        assert stats.total == pytest.approx(440)
        assert stats.mean == pytest.approx(440 / 3)
        assert stats.median == pytest.approx(90)
        assert stats.min == 50
        assert stats.max == 300
        assert stats.median <= stats.p95 <= stats.p99 <= stats.max
        assert stats.stddev > 0
