#!/usr/bin/env python3
"""Tests for buildreport/progress.py"""

import pytest

from buildreport.progress import calculate_progress, format_progress
from buildreport.report_types import ProgressSnapshot


class TestCalculateProgress:
    """Tests for calculate_progress function."""

    def test_skips_early_units(self) -> None:
        """No estimate while fewer than skip_first_n units were processed."""
        assert calculate_progress(9, 50, start_time=0, now=900) is None
        assert calculate_progress(0, 50, start_time=0, now=900) is None

    def test_estimate_formula(self) -> None:
        """20 of 100 units in 4s means 200ms per unit and 16s remaining."""
        snapshot = calculate_progress(20, 100, start_time=1000, now=5000)

        assert snapshot is not None
        assert snapshot.elapsed_time == 4000
        assert snapshot.avg_time_per_module == pytest.approx(200)
        assert snapshot.estimated_remaining == pytest.approx(16000)
        assert snapshot.percent_complete == pytest.approx(20.0)

    def test_first_estimate_at_threshold(self) -> None:
        snapshot = calculate_progress(10, 10, start_time=0, now=1000)

        assert snapshot is not None
        assert snapshot.estimated_remaining == 0

    def test_negative_remaining_is_not_clamped(self) -> None:
        """More processed than discovered yields a negative estimate."""
        snapshot = calculate_progress(12, 10, start_time=0, now=1200)

        assert snapshot is not None
        assert snapshot.estimated_remaining == pytest.approx(-200)
        assert snapshot.display_remaining == 0.0

    def test_zero_processed_raises_when_not_skipped(self) -> None:
        with pytest.raises(ValueError):
            calculate_progress(0, 5, start_time=0, now=10, skip_first_n=0)

    def test_custom_skip(self) -> None:
        snapshot = calculate_progress(1, 4, start_time=0, now=100, skip_first_n=1)

        assert snapshot is not None
        assert snapshot.estimated_remaining == pytest.approx(300)


class TestFormatProgress:
    """Tests for format_progress function."""

    def test_format(self) -> None:
        snapshot = ProgressSnapshot(
            processed_count=20, total_modules=100, elapsed_time=4000, avg_time_per_module=200, estimated_remaining=16000
        )

        line = format_progress(snapshot)

        assert line == "⌛ Progress: 20/100 (20.0%) - estimated remaining: 16.0s"

    def test_negative_remaining_displays_zero(self) -> None:
        snapshot = ProgressSnapshot(
            processed_count=12, total_modules=10, elapsed_time=1200, avg_time_per_module=100, estimated_remaining=-200
        )

        assert format_progress(snapshot).endswith("estimated remaining: 0ms")

    def test_with_bar(self) -> None:
        snapshot = ProgressSnapshot(
            processed_count=5, total_modules=10, elapsed_time=500, avg_time_per_module=100, estimated_remaining=500
        )

        line = format_progress(snapshot, show_bar=True)

        assert "50%" in line
        assert "⌛ Progress: 5/10" in line
