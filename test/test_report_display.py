#!/usr/bin/env python3
"""Tests for buildreport/report_display.py"""

import io
from typing import List

from buildreport.report_display import print_circular_dependencies, print_comparison, print_report_summary
from buildreport.report_types import BuildReport, PerformanceTrend, ReportComparison, UnitRecord


def make_report(units: List[UnitRecord]) -> BuildReport:
    return BuildReport(
        start_time=0,
        end_time=1234,
        total_duration=1234,
        modules=tuple(units),
        slow_modules=tuple(u for u in units if u.duration > 200),
        dependency_graph=(),
        module_count=len(units),
        avg_module_size=2048.0,
        max_duration_module=max(units, key=lambda u: u.duration),
        optimization_tips=("⚠️ Something to look at.",),
        circular_dependencies=(("a.js", "b.js"),),
    )


class TestPrintReportSummary:
    """Tests for print_report_summary function."""

    def test_summary(self, sample_units: List[UnitRecord]) -> None:
        out = io.StringIO()

        print_report_summary(make_report(sample_units), file=out)

        text = out.getvalue()
        assert "Build Performance Summary" in text
        assert "1.23s" in text
        assert "2.00KB" in text
        assert "1. b.js" in text
        assert "⚠️ Something to look at." in text
        assert "a.js → b.js → a.js" in text

    def test_slowest_limited_to_five(self) -> None:
        units = [UnitRecord(id=f"m{i}.js", duration=300 + i, size=1) for i in range(8)]
        out = io.StringIO()

        print_report_summary(make_report(units), file=out)

        text = out.getvalue()
        assert "1. m7.js" in text
        assert "5. m3.js" in text
        assert "m2.js" not in text


class TestPrintCircularDependencies:
    """Tests for print_circular_dependencies function."""

    def test_self_loop(self) -> None:
        out = io.StringIO()

        print_circular_dependencies([["d.js"]], file=out)

        assert "d.js → d.js" in out.getvalue()

    def test_truncates(self) -> None:
        out = io.StringIO()

        print_circular_dependencies([[f"f{i}"] for i in range(25)], file=out)

        assert "... and 5 more" in out.getvalue()


class TestPrintComparison:
    """Tests for print_comparison function."""

    def test_comparison(self) -> None:
        out = io.StringIO()
        comparison = ReportComparison(
            duration_change="+12.5%",
            new_slow_modules=[UnitRecord(id="new.js", duration=450, size=1)],
            removed_slow_modules=[UnitRecord(id="old.js", duration=10, size=1)],
            performance_trend=PerformanceTrend.DEGRADED,
            duration_change_pct=12.5,
        )

        print_comparison(comparison, file=out)

        text = out.getvalue()
        assert "+12.5%" in text
        assert "degraded" in text
        assert "+ new.js (450ms)" in text
        assert "- old.js" in text
