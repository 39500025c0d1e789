#!/usr/bin/env python3
"""Tests for buildreport/advisor.py"""

from typing import List, Optional, Sequence

from buildreport.advisor import (
    OPTIMIZATION_RULES,
    generate_optimization_tips,
    large_file_rule,
    slow_third_party_rule,
    very_slow_rule,
)
from buildreport.report_types import UnitRecord


class TestGenerateOptimizationTips:
    """Tests for generate_optimization_tips function."""

    def test_no_findings(self, sample_units: List[UnitRecord]) -> None:
        """Units under every threshold produce no tips."""
        assert generate_optimization_tips(sample_units) == []

    def test_empty_input(self) -> None:
        assert generate_optimization_tips([]) == []

    def test_third_party_finding_counts_two(self, third_party_units: List[UnitRecord]) -> None:
        """Two third-party units over 100ms yield one finding mentioning 2."""
        tips = generate_optimization_tips(third_party_units)

        assert len(tips) == 1
        assert "Found 2 slow third-party libraries" in tips[0]
        # Worst offender first
        assert tips[0].index("moment/moment.js") < tips[0].index("lodash/lodash.js")
        assert "tiny" not in tips[0]

    def test_rule_order(self) -> None:
        """Findings follow rule order: third-party, large files, very slow."""
        units = [
            UnitRecord(id="src/huge.js", duration=1500, size=250000),
            UnitRecord(id="/app/node_modules/pkg/index.js", duration=300, size=10),
        ]

        tips = generate_optimization_tips(units)

        assert len(tips) == 3
        assert "third-party" in tips[0]
        assert "larger than 100KB" in tips[1]
        assert "more than 1s" in tips[2]
        # One unit contributes to two findings
        assert "src/huge.js" in tips[1] and "src/huge.js" in tips[2]

    def test_custom_rules_are_appended(self) -> None:
        """New rules can be added after the built-in ones."""

        def empty_build_rule(units: Sequence[UnitRecord]) -> Optional[str]:
            return None if units else "No modules were processed."

        rules = list(OPTIMIZATION_RULES) + [empty_build_rule]

        assert generate_optimization_tips([], rules) == ["No modules were processed."]


class TestRules:
    """Tests for the individual rule evaluators."""

    def test_large_file_limits_examples_to_three(self) -> None:
        units = [UnitRecord(id=f"src/f{i}.js", duration=1, size=100001 + i) for i in range(5)]

        tip = large_file_rule(units)

        assert tip is not None
        assert "Found 5 files" in tip
        # Largest three only, by size descending
        assert "src/f4.js, src/f3.js, src/f2.js" in tip
        assert "src/f1.js" not in tip

    def test_large_file_threshold_exclusive(self) -> None:
        assert large_file_rule([UnitRecord(id="a.js", duration=1, size=100000)]) is None

    def test_very_slow_threshold_exclusive(self) -> None:
        assert very_slow_rule([UnitRecord(id="a.js", duration=1000, size=1)]) is None
        assert very_slow_rule([UnitRecord(id="a.js", duration=1000.1, size=1)]) is not None

    def test_third_party_ignores_project_units(self) -> None:
        assert slow_third_party_rule([UnitRecord(id="src/slow.js", duration=5000, size=1)]) is None

    def test_third_party_normalizes_windows_paths(self) -> None:
        tip = slow_third_party_rule([UnitRecord(id="C:\\app\\node_modules\\react\\index.js", duration=200, size=1)])

        assert tip is not None
        assert "react/index.js" in tip

    def test_third_party_nested_dependency_names_top_level_package(self) -> None:
        """A file of a nested dependency is attributed to the package that pulled it in."""
        tip = slow_third_party_rule([UnitRecord(id="/app/node_modules/a/node_modules/b/index.js", duration=150, size=1)])

        assert tip is not None
        assert "e.g.: a." in tip
        assert "b/index.js" not in tip
