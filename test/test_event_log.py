#!/usr/bin/env python3
"""Tests for buildreport/event_log.py"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import pytest

from buildreport.collector import BuildReportCollector
from buildreport.constants import EventLogError
from buildreport.event_log import EventLog, UnitEvent, load_event_log, parse_event_log, replay_event_log
from buildreport.options import ReportOptions


class TestParseEventLog:
    """Tests for parse_event_log function."""

    def test_parse(self, event_log_data: Dict[str, Any]) -> None:
        log = parse_event_log(event_log_data)

        assert log.start_time == 0
        assert log.end_time == 2000
        assert log.units[0] == UnitEvent(id="src/main.js", size=1200, start_time=10, end_time=40)
        # Duration is measured from the build start, size from the code
        assert log.units[2] == UnitEvent(id="src/util.js", size=19, start_time=0, end_time=15)
        assert set(log.bundle) == {"main.js", "utils.js", "vendor.js"}

    def test_end_time_derived_from_units(self) -> None:
        log = parse_event_log({"startTime": 100, "modules": [{"id": "a", "size": 1, "startTime": 100, "endTime": 450}]})

        assert log.end_time is None
        assert log.effective_end_time == 450

    def test_empty_log(self) -> None:
        log = parse_event_log({})

        assert log == EventLog(start_time=0.0)
        assert log.effective_end_time == 0.0

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"modules": {}}, "'modules' must be a list"),
            ({"modules": ["a.js"]}, "must be an object"),
            ({"modules": [{"size": 1, "duration": 5}]}, "has no 'id'"),
            ({"modules": [{"id": "a.js", "size": 1}]}, "needs startTime/endTime or duration"),
            ({"modules": [{"id": "a.js", "duration": "slow"}]}, "invalid value"),
            ({"bundle": []}, "'bundle' must be an object"),
            ({"startTime": "soon"}, "Invalid build timestamps"),
        ],
    )
    def test_malformed(self, data: Dict[str, Any], message: str) -> None:
        with pytest.raises(EventLogError, match=message):
            parse_event_log(data)


class TestLoadEventLog:
    """Tests for load_event_log function."""

    def test_load(self, event_log_file: Path) -> None:
        log = load_event_log(str(event_log_file))

        assert len(log.units) == 3

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(EventLogError, match="Cannot read event log"):
            load_event_log(str(temp_dir / "missing.json"))

    def test_not_an_object(self, temp_dir: Path) -> None:
        path = temp_dir / "events.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

        with pytest.raises(EventLogError, match="must contain a JSON object"):
            load_event_log(str(path))


class TestReplayEventLog:
    """Tests for replay_event_log function."""

    def test_replay(self, temp_dir: Path, event_log_data: Dict[str, Any]) -> None:
        collector = BuildReportCollector(ReportOptions(output_dir=str(temp_dir)))

        report = replay_event_log(parse_event_log(event_log_data), collector, show_summary=False)

        assert report.total_duration == 2000
        assert report.module_count == 3
        assert [unit.id for unit in report.slow_modules] == ["src/heavy.js"]
        assert report.max_duration_module is not None
        assert report.max_duration_module.duration == 600
        assert len(report.optimization_tips) == 1
        assert "larger than 100KB" in report.optimization_tips[0]
        assert report.circular_dependencies == ()
        assert collector.total_modules == 3
        assert (temp_dir / "build-report.json").exists()

    def test_replay_estimates_use_full_unit_count(self, temp_dir: Path, event_log_data: Dict[str, Any], caplog: Any) -> None:
        """Progress estimates during replay count every logged unit as discovered."""
        collector = BuildReportCollector(ReportOptions(output_dir=str(temp_dir), generate_json=False, generate_html=False, progress_skip_first_n=1))
        caplog.set_level(logging.INFO, logger="buildreport.collector")

        replay_event_log(parse_event_log(event_log_data), collector, show_summary=False)

        progress = [record.getMessage() for record in caplog.records if "Progress:" in record.getMessage()]
        assert progress == [
            "⌛ Progress: 1/3 (33.3%) - estimated remaining: 80ms",
            "⌛ Progress: 2/3 (66.7%) - estimated remaining: 320ms",
            "⌛ Progress: 3/3 (100.0%) - estimated remaining: 0ms",
        ]
