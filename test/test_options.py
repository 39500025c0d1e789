#!/usr/bin/env python3
"""Tests for buildreport/options.py"""

import json
from pathlib import Path

import pytest

from buildreport.constants import ConfigError, EXIT_INVALID_ARGS
from buildreport.options import ReportOptions, load_options


class TestReportOptions:
    """Tests for ReportOptions validation and construction."""

    def test_defaults(self) -> None:
        options = ReportOptions()

        assert options.slow_threshold_ms == 200
        assert options.max_build_time_ms is None
        assert options.output_dir == "dist"
        assert options.generate_html is True
        assert options.generate_json is True
        assert options.enable_progress is True
        assert options.enable_cache is True
        assert options.progress_skip_first_n == 10
        assert options.webhook_url is None
        assert options.webhook_headers == {}

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"slow_threshold_ms": -1},
            {"max_build_time_ms": 0},
            {"progress_skip_first_n": -5},
            {"output_dir": ""},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ConfigError) as exc_info:
            ReportOptions(**kwargs)

        assert exc_info.value.exit_code == EXIT_INVALID_ARGS

    def test_from_dict_camel_case(self) -> None:
        options = ReportOptions.from_dict(
            {
                "slowThreshold": 150,
                "maxBuildTime": 60000,
                "outputDir": "reports",
                "generateHtml": False,
                "webhookUrl": "https://hooks.example.com/build",
                "webhookHeaders": {"Authorization": "Bearer token"},
            }
        )

        assert options.slow_threshold_ms == 150
        assert options.max_build_time_ms == 60000
        assert options.output_dir == "reports"
        assert options.generate_html is False
        assert options.webhook_url == "https://hooks.example.com/build"
        assert options.webhook_headers == {"Authorization": "Bearer token"}

    def test_from_dict_snake_case(self) -> None:
        options = ReportOptions.from_dict({"slow_threshold_ms": 75, "enable_cache": False})

        assert options.slow_threshold_ms == 75
        assert options.enable_cache is False

    def test_unknown_keys_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        options = ReportOptions.from_dict({"colour": "blue"})

        assert options == ReportOptions()
        assert "colour" in caplog.text

    def test_wrong_type_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            ReportOptions.from_dict({"slowThreshold": "fast"})

    def test_replace_ignores_none(self) -> None:
        options = ReportOptions(slow_threshold_ms=100).replace(slow_threshold_ms=None, output_dir="out")

        assert options.slow_threshold_ms == 100
        assert options.output_dir == "out"


class TestLoadOptions:
    """Tests for load_options function."""

    def test_load(self, temp_dir: Path) -> None:
        path = temp_dir / "options.json"
        path.write_text(json.dumps({"slowThreshold": 120, "enableProgress": False}), encoding="utf-8")

        options = load_options(str(path))

        assert options.slow_threshold_ms == 120
        assert options.enable_progress is False

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read configuration file"):
            load_options(str(temp_dir / "missing.json"))

    def test_invalid_json(self, temp_dir: Path) -> None:
        path = temp_dir / "options.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_options(str(path))

    def test_not_an_object(self, temp_dir: Path) -> None:
        path = temp_dir / "options.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError, match="must contain a JSON object"):
            load_options(str(path))
