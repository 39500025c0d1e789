#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Report options for the build-report collector.

Options are supplied once at startup, either programmatically, from a JSON
configuration file, or from command-line overrides:

    from buildreport.options import ReportOptions, load_options

    options = load_options("build-report.json").replace(slow_threshold_ms=100)

Both snake_case keys and the camelCase keys used by JavaScript build tool
configurations (slowThreshold, maxBuildTime, ...) are accepted.
"""

import json
import logging
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from buildreport.constants import ConfigError, DEFAULT_OUTPUT_DIR, DEFAULT_PROGRESS_SKIP_FIRST_N, DEFAULT_SLOW_THRESHOLD_MS

logger = logging.getLogger(__name__)

# camelCase configuration keys -> field names
_CAMEL_CASE_KEYS: Dict[str, str] = {
    "slowThreshold": "slow_threshold_ms",
    "slowThresholdMs": "slow_threshold_ms",
    "maxBuildTime": "max_build_time_ms",
    "outputDir": "output_dir",
    "generateHtml": "generate_html",
    "generateJson": "generate_json",
    "enableProgress": "enable_progress",
    "enableCache": "enable_cache",
    "progressSkipFirstN": "progress_skip_first_n",
    "webhookUrl": "webhook_url",
    "webhookHeaders": "webhook_headers",
}


@dataclass(frozen=True)
class ReportOptions:
    """Immutable collector configuration.

    Attributes:
        slow_threshold_ms: Units slower than this are slow modules
        max_build_time_ms: Build-time alert threshold (None disables the check)
        output_dir: Directory receiving the report files
        generate_html: Write build-report.html
        generate_json: Write build-report.json
        enable_progress: Log progress estimates while units are processed
        enable_cache: Reuse transform results for repeated unit ids
        progress_skip_first_n: Minimum processed units before estimating progress
        webhook_url: Alert endpoint for builds exceeding max_build_time_ms
        webhook_headers: Extra HTTP headers for the alert request
    """

    slow_threshold_ms: float = DEFAULT_SLOW_THRESHOLD_MS
    max_build_time_ms: Optional[float] = None
    output_dir: str = DEFAULT_OUTPUT_DIR
    generate_html: bool = True
    generate_json: bool = True
    enable_progress: bool = True
    enable_cache: bool = True
    progress_skip_first_n: int = DEFAULT_PROGRESS_SKIP_FIRST_N
    webhook_url: Optional[str] = None
    webhook_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.slow_threshold_ms < 0:
            raise ConfigError(f"slow_threshold_ms must be non-negative, got {self.slow_threshold_ms}")
        if self.max_build_time_ms is not None and self.max_build_time_ms <= 0:
            raise ConfigError(f"max_build_time_ms must be positive, got {self.max_build_time_ms}")
        if self.progress_skip_first_n < 0:
            raise ConfigError(f"progress_skip_first_n must be non-negative, got {self.progress_skip_first_n}")
        if not self.output_dir:
            raise ConfigError("output_dir must not be empty")
        if not isinstance(self.webhook_headers, dict):
            raise ConfigError("webhook_headers must be a mapping of header names to values")

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ReportOptions":
        """Create options from a configuration mapping.

        Args:
            data: Configuration with snake_case or camelCase keys

        Returns:
            Validated ReportOptions

        Raises:
            ConfigError: If a value has the wrong type or is out of range
        """
        known = {f.name for f in dataclasses.fields(ReportOptions)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                logger.warning("Ignoring unknown report option '%s'", key)
                continue
            values[name] = value

        if "webhook_headers" in values and values["webhook_headers"] is not None:
            values["webhook_headers"] = dict(values["webhook_headers"])

        try:
            return ReportOptions(**values)
        except TypeError as e:
            raise ConfigError(f"Invalid report option value: {e}") from e

    def replace(self, **overrides: Any) -> "ReportOptions":
        """Return a copy with the given overrides; None values are ignored."""
        changes = {name: value for name, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)


def load_options(filename: str) -> ReportOptions:
    """Load report options from a JSON configuration file.

    Args:
        filename: Path to the JSON file

    Returns:
        Validated ReportOptions

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object
    """
    try:
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read configuration file '{filename}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file '{filename}' must contain a JSON object")

    logger.debug("Loaded report options from %s", filename)
    return ReportOptions.from_dict(data)
