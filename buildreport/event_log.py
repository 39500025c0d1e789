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
"""Recorded build event logs and their replay through the collector.

An event log captures what a bundler reported during one build:

    {
      "startTime": 0,
      "endTime": 4200,
      "modules": [
        {"id": "src/main.js", "size": 1200, "startTime": 10, "endTime": 35},
        {"id": "src/big.js", "code": "...", "duration": 250}
      ],
      "bundle": {
        "main.js": {"fileName": "main.js", "imports": ["vendor.js"], "dependencies": ["vendor.js"], "size": 5300}
      }
    }

Module entries need an id and either startTime/endTime or a duration (measured
from the build start). Content length comes from "size" or from "code".
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional
from dataclasses import dataclass, field

from buildreport.collector import BuildReportCollector
from buildreport.constants import EventLogError
from buildreport.path_utils import content_length
from buildreport.report_types import BuildReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitEvent:
    """One recorded "unit processed" event."""

    id: str
    size: int
    start_time: float
    end_time: float


@dataclass
class EventLog:
    """A recorded build.

    Attributes:
        start_time: Build start (ms)
        end_time: Build end (ms); None derives it from the last unit
        units: Unit events in processing order
        bundle: Emitted artifacts keyed by artifact key
    """

    start_time: float
    end_time: Optional[float] = None
    units: List[UnitEvent] = field(default_factory=list)
    bundle: Dict[str, Any] = field(default_factory=dict)

    @property
    def effective_end_time(self) -> float:
        if self.end_time is not None:
            return self.end_time
        return max([self.start_time] + [unit.end_time for unit in self.units])


def _parse_unit(entry: Any, index: int, build_start: float) -> UnitEvent:
    if not isinstance(entry, Mapping):
        raise EventLogError(f"modules[{index}] must be an object")
    if "id" not in entry:
        raise EventLogError(f"modules[{index}] has no 'id'")

    try:
        if "startTime" in entry and "endTime" in entry:
            start_time = float(entry["startTime"])
            end_time = float(entry["endTime"])
        elif "duration" in entry:
            start_time = float(entry.get("startTime", build_start))
            end_time = start_time + float(entry["duration"])
        else:
            raise EventLogError(f"modules[{index}] ({entry['id']}) needs startTime/endTime or duration")

        size = int(entry["size"]) if "size" in entry else content_length(entry.get("code"))
    except (TypeError, ValueError) as e:
        raise EventLogError(f"modules[{index}] ({entry['id']}) has an invalid value: {e}") from e

    return UnitEvent(id=str(entry["id"]), size=size, start_time=start_time, end_time=end_time)


def parse_event_log(data: Mapping[str, Any]) -> EventLog:
    """Validate a decoded event log document.

    Raises:
        EventLogError: If the document does not follow the event log shape
    """
    try:
        start_time = float(data.get("startTime", 0.0))
        end_time = float(data["endTime"]) if data.get("endTime") is not None else None
    except (TypeError, ValueError) as e:
        raise EventLogError(f"Invalid build timestamps: {e}") from e

    modules = data.get("modules", [])
    if not isinstance(modules, list):
        raise EventLogError("'modules' must be a list")

    bundle = data.get("bundle", {})
    if not isinstance(bundle, Mapping):
        raise EventLogError("'bundle' must be an object keyed by artifact name")

    units = [_parse_unit(entry, index, start_time) for index, entry in enumerate(modules)]
    return EventLog(start_time=start_time, end_time=end_time, units=units, bundle=dict(bundle))


def load_event_log(filename: str) -> EventLog:
    """Load and validate an event log JSON file.

    Raises:
        EventLogError: If the file cannot be read or is malformed
    """
    try:
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise EventLogError(f"Cannot read event log '{filename}': {e}") from e

    if not isinstance(data, dict):
        raise EventLogError(f"Event log '{filename}' must contain a JSON object")

    log = parse_event_log(data)
    logger.debug("Loaded %s unit events and %s artifacts from %s", len(log.units), len(log.bundle), filename)
    return log


def replay_event_log(log: EventLog, collector: BuildReportCollector, show_summary: bool = True) -> BuildReport:
    """Feed a recorded build through the collector's hooks.

    Every logged unit is announced as discovered at the build start, so the
    progress estimate made after each recorded unit sees the full unit count.

    Args:
        log: Recorded build
        collector: Collector receiving the events
        show_summary: Print the console summary when closing the build

    Returns:
        The finalized BuildReport
    """
    collector.build_start(now=log.start_time)
    for _ in log.units:
        collector.module_parsed(now=log.start_time)
    for unit in log.units:
        collector.record_unit(unit.id, unit.size, unit.start_time, unit.end_time)
        collector.estimate_progress(now=unit.end_time)

    collector.generate_bundle(log.bundle)
    return collector.close_bundle(now=log.effective_end_time, show_summary=show_summary)
