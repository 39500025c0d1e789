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
"""Serialization of build reports to and from JSON documents.

The document shape uses camelCase keys so reports stay readable by the
JavaScript tooling that consumes them:

    {
      "startTime": ..., "endTime": ..., "totalDuration": ...,
      "modules": [{"id", "duration", "size", "startTime", "endTime"}, ...],
      "slowModules": [...], "dependencyGraph": [{"file", "imports", "size", "dependencies"}, ...],
      "moduleCount": ..., "avgModuleSize": ..., "maxDurationModule": {...} | null,
      "optimizationTips": [...], "circularDependencies": [[...], ...],
      "durationStatistics": {...} | null, "generatedAt": "...", "version": "1.0.0"
    }
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from buildreport.constants import REPORT_VERSION, ReportFormatError
from buildreport.report_types import BuildReport, DependencyNode, DurationStatistics, UnitRecord

logger = logging.getLogger(__name__)


def unit_to_dict(unit: UnitRecord) -> Dict[str, Any]:
    return {
        "id": unit.id,
        "duration": unit.duration,
        "size": unit.size,
        "startTime": unit.start_time,
        "endTime": unit.end_time,
    }


def node_to_dict(node: DependencyNode) -> Dict[str, Any]:
    return {
        "file": node.file,
        "imports": list(node.imports),
        "size": node.size,
        "dependencies": list(node.dependencies),
    }


def _duration_statistics_to_dict(stats: Optional[DurationStatistics]) -> Optional[Dict[str, float]]:
    if stats is None:
        return None
    return {
        "total": stats.total,
        "mean": stats.mean,
        "median": stats.median,
        "stddev": stats.stddev,
        "p95": stats.p95,
        "p99": stats.p99,
        "min": stats.min,
        "max": stats.max,
    }


def report_to_dict(report: BuildReport) -> Dict[str, Any]:
    """Convert a finalized report to a JSON compatible dictionary.

    Args:
        report: Finalized build report

    Returns:
        Dictionary in the document shape described in the module docstring
    """
    return {
        "startTime": report.start_time,
        "endTime": report.end_time,
        "totalDuration": report.total_duration,
        "modules": [unit_to_dict(unit) for unit in report.modules],
        "slowModules": [unit_to_dict(unit) for unit in report.slow_modules],
        "dependencyGraph": [node_to_dict(node) for node in report.dependency_graph],
        "moduleCount": report.module_count,
        "avgModuleSize": report.avg_module_size,
        "maxDurationModule": unit_to_dict(report.max_duration_module) if report.max_duration_module else None,
        "optimizationTips": list(report.optimization_tips),
        "circularDependencies": [list(cycle) for cycle in report.circular_dependencies],
        "durationStatistics": _duration_statistics_to_dict(report.duration_statistics),
        "generatedAt": datetime.now().isoformat(),
        "version": REPORT_VERSION,
    }


def unit_from_dict(data: Mapping[str, Any]) -> UnitRecord:
    return UnitRecord(
        id=str(data["id"]),
        duration=float(data["duration"]),
        size=int(data["size"]),
        start_time=float(data.get("startTime", 0.0)),
        end_time=float(data.get("endTime", 0.0)),
    )


def node_from_dict(data: Mapping[str, Any]) -> DependencyNode:
    return DependencyNode(
        file=str(data["file"]),
        imports=tuple(data.get("imports") or ()),
        size=int(data.get("size") or 0),
        dependencies=tuple(data.get("dependencies") or ()),
    )


def report_from_dict(data: Mapping[str, Any]) -> BuildReport:
    """Rebuild a BuildReport from its dictionary form.

    Args:
        data: Dictionary produced by report_to_dict (or the JSON report file)

    Returns:
        BuildReport

    Raises:
        ReportFormatError: If required keys are missing or malformed
    """
    try:
        modules = tuple(unit_from_dict(unit) for unit in data["modules"])
        max_duration = data.get("maxDurationModule")
        stats = data.get("durationStatistics")
        return BuildReport(
            start_time=float(data["startTime"]),
            end_time=float(data["endTime"]),
            total_duration=float(data["totalDuration"]),
            modules=modules,
            slow_modules=tuple(unit_from_dict(unit) for unit in data.get("slowModules", [])),
            dependency_graph=tuple(node_from_dict(node) for node in data.get("dependencyGraph", [])),
            module_count=int(data.get("moduleCount", len(modules))),
            avg_module_size=float(data.get("avgModuleSize", 0.0)),
            max_duration_module=unit_from_dict(max_duration) if max_duration else None,
            optimization_tips=tuple(data.get("optimizationTips", [])),
            circular_dependencies=tuple(tuple(cycle) for cycle in data.get("circularDependencies", [])),
            duration_statistics=DurationStatistics(**stats) if stats else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ReportFormatError(f"Malformed build report: {type(e).__name__}: {e}") from e


def load_report(filename: str) -> BuildReport:
    """Load a build report JSON file.

    Args:
        filename: Path to a build-report.json file

    Returns:
        BuildReport

    Raises:
        ReportFormatError: If the file cannot be read or parsed
    """
    try:
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ReportFormatError(f"Cannot read build report '{filename}': {e}") from e

    if not isinstance(data, dict):
        raise ReportFormatError(f"Build report '{filename}' must contain a JSON object")

    version = data.get("version")
    if version != REPORT_VERSION:
        logger.warning("Build report %s has version %s (expected %s)", filename, version, REPORT_VERSION)

    return report_from_dict(data)
