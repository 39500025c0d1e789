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
"""Build orchestration: accumulates unit measurements into one build report.

A BuildReportCollector follows the hook lifecycle of a module bundler:

    collector = BuildReportCollector(ReportOptions(slow_threshold_ms=100))
    collector.build_start()
    for unit_id, code in units:
        collector.transform(code, unit_id)
        collector.module_parsed()
    collector.generate_bundle(bundle)
    report = collector.close_bundle()

The collector owns the in-progress accumulator and the per-build ModuleCache.
It is not thread safe: hosts that process units concurrently must serialize
calls into it.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional
from dataclasses import dataclass

from buildreport.advisor import generate_optimization_tips
from buildreport.cache_utils import ModuleCache
from buildreport.color_utils import print_warning
from buildreport.constants import ReportStateError
from buildreport.dependency_graph import build_dependency_graph, cross_check_cycles, detect_circular_dependencies
from buildreport.export_utils import write_dependency_report, write_html_report, write_json_report
from buildreport.options import ReportOptions
from buildreport.path_utils import content_length, normalize_path
from buildreport.progress import calculate_progress, format_progress, monotonic_ms
from buildreport.report_display import print_report_summary
from buildreport.report_types import BuildReport, DependencyNode, ProgressSnapshot, UnitRecord
from buildreport.statistics import calculate_module_stats, compute_duration_statistics
from buildreport.webhook import send_webhook_alert

logger = logging.getLogger(__name__)

# Units containing one of these markers are never measured
_SKIPPED_MARKERS = ("build-report.html", "vite-plugin-advanced-report", "virtual:", "__vite_")


@dataclass(frozen=True)
class TransformResult:
    """Result handed back to the host for one transformed unit."""

    code: str
    map: Optional[Any] = None


def should_skip_unit(unit_id: str) -> bool:
    """Check whether a unit is excluded from measurement.

    Excluded are third-party units other than stylesheets, the generated HTML
    report, the reporter's own sources and virtual modules.
    """
    if "node_modules" in unit_id and ".css" not in unit_id:
        return True
    if unit_id.startswith("\0"):
        return True
    return any(marker in unit_id for marker in _SKIPPED_MARKERS)


def build_time_exceeded(report: BuildReport, max_build_time_ms: Optional[float]) -> bool:
    """Check a finalized report against the build-time alert threshold."""
    return max_build_time_ms is not None and report.total_duration > max_build_time_ms


class BuildReportCollector:
    """Collects per-unit telemetry for one build and finalizes it into a BuildReport.

    Args:
        options: Report options (default: ReportOptions())
        clock: Callable returning a monotonic timestamp in milliseconds
    """

    def __init__(self, options: Optional[ReportOptions] = None, clock: Optional[Callable[[], float]] = None) -> None:
        self.options = options or ReportOptions()
        self.cache = ModuleCache()
        self._clock = clock or monotonic_ms
        self._started = False
        self._reset(0.0)

    def _reset(self, start_time: float) -> None:
        self.start_time = start_time
        self._modules: List[UnitRecord] = []
        self._slow_modules: List[UnitRecord] = []
        self._dependency_graph: List[DependencyNode] = []
        self.processed_count = 0
        self.total_modules = 0
        self._report: Optional[BuildReport] = None

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _ensure_collecting(self) -> None:
        if not self._started:
            raise ReportStateError("build_start() must be called before collecting build data")
        if self._report is not None:
            raise ReportStateError("build report is already finalized")

    @property
    def modules(self) -> List[UnitRecord]:
        """Units recorded so far, in processing order."""
        return list(self._modules)

    @property
    def slow_modules(self) -> List[UnitRecord]:
        return list(self._slow_modules)

    @property
    def report(self) -> Optional[BuildReport]:
        """The finalized report, None until finalize() ran."""
        return self._report

    def build_start(self, now: Optional[float] = None) -> None:
        """Start a new build, discarding all data of a previous one."""
        self._reset(self._now(now))
        self.cache.clear()
        self._started = True
        logger.info("🔍 Collecting build performance data...")

    def module_parsed(self, now: Optional[float] = None) -> Optional[ProgressSnapshot]:
        """Count a discovered unit and estimate progress when enabled.

        Returns:
            ProgressSnapshot once enough units were processed, otherwise None
        """
        self._ensure_collecting()
        self.total_modules += 1
        return self.estimate_progress(now)

    def estimate_progress(self, now: Optional[float] = None) -> Optional[ProgressSnapshot]:
        """Estimate progress from the units processed and discovered so far."""
        self._ensure_collecting()
        if not self.options.enable_progress or self.processed_count == 0:
            return None

        snapshot = calculate_progress(
            self.processed_count,
            self.total_modules,
            self.start_time,
            now=self._now(now),
            skip_first_n=self.options.progress_skip_first_n,
        )
        if snapshot is not None:
            logger.info(format_progress(snapshot))
        return snapshot

    def record_unit(self, unit_id: str, size: int, start_time: float, end_time: float) -> UnitRecord:
        """Append one measured unit to the report.

        Args:
            unit_id: Raw unit path or identifier (normalized before storing)
            size: Byte length of the unit's content
            start_time: Processing start (ms, monotonic)
            end_time: Processing end (ms, monotonic)

        Returns:
            The stored UnitRecord
        """
        self._ensure_collecting()

        unit = UnitRecord(id=normalize_path(unit_id), duration=end_time - start_time, size=size, start_time=start_time, end_time=end_time)
        self._modules.append(unit)
        self.processed_count += 1

        if unit.duration > self.options.slow_threshold_ms:
            self._slow_modules.append(unit)
            logger.debug("Slow module %s took %.1fms", unit.id, unit.duration)

        return unit

    def transform(self, code: str, unit_id: str, processor: Optional[Callable[[str], str]] = None) -> Optional[TransformResult]:
        """Process one unit, measuring how long the processor takes.

        Args:
            code: Unit source
            unit_id: Unit path or identifier
            processor: Transformation to time (default: identity)

        Returns:
            TransformResult, the cached result for a repeated unit, or None for
            units excluded from measurement
        """
        self._ensure_collecting()

        if self.options.enable_cache:
            cached = self.cache.get(unit_id)
            if cached is not None:
                return cached

        if should_skip_unit(unit_id):
            return None

        start_time = self._clock()
        output = processor(code) if processor is not None else code
        end_time = self._clock()

        result = TransformResult(code=output)
        self.record_unit(unit_id, content_length(code), start_time, end_time)

        if self.options.enable_cache:
            self.cache.put(unit_id, result)
        return result

    def generate_bundle(self, bundle: Mapping[str, Any]) -> List[DependencyNode]:
        """Build the dependency graph from the emitted artifacts.

        Writes dependencies.json when JSON output is enabled.
        """
        self._ensure_collecting()

        self._dependency_graph = build_dependency_graph(bundle)
        if self.options.generate_json:
            write_dependency_report(self._dependency_graph, self.options.output_dir)
        return list(self._dependency_graph)

    def finalize(self, now: Optional[float] = None) -> BuildReport:
        """Compute every derived field and freeze the report.

        Raises:
            ReportStateError: If the build was not started or is already finalized
        """
        self._ensure_collecting()

        end_time = self._now(now)
        stats = calculate_module_stats(self._modules, self.options.slow_threshold_ms)
        cycles = detect_circular_dependencies(self._dependency_graph)
        cross_check_cycles(self._dependency_graph, cycles)

        self._report = BuildReport(
            start_time=self.start_time,
            end_time=end_time,
            total_duration=end_time - self.start_time,
            modules=tuple(self._modules),
            slow_modules=stats.slow_modules,
            dependency_graph=tuple(self._dependency_graph),
            module_count=len(self._modules),
            avg_module_size=stats.avg_size,
            max_duration_module=stats.max_duration_module,
            optimization_tips=tuple(generate_optimization_tips(self._modules)),
            circular_dependencies=tuple(tuple(cycle) for cycle in cycles),
            duration_statistics=compute_duration_statistics(self._modules),
        )

        cache_stats = self.cache.statistics()
        logger.debug("Module cache: %s entries, %s hits, %s misses", cache_stats.entries, cache_stats.hits, cache_stats.misses)
        return self._report

    def write_reports(self, report: BuildReport) -> List[str]:
        """Write the JSON and HTML reports enabled in the options.

        Returns:
            Paths of the files written successfully
        """
        written = []
        if self.options.generate_json:
            written.append(write_json_report(report, self.options.output_dir))
        if self.options.generate_html:
            written.append(write_html_report(report, self.options.output_dir))
        return [path for path in written if path]

    def close_bundle(self, now: Optional[float] = None, show_summary: bool = True) -> BuildReport:
        """Finish the build: finalize, write reports, print the summary and alert.

        Args:
            now: End timestamp (ms); defaults to the collector's clock
            show_summary: Print the console summary

        Returns:
            The finalized BuildReport
        """
        report = self.finalize(now)
        self.write_reports(report)

        if show_summary:
            print_report_summary(report, self.options.slow_threshold_ms)

        if build_time_exceeded(report, self.options.max_build_time_ms):
            message = f"⚠️  Build time exceeded threshold: {report.total_duration:.0f}ms > {self.options.max_build_time_ms:.0f}ms"
            logger.warning("Build time %.0fms exceeded threshold %.0fms", report.total_duration, self.options.max_build_time_ms)
            print_warning(message, prefix=False)
            if self.options.webhook_url:
                send_webhook_alert(report, self.options)

        return report
