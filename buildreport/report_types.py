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
"""Type definitions for build reports.

This module contains the dataclasses shared by the collector, the analysis helpers
and the report emitters. All records are immutable once created.
"""

from enum import Enum
from typing import List, Optional, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class UnitRecord:
    """One measured build unit.

    Attributes:
        id: Normalized, platform independent path or identifier
        duration: Processing time in milliseconds
        size: Byte length of the unit's content
        start_time: Monotonic timestamp (ms) when processing started
        end_time: Monotonic timestamp (ms) when processing completed
    """

    id: str
    duration: float
    size: int
    start_time: float = 0.0
    end_time: float = 0.0


@dataclass(frozen=True)
class DependencyNode:
    """One emitted build artifact.

    Attributes:
        file: Artifact identifier, unique within one graph
        imports: Identifiers this artifact imports, in emitted order
        size: Byte length of the generated content
        dependencies: Identifiers used for cycle analysis (may differ from imports)
    """

    file: str
    imports: Tuple[str, ...] = ()
    size: int = 0
    dependencies: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time build progress estimate.

    Attributes:
        processed_count: Units processed so far
        total_modules: Units discovered so far (may grow during the build)
        elapsed_time: Milliseconds since build start
        avg_time_per_module: elapsed_time / processed_count
        estimated_remaining: (total_modules - processed_count) * avg_time_per_module,
            negative when more units were processed than discovered
    """

    processed_count: int
    total_modules: int
    elapsed_time: float
    avg_time_per_module: float
    estimated_remaining: float

    @property
    def display_remaining(self) -> float:
        """Estimated remaining time clamped to zero for display."""
        return max(0.0, self.estimated_remaining)

    @property
    def percent_complete(self) -> float:
        if self.total_modules <= 0:
            return 0.0
        return 100.0 * self.processed_count / self.total_modules


@dataclass(frozen=True)
class ModuleStats:
    """Aggregate statistics over a sequence of unit records.

    Attributes:
        avg_size: Arithmetic mean of unit sizes (0.0 for no units)
        max_duration_module: First unit with the greatest duration, None for no units
        slow_modules: Units over the slow threshold, in input order
    """

    avg_size: float
    max_duration_module: Optional[UnitRecord]
    slow_modules: Tuple[UnitRecord, ...]


@dataclass(frozen=True)
class DurationStatistics:
    """Distribution of unit processing durations (milliseconds).

    Attributes:
        total: Sum of all durations
        mean: Mean duration
        median: Median duration
        stddev: Sample standard deviation (0 for a single unit)
        p95: 95th percentile
        p99: 99th percentile
        min: Shortest duration
        max: Longest duration
    """

    total: float
    mean: float
    median: float
    stddev: float
    p95: float
    p99: float
    min: float
    max: float


@dataclass(frozen=True)
class BuildReport:
    """Finalized report for one build.

    Created by BuildReportCollector.finalize() after every derived field has been
    computed. Handed to the report emitters as-is.

    Attributes:
        start_time: Build start timestamp (ms)
        end_time: Build end timestamp (ms)
        total_duration: end_time - start_time
        modules: Measured units in processing order
        slow_modules: Units over the configured slow threshold
        dependency_graph: Emitted artifacts
        module_count: len(modules)
        avg_module_size: Mean unit size in bytes
        max_duration_module: Slowest unit (None when no units were measured)
        optimization_tips: Human readable findings
        circular_dependencies: Cycles found in the dependency graph
        duration_statistics: Duration distribution (None when no units were measured)
    """

    start_time: float
    end_time: float
    total_duration: float
    modules: Tuple[UnitRecord, ...]
    slow_modules: Tuple[UnitRecord, ...]
    dependency_graph: Tuple[DependencyNode, ...]
    module_count: int
    avg_module_size: float
    max_duration_module: Optional[UnitRecord]
    optimization_tips: Tuple[str, ...]
    circular_dependencies: Tuple[Tuple[str, ...], ...] = ()
    duration_statistics: Optional[DurationStatistics] = None


class PerformanceTrend(Enum):
    """Direction of build time change between two reports."""

    IMPROVED = "improved"
    DEGRADED = "degraded"
    STABLE = "stable"


@dataclass
class ReportComparison:
    """Differences between a baseline report and the current report.

    Attributes:
        duration_change: Signed percentage change of total duration (e.g. "+12.5%")
        new_slow_modules: Units slow now but not in the baseline
        removed_slow_modules: Units slow in the baseline but not now
        performance_trend: Overall direction of the change
        duration_change_pct: Numeric change, None when the baseline duration is 0
    """

    duration_change: str
    new_slow_modules: List[UnitRecord] = field(default_factory=list)
    removed_slow_modules: List[UnitRecord] = field(default_factory=list)
    performance_trend: PerformanceTrend = PerformanceTrend.STABLE
    duration_change_pct: Optional[float] = None
