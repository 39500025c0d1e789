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
"""Console presentation of finalized build reports."""

import sys
import logging
from typing import Optional, Sequence, TextIO

from buildreport.color_utils import Colors, colored, duration_color
from buildreport.constants import DEFAULT_SLOW_THRESHOLD_MS, MAX_CYCLES_DISPLAY, MAX_SLOW_MODULES_DISPLAY
from buildreport.path_utils import format_duration, format_file_size
from buildreport.report_types import BuildReport, PerformanceTrend, ReportComparison

logger = logging.getLogger(__name__)


def print_report_summary(report: BuildReport, slow_threshold_ms: float = DEFAULT_SLOW_THRESHOLD_MS, file: Optional[TextIO] = None) -> None:
    """Print the build summary: totals, slowest modules and optimization tips.

    Args:
        report: Finalized build report
        slow_threshold_ms: Threshold used for duration coloring
        file: Output stream (default: sys.stdout)
    """
    out = file or sys.stdout

    print(f"\n{Colors.BRIGHT}{Colors.CYAN}=== Build Performance Summary ==={Colors.RESET}", file=out)
    print(f"⏱️  Total build time:    {Colors.BRIGHT}{report.total_duration / 1000:.2f}s{Colors.RESET}", file=out)
    print(f"📦 Modules processed:   {Colors.BRIGHT}{report.module_count}{Colors.RESET}", file=out)
    print(f"🐌 Slow modules:        {Colors.BRIGHT}{len(report.slow_modules)}{Colors.RESET}", file=out)
    print(f"📏 Average module size: {Colors.BRIGHT}{report.avg_module_size / 1024:.2f}KB{Colors.RESET}", file=out)

    stats = report.duration_statistics
    if stats is not None:
        print(
            f"{Colors.DIM}   durations: median {format_duration(stats.median)}, p95 {format_duration(stats.p95)}, "
            f"max {format_duration(stats.max)}{Colors.RESET}",
            file=out,
        )

    if report.slow_modules:
        print(f"\n{Colors.BRIGHT}🐌 Slowest {MAX_SLOW_MODULES_DISPLAY} modules:{Colors.RESET}", file=out)
        slowest = sorted(report.slow_modules, key=lambda unit: unit.duration, reverse=True)[:MAX_SLOW_MODULES_DISPLAY]
        for index, unit in enumerate(slowest, 1):
            color, style = duration_color(unit.duration, slow_threshold_ms)
            print(f"  {index}. {unit.id} ({colored(format_duration(unit.duration), color, style)}, {format_file_size(unit.size)})", file=out)

    if report.optimization_tips:
        print(f"\n{Colors.BRIGHT}💡 Optimization tips:{Colors.RESET}", file=out)
        for tip in report.optimization_tips:
            print(f"  {tip}", file=out)

    if report.circular_dependencies:
        print_circular_dependencies(report.circular_dependencies, file=out)


def print_circular_dependencies(cycles: Sequence[Sequence[str]], file: Optional[TextIO] = None) -> None:
    """Print detected cycles, at most MAX_CYCLES_DISPLAY of them."""
    out = file or sys.stdout

    print(f"\n{Colors.BRIGHT}{Colors.RED}🔁 Circular dependencies ({len(cycles)}):{Colors.RESET}", file=out)
    for index, cycle in enumerate(cycles[:MAX_CYCLES_DISPLAY], 1):
        chain = " → ".join(list(cycle) + [cycle[0]])
        print(f"  {index}. {Colors.YELLOW}{chain}{Colors.RESET}", file=out)
    if len(cycles) > MAX_CYCLES_DISPLAY:
        print(f"  {Colors.DIM}... and {len(cycles) - MAX_CYCLES_DISPLAY} more{Colors.RESET}", file=out)


def print_comparison(comparison: ReportComparison, file: Optional[TextIO] = None) -> None:
    """Print the differences against a baseline report."""
    out = file or sys.stdout

    trend_colors = {
        PerformanceTrend.IMPROVED: Colors.GREEN,
        PerformanceTrend.DEGRADED: Colors.RED,
        PerformanceTrend.STABLE: Colors.CYAN,
    }
    trend = comparison.performance_trend

    print(f"\n{Colors.BRIGHT}{Colors.CYAN}=== Comparison With Baseline ==={Colors.RESET}", file=out)
    print(f"Build time change: {Colors.BRIGHT}{comparison.duration_change}{Colors.RESET}", file=out)
    print(f"Trend: {trend_colors[trend]}{trend.value}{Colors.RESET}", file=out)

    if comparison.new_slow_modules:
        print(f"\n{Colors.RED}New slow modules ({len(comparison.new_slow_modules)}):{Colors.RESET}", file=out)
        for unit in comparison.new_slow_modules:
            print(f"  + {unit.id} ({format_duration(unit.duration)})", file=out)

    if comparison.removed_slow_modules:
        print(f"\n{Colors.GREEN}No longer slow ({len(comparison.removed_slow_modules)}):{Colors.RESET}", file=out)
        for unit in comparison.removed_slow_modules:
            print(f"  - {unit.id}", file=out)
