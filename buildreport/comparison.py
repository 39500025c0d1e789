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
"""Differential analysis between a baseline build report and the current one."""

import logging

from buildreport.constants import STABLE_TREND_BAND_PCT
from buildreport.report_types import BuildReport, PerformanceTrend, ReportComparison

logger = logging.getLogger(__name__)


def compare_reports(baseline: BuildReport, current: BuildReport, stable_band_pct: float = STABLE_TREND_BAND_PCT) -> ReportComparison:
    """Compare two build reports.

    Args:
        baseline: Report of an earlier build
        current: Report of the build under inspection
        stable_band_pct: Changes within +/- this percentage count as stable

    Returns:
        ReportComparison. duration_change is "n/a" (and the trend stable) when
        the baseline has no duration to compare against.
    """
    baseline_slow = {unit.id for unit in baseline.slow_modules}
    current_slow = {unit.id for unit in current.slow_modules}

    new_slow = [unit for unit in current.slow_modules if unit.id not in baseline_slow]
    removed_slow = [unit for unit in baseline.slow_modules if unit.id not in current_slow]

    if baseline.total_duration <= 0:
        logger.debug("Baseline has no duration, skipping trend computation")
        return ReportComparison(duration_change="n/a", new_slow_modules=new_slow, removed_slow_modules=removed_slow)

    change_pct = (current.total_duration - baseline.total_duration) / baseline.total_duration * 100.0
    if change_pct < -stable_band_pct:
        trend = PerformanceTrend.IMPROVED
    elif change_pct > stable_band_pct:
        trend = PerformanceTrend.DEGRADED
    else:
        trend = PerformanceTrend.STABLE

    return ReportComparison(
        duration_change=f"{change_pct:+.1f}%" if round(change_pct, 1) != 0 else "0.0%",
        new_slow_modules=new_slow,
        removed_slow_modules=removed_slow,
        performance_trend=trend,
        duration_change_pct=change_pct,
    )
