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
"""Aggregate statistics over measured build units."""

import logging
from typing import Optional, Sequence

import numpy as np

from buildreport.constants import DEFAULT_SLOW_THRESHOLD_MS
from buildreport.report_types import DurationStatistics, ModuleStats, UnitRecord

logger = logging.getLogger(__name__)


def calculate_module_stats(units: Sequence[UnitRecord], slow_threshold_ms: float = DEFAULT_SLOW_THRESHOLD_MS) -> ModuleStats:
    """Fold unit records into average size, slowest unit and slow unit subset.

    Empty input is a defined case and yields avg_size 0.0, no slowest unit and
    no slow units.

    Args:
        units: Unit records in processing order
        slow_threshold_ms: Units with duration strictly above this are slow

    Returns:
        ModuleStats. On equal durations the first unit in input order is the
        slowest one; slow_modules keep input order.
    """
    if not units:
        return ModuleStats(avg_size=0.0, max_duration_module=None, slow_modules=())

    avg_size = sum(unit.size for unit in units) / len(units)

    max_duration_module = units[0]
    for unit in units[1:]:
        if unit.duration > max_duration_module.duration:
            max_duration_module = unit

    slow_modules = tuple(unit for unit in units if unit.duration > slow_threshold_ms)

    logger.debug("Aggregated %s units: %s slow (threshold %sms)", len(units), len(slow_modules), slow_threshold_ms)
    return ModuleStats(avg_size=float(avg_size), max_duration_module=max_duration_module, slow_modules=slow_modules)


def compute_duration_statistics(units: Sequence[UnitRecord]) -> Optional[DurationStatistics]:
    """Compute the distribution of unit durations using numpy.

    Percentiles use numpy's linear interpolation and the standard deviation is
    the sample deviation (ddof=1), 0.0 for a single unit.

    Args:
        units: Unit records

    Returns:
        DurationStatistics, or None when there are no units
    """
    if not units:
        return None

    durations = np.array([unit.duration for unit in units], dtype=float)
    stddev = float(np.std(durations, ddof=1)) if len(durations) > 1 else 0.0

    return DurationStatistics(
        total=float(np.sum(durations)),
        mean=float(np.mean(durations)),
        median=float(np.median(durations)),
        stddev=stddev,
        p95=float(np.percentile(durations, 95)),
        p99=float(np.percentile(durations, 99)),
        min=float(np.min(durations)),
        max=float(np.max(durations)),
    )
