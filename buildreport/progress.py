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
"""Build progress estimation from a partial stream of processed units."""

import time
from typing import Optional

from buildreport.color_utils import progress_bar
from buildreport.constants import DEFAULT_PROGRESS_SKIP_FIRST_N
from buildreport.path_utils import format_duration
from buildreport.report_types import ProgressSnapshot


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


def calculate_progress(
    processed_count: int,
    total_modules: int,
    start_time: float,
    now: Optional[float] = None,
    skip_first_n: int = DEFAULT_PROGRESS_SKIP_FIRST_N,
) -> Optional[ProgressSnapshot]:
    """Estimate remaining build time from the average time per processed unit.

    No estimate is produced for the first skip_first_n units because early
    averages vary too much. The remaining time is reported unclamped: it is
    negative when more units were processed than discovered so far.

    Args:
        processed_count: Units processed so far
        total_modules: Units discovered so far
        start_time: Build start timestamp (ms, monotonic)
        now: Current timestamp (ms, monotonic); defaults to monotonic_ms()
        skip_first_n: Minimum processed count before estimating

    Returns:
        ProgressSnapshot, or None while processed_count < skip_first_n

    Raises:
        ValueError: If an estimate is requested for zero processed units
            (only reachable with skip_first_n=0)
    """
    if processed_count < skip_first_n:
        return None
    if processed_count <= 0:
        raise ValueError("progress estimation requires at least one processed unit")

    if now is None:
        now = monotonic_ms()

    elapsed_time = now - start_time
    avg_time_per_module = elapsed_time / processed_count
    estimated_remaining = (total_modules - processed_count) * avg_time_per_module

    return ProgressSnapshot(
        processed_count=processed_count,
        total_modules=total_modules,
        elapsed_time=elapsed_time,
        avg_time_per_module=avg_time_per_module,
        estimated_remaining=estimated_remaining,
    )


def format_progress(snapshot: ProgressSnapshot, show_bar: bool = False) -> str:
    """Format a progress snapshot as a one-line status message."""
    line = (
        f"⌛ Progress: {snapshot.processed_count}/{snapshot.total_modules} "
        f"({snapshot.percent_complete:.1f}%) - estimated remaining: {format_duration(snapshot.display_remaining)}"
    )
    if show_bar:
        line = f"{progress_bar(snapshot.processed_count, snapshot.total_modules)} {line}"
    return line
