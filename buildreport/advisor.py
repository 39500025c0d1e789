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
"""Heuristic optimization advice for measured build units.

Each rule is an independent evaluator over the full unit list and yields at most
one finding. Findings are emitted in rule order, so new rules can be appended to
OPTIMIZATION_RULES without touching existing ones:

1. Slow third-party units (> 100ms)
2. Large files (> 100KB)
3. Very slow units (> 1s)

A unit may contribute to several findings.
"""

import logging
from typing import Callable, List, Optional, Sequence

from buildreport.constants import LARGE_FILE_BYTES, MAX_TIP_EXAMPLES, THIRD_PARTY_SLOW_MS, VERY_SLOW_MS
from buildreport.path_utils import is_third_party, normalize_path, third_party_package
from buildreport.report_types import UnitRecord

logger = logging.getLogger(__name__)

OptimizationRule = Callable[[Sequence[UnitRecord]], Optional[str]]


def slow_third_party_rule(units: Sequence[UnitRecord]) -> Optional[str]:
    """Flag third-party dependencies that take long to process."""
    offenders = sorted(
        (unit for unit in units if is_third_party(unit.id) and unit.duration > THIRD_PARTY_SLOW_MS),
        key=lambda unit: unit.duration,
        reverse=True,
    )
    if not offenders:
        return None

    examples = ", ".join(third_party_package(unit.id) for unit in offenders[:MAX_TIP_EXAMPLES])
    return (
        f"🚨 Found {len(offenders)} slow third-party libraries, e.g.: {examples}. "
        f"Check their versions or look for lighter alternatives."
    )


def large_file_rule(units: Sequence[UnitRecord]) -> Optional[str]:
    """Flag units whose content is large enough to warrant code splitting."""
    offenders = sorted((unit for unit in units if unit.size > LARGE_FILE_BYTES), key=lambda unit: unit.size, reverse=True)
    if not offenders:
        return None

    examples = ", ".join(normalize_path(unit.id) for unit in offenders[:MAX_TIP_EXAMPLES])
    return (
        f"💡 Found {len(offenders)} files larger than {LARGE_FILE_BYTES // 1000}KB, e.g.: {examples}. "
        f"Consider code splitting."
    )


def very_slow_rule(units: Sequence[UnitRecord]) -> Optional[str]:
    """Flag units that take longer than a second to process."""
    offenders = sorted((unit for unit in units if unit.duration > VERY_SLOW_MS), key=lambda unit: unit.duration, reverse=True)
    if not offenders:
        return None

    examples = ", ".join(normalize_path(unit.id) for unit in offenders[:MAX_TIP_EXAMPLES])
    return f"⚠️ Found {len(offenders)} modules taking more than 1s to process, e.g.: {examples}. These need optimization first."


OPTIMIZATION_RULES: List[OptimizationRule] = [
    slow_third_party_rule,
    large_file_rule,
    very_slow_rule,
]


def generate_optimization_tips(units: Sequence[UnitRecord], rules: Optional[Sequence[OptimizationRule]] = None) -> List[str]:
    """Apply the optimization rules to a unit list.

    Args:
        units: Unit records in processing order
        rules: Rule evaluators to apply (default: OPTIMIZATION_RULES)

    Returns:
        Findings in rule order, empty when no rule matched
    """
    if rules is None:
        rules = OPTIMIZATION_RULES

    tips = []
    for rule in rules:
        tip = rule(units)
        if tip is not None:
            tips.append(tip)

    logger.debug("Generated %s optimization tips from %s units", len(tips), len(units))
    return tips
