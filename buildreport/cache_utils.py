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
"""Per-build cache of unit transform results."""

import logging
from typing import Any, Dict, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class CacheStatistics:
    """Hit/miss counters for one build.

    Attributes:
        hits: Lookups answered from the cache
        misses: Lookups that found nothing
        entries: Results currently stored
    """

    hits: int = 0
    misses: int = 0
    entries: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class ModuleCache:
    """Cache of transform results keyed by raw unit id.

    Owned by one BuildReportCollector and cleared at every build start, so
    results never leak from one build into the next.
    """

    def __init__(self) -> None:
        self._results: Dict[str, Any] = {}
        self._hits = 0
        self._misses = 0

    def __contains__(self, unit_id: str) -> bool:
        return unit_id in self._results

    def __len__(self) -> int:
        return len(self._results)

    def get(self, unit_id: str) -> Optional[Any]:
        """Return the cached result for a unit, counting the lookup."""
        if unit_id in self._results:
            self._hits += 1
            return self._results[unit_id]
        self._misses += 1
        return None

    def put(self, unit_id: str, result: Any) -> None:
        self._results[unit_id] = result

    def clear(self) -> None:
        """Drop all results and reset the counters."""
        if self._results:
            logger.debug("Clearing module cache with %s entries", len(self._results))
        self._results.clear()
        self._hits = 0
        self._misses = 0

    def statistics(self) -> CacheStatistics:
        return CacheStatistics(hits=self._hits, misses=self._misses, entries=len(self._results))
