#!/usr/bin/env python3
"""Tests for buildreport/cache_utils.py"""

from buildreport.cache_utils import CacheStatistics, ModuleCache


class TestModuleCache:
    """Tests for ModuleCache."""

    def test_hits_and_misses(self) -> None:
        cache = ModuleCache()

        assert cache.get("a.js") is None
        cache.put("a.js", "result")
        assert cache.get("a.js") == "result"
        assert "a.js" in cache
        assert len(cache) == 1

        stats = cache.statistics()
        assert stats == CacheStatistics(hits=1, misses=1, entries=1)
        assert stats.hit_rate == 0.5

    def test_clear(self) -> None:
        cache = ModuleCache()
        cache.put("a.js", "result")
        cache.get("a.js")

        cache.clear()

        assert len(cache) == 0
        assert cache.statistics() == CacheStatistics()

    def test_hit_rate_without_lookups(self) -> None:
        assert CacheStatistics().hit_rate == 0.0
