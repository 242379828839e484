"""Unit tests for the report cache."""

from unittest.mock import patch

from code_pulse.core import cache as core_cache
from code_pulse.core import config as core_config
from code_pulse.core.cache import ReportCache, get_report_cache, init_report_cache

REPORT = {"functions": [], "performance": {"overallScore": 100}}


class TestReportCache:
    """Test LRU and TTL behaviour."""

    def test_put_and_get(self):
        cache = ReportCache(max_size=5, ttl_seconds=60)
        cache.put("analyze_code", "python", "x = 1", REPORT)
        assert cache.get("analyze_code", "python", "x = 1") == REPORT

    def test_miss_then_hit(self):
        cache = ReportCache(max_size=5, ttl_seconds=60)
        assert cache.get("analyze_code", "python", "x = 1") is None
        cache.put("analyze_code", "python", "x = 1", REPORT)
        cache.get("analyze_code", "python", "x = 1")

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
        assert stats["size"] == 1
        assert stats["max_size"] == 5
        assert stats["ttl_seconds"] == 60

    def test_key_includes_tool_and_source(self):
        cache = ReportCache()
        cache.put("analyze_code", "python", "x = 1", REPORT)
        assert cache.get("parse_structure", "python", "x = 1") is None
        assert cache.get("analyze_code", "python", "x = 2") is None

    def test_language_case_insensitive(self):
        cache = ReportCache()
        cache.put("analyze_code", "Python", "x = 1", REPORT)
        assert cache.get("analyze_code", "python", "x = 1") == REPORT

    def test_lru_eviction(self):
        cache = ReportCache(max_size=2, ttl_seconds=60)
        cache.put("analyze_code", "python", "a", {"id": "a"})
        cache.put("analyze_code", "python", "b", {"id": "b"})
        # Touch "a" so "b" becomes least recently used
        cache.get("analyze_code", "python", "a")
        cache.put("analyze_code", "python", "c", {"id": "c"})

        assert len(cache.cache) == 2
        assert cache.get("analyze_code", "python", "b") is None
        assert cache.get("analyze_code", "python", "a") == {"id": "a"}
        assert cache.get("analyze_code", "python", "c") == {"id": "c"}

    def test_overwrite_does_not_evict(self):
        cache = ReportCache(max_size=2, ttl_seconds=60)
        cache.put("analyze_code", "python", "a", {"id": "a"})
        cache.put("analyze_code", "python", "b", {"id": "b"})
        cache.put("analyze_code", "python", "a", {"id": "a2"})
        assert len(cache.cache) == 2
        assert cache.get("analyze_code", "python", "a") == {"id": "a2"}

    def test_ttl_expiry(self):
        cache = ReportCache(max_size=5, ttl_seconds=10)
        with patch("code_pulse.core.cache.time.time", return_value=1000.0):
            cache.put("analyze_code", "python", "x = 1", REPORT)
        with patch("code_pulse.core.cache.time.time", return_value=1005.0):
            assert cache.get("analyze_code", "python", "x = 1") == REPORT
        with patch("code_pulse.core.cache.time.time", return_value=1011.0):
            assert cache.get("analyze_code", "python", "x = 1") is None
        assert len(cache.cache) == 0
        assert cache.misses == 1

    def test_clear(self):
        cache = ReportCache()
        cache.put("analyze_code", "python", "x = 1", REPORT)
        cache.get("analyze_code", "python", "x = 1")
        cache.clear()
        assert cache.get_stats() == {
            "size": 0,
            "max_size": cache.max_size,
            "hits": 0,
            "misses": 0,
            "hit_rate": 0,
            "ttl_seconds": cache.ttl_seconds,
        }


class TestGlobalCache:
    """Test the module-level cache accessors."""

    def test_not_initialized(self):
        assert get_report_cache() is None

    def test_init(self):
        init_report_cache(max_size=3, ttl_seconds=5)
        cache = get_report_cache()
        assert cache is core_cache._report_cache
        assert cache.max_size == 3
        assert cache.ttl_seconds == 5

    def test_disabled(self):
        init_report_cache(max_size=3, ttl_seconds=5)
        core_config.CACHE_ENABLED = False
        assert get_report_cache() is None
