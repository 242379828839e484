"""Report caching for code-pulse tools."""
import hashlib
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from code_pulse.constants import CacheDefaults


class ReportCache:
    """Simple LRU cache with TTL for analysis reports.

    Reports are pure functions of (tool, language, source text), so identical
    requests can be answered without re-running the analyzers. Uses OrderedDict
    for LRU eviction and timestamps for TTL expiration.
    """

    def __init__(self, max_size: int = CacheDefaults.DEFAULT_CACHE_SIZE, ttl_seconds: int = CacheDefaults.TTL_SECONDS) -> None:
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries to cache
            ttl_seconds: Time-to-live for cache entries in seconds
        """
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.cache: OrderedDict[str, Tuple[Dict[str, Any], float]] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def _make_key(self, tool: str, language: str, source: str) -> str:
        key_str = "\x00".join([tool, language.strip().lower(), source])
        return hashlib.sha256(key_str.encode()).hexdigest()[:CacheDefaults.CACHE_KEY_LENGTH]

    def get(self, tool: str, language: str, source: str) -> Optional[Dict[str, Any]]:
        """Get a cached report if available and not expired.

        Args:
            tool: Name of the tool that produced the report
            language: Language id of the source
            source: Source text that was analyzed

        Returns:
            Cached report if found and valid, None otherwise
        """
        key = self._make_key(tool, language, source)

        with self._lock:
            if key not in self.cache:
                self.misses += 1
                return None

            report, timestamp = self.cache[key]

            if time.time() - timestamp > self.ttl_seconds:
                del self.cache[key]
                self.misses += 1
                return None

            self.cache.move_to_end(key)
            self.hits += 1
            return report

    def put(self, tool: str, language: str, source: str, report: Dict[str, Any]) -> None:
        """Store a report in the cache.

        Args:
            tool: Name of the tool that produced the report
            language: Language id of the source
            source: Source text that was analyzed
            report: Report dictionary to cache
        """
        key = self._make_key(tool, language, source)

        with self._lock:
            if len(self.cache) >= self.max_size and key not in self.cache:
                self.cache.popitem(last=False)

            self.cache[key] = (report, time.time())
            self.cache.move_to_end(key)

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self.cache.clear()
            self.hits = 0
            self.misses = 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        total = self.hits + self.misses
        hit_rate = self.hits / total if total > 0 else 0
        return {
            "size": len(self.cache),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(hit_rate, 3),
            "ttl_seconds": self.ttl_seconds
        }


# Global cache instance (initialized after config is parsed)
_report_cache: Optional[ReportCache] = None


def get_report_cache() -> Optional[ReportCache]:
    """Get the global report cache instance if caching is enabled."""
    from code_pulse.core import config
    return _report_cache if config.CACHE_ENABLED else None


def init_report_cache(max_size: int, ttl_seconds: int) -> None:
    """Initialize the global report cache.

    Args:
        max_size: Maximum number of entries to cache
        ttl_seconds: Time-to-live for cache entries in seconds
    """
    global _report_cache
    _report_cache = ReportCache(max_size=max_size, ttl_seconds=ttl_seconds)
