# report_export/cache/report_cache.py
"""
Time-bounded cache for generated reports.

Entries are stored as JSON `{"data": ..., "timestamp": ...}` strings and
expire lazily: a load that finds an entry older than the freshness window
deletes it and reports a miss. The cache is an optimization only, so save
failures are logged, never raised.
"""

import json
import time
from typing import Any, Callable, Dict, Optional

from report_export.cache.stores import KeyValueStore, MemoryStore
from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_TTL_SECONDS = 3600  # 1 hour


class ReportCache:
    """Freshness-checked report store keyed by caller-chosen strings."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store if store is not None else MemoryStore()
        self.ttl = ttl
        self.clock = clock
        self.hits = 0
        self.misses = 0

    def save(self, key: str, data: Any) -> None:
        """Store `data` under `key`, replacing any previous entry."""
        try:
            entry = json.dumps({"data": data, "timestamp": self.clock()})
            self.store.set(key, entry)
        except Exception as e:
            logger.warning(f"Failed to save report to cache key={key[:50]}: {e}")

    def load(self, key: str) -> Optional[Any]:
        """
        Cached data for `key`, or None when unset, stale or unreadable.
        Stale and unreadable entries are removed.
        """
        try:
            raw = self.store.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed key={key[:50]}: {e}")
            return self._miss()

        if raw is None:
            logger.debug(f"cache_status=miss key={key[:50]}")
            return self._miss()

        try:
            entry = json.loads(raw)
            data = entry["data"]
            timestamp = float(entry["timestamp"])
        except (ValueError, TypeError, KeyError) as e:
            logger.error(f"Failed to parse cached report key={key[:50]}: {e}")
            self._discard(key)
            return self._miss()

        if self._is_expired(timestamp):
            logger.debug(f"cache_status=expired key={key[:50]}")
            self._discard(key)
            return self._miss()

        self.hits += 1
        logger.debug(f"cache_status=hit key={key[:50]}")
        return data

    def clear(self, key: str) -> None:
        """Remove an entry unconditionally (user-triggered refresh)."""
        self.store.delete(key)

    def get_or_generate(
        self,
        key: str,
        factory: Callable[[], Any],
        force_refresh: bool = False,
    ) -> Any:
        """
        Return the cached report, or generate and cache it.

        `force_refresh` drops the cached entry first. Errors from `factory`
        propagate and nothing is cached.
        """
        if force_refresh:
            self.clear(key)
        else:
            cached = self.load(key)
            if cached is not None:
                return cached

        data = factory()
        self.save(key, data)
        return data

    def sweep_expired(self) -> int:
        """Purge every stale or unreadable entry. Returns how many were removed."""
        removed = 0
        for key in list(self.store.keys()):
            raw = self.store.peek(key)
            if raw is None:
                continue
            try:
                stale = self._is_expired(float(json.loads(raw)["timestamp"]))
            except (ValueError, TypeError, KeyError):
                stale = True
            if stale:
                self._discard(key)
                removed += 1

        if removed:
            logger.info(f"Cache sweep removed {removed} entr{'y' if removed == 1 else 'ies'}")
        return removed

    def stats(self) -> Dict[str, Any]:
        total = self.hits + self.misses
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total * 100, 2) if total else 0,
            "ttl": self.ttl,
        }

    def _is_expired(self, timestamp: float) -> bool:
        return self.clock() - timestamp > self.ttl

    def _discard(self, key: str) -> None:
        try:
            self.store.delete(key)
        except Exception as e:
            logger.warning(f"Failed to remove cache entry key={key[:50]}: {e}")

    def _miss(self) -> None:
        self.misses += 1
        return None


_report_cache: Optional[ReportCache] = None


def get_report_cache() -> ReportCache:
    """Get or create the process-wide report cache from configuration."""
    global _report_cache
    if _report_cache is None:
        from report_export.config import CACHE

        if CACHE.backend == "redis":
            from report_export.cache.stores import RedisStore
            store = RedisStore(url=CACHE.redis_url, prefix=CACHE.key_prefix)
        else:
            store = MemoryStore(max_entries=CACHE.max_entries)

        _report_cache = ReportCache(store=store, ttl=CACHE.ttl_seconds)
        logger.info(
            f"Report cache initialized: backend={CACHE.backend}, ttl={CACHE.ttl_seconds}s"
        )
    return _report_cache
