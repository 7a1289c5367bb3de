"""
Report result cache.
"""

from report_export.cache.report_cache import ReportCache, get_report_cache, DEFAULT_TTL_SECONDS
from report_export.cache.stores import KeyValueStore, MemoryStore, RedisStore

__all__ = [
    "ReportCache",
    "get_report_cache",
    "DEFAULT_TTL_SECONDS",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
]
