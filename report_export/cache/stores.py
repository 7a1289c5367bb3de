# report_export/cache/stores.py
"""
Key/value stores behind the report cache.

Values are opaque strings (the cache JSON-encodes its entries). A store
only has to get, set, delete and list keys.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from threading import Lock
from typing import Iterable, Optional

from report_export.utils.logger import setup_logger

logger = setup_logger(__name__)


class KeyValueStore(ABC):
    """Minimal string store interface."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> Iterable[str]:
        ...

    def peek(self, key: str) -> Optional[str]:
        """Read without counting as a use. Stores with no recency order just get()."""
        return self.get(key)


class MemoryStore(KeyValueStore):
    """
    Session-scoped in-process store with least-recently-used eviction.

    `max_entries` bounds growth for long sessions; None means unbounded.
    """

    def __init__(self, max_entries: Optional[int] = 256):
        self._data: "OrderedDict[str, str]" = OrderedDict()
        self.max_entries = max_entries
        self._lock = Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while self.max_entries is not None and len(self._data) > self.max_entries:
                oldest, _ = self._data.popitem(last=False)
                logger.debug(f"cache_eviction=lru key={oldest[:50]}")

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._data.keys())

    def peek(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def __len__(self) -> int:
        return len(self._data)


class RedisStore(KeyValueStore):
    """
    Redis-backed store. Keys are namespaced with `prefix`; the optional
    `session_ttl` makes redis drop abandoned sessions on its own.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        prefix: str = "report-cache:",
        session_ttl: Optional[int] = None,
        client=None,
    ):
        if client is None:
            import redis
            client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=2)
        self._redis = client
        self.prefix = prefix
        self.session_ttl = session_ttl

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self._redis.get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return value

    def set(self, key: str, value: str) -> None:
        if self.session_ttl:
            self._redis.setex(self._key(key), self.session_ttl, value)
        else:
            self._redis.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._redis.delete(self._key(key))

    def keys(self) -> Iterable[str]:
        keys = []
        for raw in self._redis.scan_iter(match=f"{self.prefix}*"):
            name = raw.decode('utf-8') if isinstance(raw, bytes) else raw
            keys.append(name[len(self.prefix):])
        return keys
