"""In-memory response cache owned by a single client instance."""

import threading
import time
from typing import Any, Callable, Hashable, Optional

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache/response_cache")


class ResponseCache:
    """Thread-safe key/value cache with an optional TTL.

    Entries are never evicted by size. With ``ttl_seconds=None`` they live as
    long as the cache object; otherwise an entry is dropped on the first read
    at or after ``ttl_seconds`` past its write. Writes to an existing key
    replace the value and restart its age (last write wins).
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        logger.debug("Initializing ResponseCache", extra={"cache": name, "ttl_seconds": ttl_seconds})
        self.ttl = ttl_seconds
        self.name = name
        self._clock = clock
        self._entries: dict[Hashable, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def _expired(self, stored_at: float) -> bool:
        if self.ttl is None:
            return False
        return self._clock() - stored_at >= self.ttl

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._expired(stored_at):
                self._entries.pop(key, None)
                logger.debug("Cache entry expired", extra={"cache": self.name, "key": key})
                return None
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store `value` under `key`, stamping it with the current clock."""
        with self._lock:
            self._entries[key] = (value, self._clock())

    def age(self, key: Hashable) -> Optional[float]:
        """Seconds since `key` was written, or None if absent."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return self._clock() - entry[1]

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
