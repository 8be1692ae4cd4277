"""In-memory crime grade cache with a freshness window"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class GradeCache:
    """
    Normalized address -> (grade, resolved_at) map.

    Entries older than ttl_seconds are treated as absent and evicted on the
    next lookup for that key. All map access is serialized by a lock, so one
    instance can be shared by concurrent requests.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        """Return the fresh grade for key, or None on a miss"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            grade, resolved_at = entry
            if self._clock() - resolved_at < self.ttl_seconds:
                return grade

            del self._entries[key]
            return None

    def set(self, key: str, grade: str) -> None:
        with self._lock:
            self._entries[key] = (grade, self._clock())

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
