"""Time-limited cache for computed API responses.

The cache is owned by its caller: nothing expires on its own, the caller
decides when to run sweep().
"""

import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

CACHE_DURATION = 300  # 5 minutes


class ResponseCache:
    """Map of key -> (value, stored_at) with a fixed time-to-live."""

    def __init__(self, ttl: float = CACHE_DURATION, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[Any, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, stored_at: float, now: float) -> bool:
        return now - stored_at < self.ttl

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if not self._is_fresh(stored_at, self._clock()):
            return None
        return value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def sweep(self) -> int:
        """Drop expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, (_, stored_at) in self._entries.items()
                   if not self._is_fresh(stored_at, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)
