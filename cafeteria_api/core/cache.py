"""
Time-based response cache.

``ResponseCache`` is a small in-process key/value store whose entries expire
after a per-entry TTL. Keys are derived from a request path plus its sorted
query parameters, so two requests that only differ in parameter order share
one entry. Pattern invalidation lets writers drop every entry for a resource
family (for example everything under ``/carts``) after a mutation.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Pattern, Union

MINUTE = 60.0
DEFAULT_TTL_SECONDS = 5 * MINUTE

# TTL per resource family, in seconds
CACHE_TTL: Dict[str, float] = {
    "products": 10 * MINUTE,
    "orders": 2 * MINUTE,
    "user_data": 15 * MINUTE,
    "categories": 30 * MINUTE,
    "dashboard": 5 * MINUTE,
    "reviews": 5 * MINUTE,
}


@dataclass
class _Entry:
    value: Any
    expires_at: float


class ResponseCache:
    """In-memory cache with per-entry expiry and hit/miss accounting."""

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._hits = 0
        self._misses = 0

    @staticmethod
    def make_key(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build a cache key from a path and its query parameters.

        ``None`` values are dropped and the remaining parameters are sorted by name.
        """
        if not params:
            return path
        items = sorted((k, v) for k, v in params.items() if v is not None)
        if not items:
            return path
        query = "&".join(f"{k}={str(v).lower() if isinstance(v, bool) else v}" for k, v in items)
        return f"{path}?{query}"

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        self._purge_expired()
        lifetime = self.default_ttl if ttl is None else ttl
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + lifetime)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def invalidate_pattern(self, pattern: Union[str, Pattern[str]]) -> int:
        """Drop every entry whose key matches ``pattern`` (searched, not anchored).

        Returns:
            Number of entries removed
        """
        self._purge_expired()
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        doomed = [key for key in self._entries if regex.search(key)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def stats(self) -> Dict[str, Any]:
        self._purge_expired()
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "keys": list(self._entries),
        }

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)
