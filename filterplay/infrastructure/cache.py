from __future__ import annotations

import time
from typing import Dict, Optional, Tuple

from ..config import SETTINGS

MAX_ENTRIES = 16

# (stored at, PNG bytes)
CacheEntry = Tuple[float, bytes]


class ResponseCache:
    """Rendered PNGs keyed by request path and query.

    Entries expire ``ttl`` seconds after they are stored; ``None`` follows
    ``SETTINGS.cache_ttl``. Once ``max_entries`` keys are held, storing a new
    key drops the one stored earliest.
    """

    def __init__(self, ttl: Optional[float] = None, max_entries: int = MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._ttl = ttl
        self._max_entries = max_entries
        self._entries: Dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return SETTINGS.cache_ttl if self._ttl is None else self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def _expired(self, stored_at: float) -> bool:
        return time.time() - stored_at > self.ttl

    def get(self, key: str) -> Optional[bytes]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, png = entry
        if self._expired(stored_at):
            del self._entries[key]
            return None
        return png

    def put(self, key: str, png: bytes) -> None:
        if key not in self._entries and len(self._entries) >= self._max_entries:
            stale = [name for name, (stored_at, _) in self._entries.items() if self._expired(stored_at)]
            for name in stale:
                del self._entries[name]
            if len(self._entries) >= self._max_entries:
                earliest = min(self._entries, key=lambda name: self._entries[name][0])
                del self._entries[earliest]
        self._entries[key] = (time.time(), png)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


CACHE = ResponseCache()

# Served when the source cannot be loaded.
_last_good_png: bytes = b""


def remember_last_good(png: bytes) -> None:
    global _last_good_png
    _last_good_png = png


def last_good_png() -> Optional[bytes]:
    return _last_good_png or None
