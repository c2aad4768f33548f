"""In-memory storage backend (async only)."""

import asyncio
import time
from collections import OrderedDict

from httpcache_tagging.duration import parse_duration
from httpcache_tagging.types import Duration


class AsyncMemoryBackend:
    """Async in-memory key/value backend with optional LRU eviction and TTLs."""

    def __init__(self, max_items: int | None = None) -> None:
        self._values: OrderedDict[str, tuple[str, int | None]] = OrderedDict()
        self._max_items = max_items
        self._lock = asyncio.Lock()

    async def fetch(self, key: str) -> str | None:
        """Get the value stored at key, or None if absent or expired."""
        async with self._lock:
            item = self._values.get(key)
            if item is None:
                return None
            value, expires_at = item
            if expires_at is not None and time.time() * 1000 > expires_at:
                del self._values[key]
                return None
            self._values.move_to_end(key)  # LRU touch
            return value

    async def save(self, key: str, value: str, ttl: Duration | None = None) -> None:
        """Store a value."""
        expires_at = None
        if ttl is not None:
            expires_at = int(time.time() * 1000) + parse_duration(ttl)
        async with self._lock:
            self._values[key] = (value, expires_at)
            self._values.move_to_end(key)
            if self._max_items and len(self._values) > self._max_items:
                self._values.popitem(last=False)

    async def delete(self, key: str) -> None:
        """Delete a key."""
        async with self._lock:
            self._values.pop(key, None)

    async def clear(self) -> None:
        """Clear all stored values."""
        async with self._lock:
            self._values.clear()

    async def disconnect(self) -> None:
        """Disconnect from the storage backend (no-op for memory)."""
        pass
