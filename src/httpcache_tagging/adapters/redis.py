"""Redis storage backend."""

from __future__ import annotations

from typing import Any

from httpcache_tagging.duration import parse_duration
from httpcache_tagging.types import Duration


class AsyncRedisBackend:
    """Async Redis key/value backend."""

    def __init__(
        self,
        client: Any,  # redis.asyncio.Redis
        *,
        prefix: str = "httpcache_tagging",
    ) -> None:
        self._client = client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        """Generate the full Redis key."""
        return f"{self._prefix}:{key}"

    async def fetch(self, key: str) -> str | None:
        """Get the value stored at key, or None if absent."""
        data = await self._client.get(self._key(key))
        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return str(data)

    async def save(self, key: str, value: str, ttl: Duration | None = None) -> None:
        """Store a value, expiring after ttl when given."""
        px = parse_duration(ttl) if ttl is not None else None
        await self._client.set(self._key(key), value, px=px)

    async def delete(self, key: str) -> None:
        """Delete a key."""
        await self._client.delete(self._key(key))

    async def clear(self) -> None:
        """Clear all values under this backend's prefix."""
        # Use SCAN to find and delete all prefixed keys
        cursor: int = 0
        pattern = f"{self._prefix}:*"
        while True:
            result = await self._client.scan(cursor, match=pattern, count=100)
            cursor = result[0]
            keys = result[1]
            if keys:
                await self._client.delete(*keys)
            if cursor == 0:
                break

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
