"""Base adapter protocols for storage backends."""

from typing import Protocol, runtime_checkable

from httpcache_tagging.types import ContentDigest, Duration


@runtime_checkable
class AsyncCacheBackend(Protocol):
    """Async key/value backend holding serialized tag records."""

    async def fetch(self, key: str) -> str | None:
        """Get the value stored at key, or None if absent."""
        ...

    async def save(self, key: str, value: str, ttl: Duration | None = None) -> None:
        """Store a value, optionally expiring after ttl."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key. Deleting an absent key is a no-op."""
        ...

    async def clear(self) -> None:
        """Clear all stored values."""
        ...

    async def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        ...


@runtime_checkable
class AsyncEntryPurger(Protocol):
    """Removes one stored HTTP response from the underlying cache."""

    async def purge(self, identifier: ContentDigest) -> None:
        """Delete the cached response identified by its content digest."""
        ...
