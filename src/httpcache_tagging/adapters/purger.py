"""Purgers that delete stored responses from a key/value backend."""

from httpcache_tagging.adapters.base import AsyncCacheBackend
from httpcache_tagging.types import ContentDigest


class BackendEntryPurger:
    """Deletes responses kept in an AsyncCacheBackend under their digest."""

    def __init__(self, backend: AsyncCacheBackend, *, key_prefix: str = "") -> None:
        self._backend = backend
        self._key_prefix = key_prefix

    def key_for(self, identifier: ContentDigest) -> str:
        """Return the backend key the response for identifier lives under."""
        return f"{self._key_prefix}{identifier}"

    async def purge(self, identifier: ContentDigest) -> None:
        """Delete the stored response."""
        await self._backend.delete(self.key_for(identifier))
