"""Storage adapters for httpcache_tagging (async only)."""

from contextlib import suppress

from httpcache_tagging.adapters.base import AsyncCacheBackend, AsyncEntryPurger
from httpcache_tagging.adapters.memory import AsyncMemoryBackend
from httpcache_tagging.adapters.purger import BackendEntryPurger

# Optional adapters - only available when dependencies are installed
with suppress(ImportError):
    from httpcache_tagging.adapters.redis import AsyncRedisBackend

__all__ = [
    "AsyncCacheBackend",
    "AsyncEntryPurger",
    "AsyncMemoryBackend",
    "AsyncRedisBackend",
    "BackendEntryPurger",
]
