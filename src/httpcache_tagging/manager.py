"""Tag managers: tagging and invalidation of cached responses."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from httpcache_tagging.adapters.base import AsyncEntryPurger
from httpcache_tagging.index import TagIndex
from httpcache_tagging.types import ContentDigest, Duration, Tag

logger = logging.getLogger(__name__)


@runtime_checkable
class AsyncTagManager(Protocol):
    """Tagging and invalidation operations used by the handler."""

    async def tag_content_digest(
        self,
        tags: Sequence[Tag],
        digest: ContentDigest,
        lifetime: Duration | None = None,
    ) -> None:
        """Associate a cached response with tags."""
        ...

    async def invalidate_tags(self, tags: Sequence[Tag]) -> None:
        """Invalidate every cached response carrying any of the tags."""
        ...


class TagManager:
    """Tag manager backed by a TagIndex and a purger for stored responses."""

    def __init__(self, index: TagIndex, purger: AsyncEntryPurger) -> None:
        self._index = index
        self._purger = purger

    async def tag_content_digest(
        self,
        tags: Sequence[Tag],
        digest: ContentDigest,
        lifetime: Duration | None = None,
    ) -> None:
        """Associate the content digest with the tags."""
        await self._index.associate(tags, digest, lifetime)

    async def invalidate_tags(self, tags: Sequence[Tag]) -> None:
        """Purge the responses for the tags, then drop the tag records.

        Identifiers must be resolved before the records are removed. A failed
        purge is logged and does not keep the tag: the index is authoritative
        even when the storage layer is not.
        """
        tags = list(tags)
        digests = await self._index.resolve(tags)

        for digest in dict.fromkeys(digests):
            try:
                await self._purger.purge(digest)
            except Exception:
                logger.exception("Failed to purge cached response %s", digest)

        await self._index.remove(tags)
        logger.debug("Invalidated %d entries for tags %s", len(digests), list(tags))


class NullTagManager:
    """Tag manager that does nothing, for disabling tagging."""

    async def tag_content_digest(
        self,
        tags: Sequence[Tag],
        digest: ContentDigest,
        lifetime: Duration | None = None,
    ) -> None:
        pass

    async def invalidate_tags(self, tags: Sequence[Tag]) -> None:
        pass
