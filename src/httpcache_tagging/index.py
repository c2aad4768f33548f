"""Tag index: maps each tag to the content digests of the responses it covers."""

from __future__ import annotations

import asyncio
import json
import logging
import weakref
from collections.abc import Iterable

from httpcache_tagging.adapters.base import AsyncCacheBackend
from httpcache_tagging.duration import parse_duration
from httpcache_tagging.errors import CorruptIndexError
from httpcache_tagging.types import ContentDigest, Duration, Tag

logger = logging.getLogger(__name__)


def _encode_record(identifiers: list[ContentDigest]) -> str:
    return json.dumps(identifiers, separators=(",", ":"))


def _decode_record(tag: Tag, payload: str) -> list[ContentDigest]:
    try:
        identifiers = json.loads(payload)
    except ValueError as e:
        raise CorruptIndexError(tag, payload) from e
    if not isinstance(identifiers, list) or not all(
        isinstance(i, str) for i in identifiers
    ):
        raise CorruptIndexError(tag, payload)
    return identifiers


class TagIndex:
    """Tag records kept in a key/value backend.

    Each tag is stored under its own key as a JSON list of content digests.
    A missing key is an empty record. Records are only ever deleted whole.

    Updates to one tag are serialized with a per-tag lock, so concurrent
    associations within a process never lose an identifier. Processes that
    share a backend are not coordinated.
    """

    def __init__(
        self,
        backend: AsyncCacheBackend,
        *,
        record_prefix: str = "tag:",
    ) -> None:
        self._backend = backend
        self._record_prefix = record_prefix
        self._locks: weakref.WeakValueDictionary[Tag, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _record_key(self, tag: Tag) -> str:
        return f"{self._record_prefix}{tag}"

    def _lock_for(self, tag: Tag) -> asyncio.Lock:
        lock = self._locks.get(tag)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[tag] = lock
        return lock

    async def _read(self, tag: Tag) -> list[ContentDigest] | None:
        try:
            payload = await self._backend.fetch(self._record_key(tag))
        except UnicodeDecodeError as e:
            raw = e.object.decode("utf-8", errors="replace")
            raise CorruptIndexError(tag, raw) from e
        if payload is None:
            return None
        return _decode_record(tag, payload)

    async def associate(
        self,
        tags: Iterable[Tag],
        identifier: ContentDigest,
        lifetime: Duration | None = None,
    ) -> None:
        """Add identifier to the record of every tag.

        Re-associating an identifier already in a record leaves it unchanged.
        The lifetime is advisory: it is validated but tag records never
        expire, since an expired record would hide entries from invalidation.
        """
        if lifetime is not None:
            logger.debug(
                "Lifetime of %sms for %s is advisory",
                parse_duration(lifetime),
                identifier,
            )
        for tag in dict.fromkeys(tags):
            async with self._lock_for(tag):
                identifiers = await self._read(tag) or []
                identifiers = list(dict.fromkeys([*identifiers, identifier]))
                await self._backend.save(
                    self._record_key(tag), _encode_record(identifiers)
                )

    async def resolve(self, tags: Iterable[Tag]) -> list[ContentDigest]:
        """Return the identifiers of all given tags, tag by tag.

        Identifiers shared by several tags are reported once per tag.
        """
        result: list[ContentDigest] = []
        for tag in tags:
            identifiers = await self._read(tag)
            if identifiers:
                result.extend(identifiers)
        return result

    async def remove(self, tags: Iterable[Tag]) -> None:
        """Delete the records of the given tags."""
        for tag in tags:
            await self._backend.delete(self._record_key(tag))
