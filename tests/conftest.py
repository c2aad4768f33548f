"""Shared pytest fixtures."""

import hashlib
import json

import httpx
import pytest

from httpcache_tagging import (
    AsyncMemoryBackend,
    BackendEntryPurger,
    TagIndex,
    TagManager,
)


class RecordingPurger:
    """Purger that records digests and can be told to fail for some."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.purged: list[str] = []
        self.failing = failing or set()

    async def purge(self, identifier: str) -> None:
        if identifier in self.failing:
            raise OSError(f"cannot remove {identifier}")
        self.purged.append(identifier)


class SpyTagManager:
    """Tag manager recording the calls made by the handler."""

    def __init__(self) -> None:
        self.tagged: list[tuple[list[str], str, int | None]] = []
        self.invalidated: list[list[str]] = []

    async def tag_content_digest(
        self, tags: list[str], digest: str, lifetime: int | None = None
    ) -> None:
        self.tagged.append((list(tags), digest, lifetime))

    async def invalidate_tags(self, tags: list[str]) -> None:
        self.invalidated.append(list(tags))


class StubCacheTransport(httpx.AsyncBaseTransport):
    """Tiny caching transport standing in for a real HTTP cache.

    Responses from the "application" are stored in a backend under a
    content digest, which is sent back in the X-Content-Digest header.
    """

    def __init__(self, backend: AsyncMemoryBackend) -> None:
        self.backend = backend
        self.app_headers: dict[str, str] = {}
        self.app_calls = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        cache_key = f"key:{request.method} {request.url}"
        digest = await self.backend.fetch(cache_key)
        if digest is not None:
            stored = await self.backend.fetch(f"entry:{digest}")
            if stored is not None:
                entry = json.loads(stored)
                return httpx.Response(
                    200,
                    text=entry["body"],
                    headers={**entry["headers"], "X-Cache": "fresh"},
                )

        self.app_calls += 1
        body = "ok"
        digest = "en" + hashlib.sha256(f"{cache_key}{body}".encode()).hexdigest()
        headers = {**self.app_headers, "X-Content-Digest": digest}
        await self.backend.save(cache_key, digest)
        await self.backend.save(
            f"entry:{digest}", json.dumps({"body": body, "headers": headers})
        )
        return httpx.Response(
            200, text=body, headers={**headers, "X-Cache": "miss, store"}
        )


@pytest.fixture
def backend() -> AsyncMemoryBackend:
    """Create a fresh AsyncMemoryBackend for each test."""
    return AsyncMemoryBackend()


@pytest.fixture
def index(backend: AsyncMemoryBackend) -> TagIndex:
    """Create a TagIndex over the memory backend."""
    return TagIndex(backend)


@pytest.fixture
def purger() -> RecordingPurger:
    """Create a purger that records what it deleted."""
    return RecordingPurger()


@pytest.fixture
def manager(index: TagIndex, purger: RecordingPurger) -> TagManager:
    """Create a TagManager with a recording purger."""
    return TagManager(index, purger)


@pytest.fixture
def spy_manager() -> SpyTagManager:
    """Create a tag manager spy."""
    return SpyTagManager()


@pytest.fixture
def cache_transport(backend: AsyncMemoryBackend) -> StubCacheTransport:
    """Create the stub caching transport sharing the tag backend."""
    return StubCacheTransport(backend)


@pytest.fixture
def entry_purger(backend: AsyncMemoryBackend) -> BackendEntryPurger:
    """Create a purger deleting the stub transport's stored entries."""
    return BackendEntryPurger(backend, key_prefix="entry:")
