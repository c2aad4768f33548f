"""httpx transport adding tag support to a caching transport."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from httpcache_tagging.adapters.base import AsyncCacheBackend, AsyncEntryPurger
from httpcache_tagging.handler import TaggingHandler
from httpcache_tagging.index import TagIndex
from httpcache_tagging.manager import TagManager
from httpcache_tagging.matcher import RequestMatcher
from httpcache_tagging.options import TaggingOptions


class TaggingTransport(httpx.AsyncBaseTransport):
    """Wraps an async transport with tagging and purge handling.

    Purge requests are answered directly. Every other request goes to the
    wrapped transport, whose response is returned unchanged after its tags
    have been processed.

    httpx does not record where a request came from. Hosts relying on the
    default IP matcher must set request.extensions["client"] to the client
    (host, port), otherwise every purge request is answered with a 400.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport,
        handler: TaggingHandler,
    ) -> None:
        self._transport = transport
        self._handler = handler

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self._handler.handle_request(request)
        if response is not None:
            return response

        response = await self._transport.handle_async_request(request)
        await self._handler.handle_response(response)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


def create_tagging_transport(
    transport: httpx.AsyncBaseTransport,
    *,
    backend: AsyncCacheBackend,
    purger: AsyncEntryPurger,
    matcher: RequestMatcher | None = None,
    options: TaggingOptions | Mapping[str, Any] | None = None,
) -> TaggingTransport:
    """Create a tagging transport around a caching transport.

    Args:
        transport: The caching transport to wrap
        backend: Key/value backend holding the tag records
        purger: Deletes stored responses by content digest
        matcher: Gate for purge requests (default: allowed_ips option, which
            reads the client address from request.extensions["client"])
        options: Handler options

    Returns:
        TaggingTransport ready to pass to httpx.AsyncClient(transport=...)
    """
    manager = TagManager(TagIndex(backend), purger)
    handler = TaggingHandler(manager, matcher, options)
    return TaggingTransport(transport, handler)


__all__ = ["TaggingTransport", "create_tagging_transport"]
