"""Tagging handler: turns HTTP headers into tagging and invalidation calls.

The handler is driven twice per message cycle. :meth:`TaggingHandler.handle_request`
runs before the wrapped pipeline and may answer a purge request itself;
:meth:`TaggingHandler.handle_response` runs on the pipeline's response and
records or invalidates tags as a side effect.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from httpcache_tagging.encoding import get_decoder
from httpcache_tagging.errors import DecodeError, MissingDigestError
from httpcache_tagging.manager import AsyncTagManager
from httpcache_tagging.matcher import IpRequestMatcher, RequestMatcher
from httpcache_tagging.options import TaggingOptions
from httpcache_tagging.types import Tag

logger = logging.getLogger(__name__)


def _max_age_ms(headers: httpx.Headers) -> int | None:
    """Return the Cache-Control max-age of a response in milliseconds."""
    for directive in headers.get("Cache-Control", "").split(","):
        name, _, value = directive.strip().partition("=")
        if name.lower() == "max-age":
            value = value.strip('"')
            # Malformed or negative values are ignored, the lifetime is advisory
            if not (value.isascii() and value.isdigit()):
                return None
            return int(value) * 1000
    return None


class TaggingHandler:
    """Processes requests and responses for tagging and invalidation."""

    def __init__(
        self,
        manager: AsyncTagManager,
        matcher: RequestMatcher | None = None,
        options: TaggingOptions | Mapping[str, Any] | None = None,
    ) -> None:
        if options is None:
            options = TaggingOptions()
        elif not isinstance(options, TaggingOptions):
            options = TaggingOptions.from_mapping(options)
        self._options = options
        self._manager = manager
        self._matcher = matcher or IpRequestMatcher(options.allowed_ips)
        self._decoder = get_decoder(options.tag_encoding)

    @property
    def options(self) -> TaggingOptions:
        return self._options

    def decode_tags(self, raw: str) -> list[Tag]:
        """Decode a header value with the configured tag encoding."""
        return self._decoder.decode(raw)

    async def handle_request(self, request: httpx.Request) -> httpx.Response | None:
        """Handle a purge request.

        Returns a response when the caller should answer with it instead of
        running the wrapped pipeline, otherwise None.
        """
        opts = self._options
        if request.method.upper() != opts.purge_method:
            return None

        raw = request.headers.get(opts.invalidate_tags_header)
        if raw is None:
            return None

        if not self._matcher.matches(request):
            logger.info("Rejected purge request for %s", request.url)
            return httpx.Response(400, content=b"")

        tags = self.decode_tags(raw)
        await self._manager.invalidate_tags(tags)
        logger.info("Invalidated tags %s", tags)

        body = 'Tags processed: "{}"'.format('", "'.join(tags))
        return httpx.Response(
            200,
            text=body,
            extensions={"reason_phrase": b"Invalidated"},
        )

    async def handle_response(self, response: httpx.Response) -> None:
        """Store tags carried by a response and, if enabled, invalidate tags."""
        opts = self._options
        if opts.tags_header in response.headers:
            await self._store_tags(response)

        if (
            opts.invalidate_from_response
            and opts.invalidate_tags_header in response.headers
        ):
            await self._invalidate_from_response(response)

    async def _store_tags(self, response: httpx.Response) -> None:
        opts = self._options
        # The digest is assigned by the underlying cache before we run
        digest = response.headers.get(opts.content_digest_header)
        if digest is None:
            raise MissingDigestError(
                opts.content_digest_header, list(response.headers.keys())
            )
        tags = self.decode_tags(response.headers[opts.tags_header])
        await self._manager.tag_content_digest(
            tags, digest, _max_age_ms(response.headers)
        )

    async def _invalidate_from_response(self, response: httpx.Response) -> None:
        raw = response.headers[self._options.invalidate_tags_header]
        try:
            tags = self.decode_tags(raw)
        except DecodeError:
            logger.warning("Ignoring undecodable invalidation header %r", raw)
            return
        await self._manager.invalidate_tags(tags)
