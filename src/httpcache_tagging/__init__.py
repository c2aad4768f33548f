"""httpcache_tagging - Tag based invalidation for HTTP caches."""

from contextlib import suppress

# Adapters (async only)
from httpcache_tagging.adapters import (
    AsyncCacheBackend,
    AsyncEntryPurger,
    AsyncMemoryBackend,
    BackendEntryPurger,
)

# Duration parsing
from httpcache_tagging.duration import parse_duration

# Tag decoding
from httpcache_tagging.encoding import (
    CommaSeparatedTagDecoder,
    FunctionTagDecoder,
    JsonTagDecoder,
    TagDecoder,
    get_decoder,
    register_decoder,
)
from httpcache_tagging.errors import (
    ConfigurationError,
    CorruptIndexError,
    DecodeError,
    MissingDigestError,
    TaggingError,
)
from httpcache_tagging.handler import TaggingHandler
from httpcache_tagging.index import TagIndex
from httpcache_tagging.manager import AsyncTagManager, NullTagManager, TagManager
from httpcache_tagging.matcher import (
    AllowAllMatcher,
    IpRequestMatcher,
    RequestMatcher,
)
from httpcache_tagging.options import TaggingOptions
from httpcache_tagging.transport import TaggingTransport, create_tagging_transport

# Core types
from httpcache_tagging.types import ContentDigest, Duration, Tag

# Optional adapter imports - only available when dependencies are installed
with suppress(ImportError):
    from httpcache_tagging.adapters import AsyncRedisBackend

__version__ = "0.1.0"

__all__ = [
    "AllowAllMatcher",
    "AsyncCacheBackend",
    "AsyncEntryPurger",
    "AsyncMemoryBackend",
    "AsyncRedisBackend",
    "AsyncTagManager",
    "BackendEntryPurger",
    "CommaSeparatedTagDecoder",
    "ConfigurationError",
    "ContentDigest",
    "CorruptIndexError",
    "DecodeError",
    "Duration",
    "FunctionTagDecoder",
    "IpRequestMatcher",
    "JsonTagDecoder",
    "MissingDigestError",
    "NullTagManager",
    "RequestMatcher",
    "Tag",
    "TagDecoder",
    "TagIndex",
    "TagManager",
    "TaggingError",
    "TaggingHandler",
    "TaggingOptions",
    "TaggingTransport",
    "create_tagging_transport",
    "get_decoder",
    "parse_duration",
    "register_decoder",
]
