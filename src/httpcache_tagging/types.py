"""Core types for httpcache_tagging."""

from typing import TYPE_CHECKING, NewType

# Branded aliases - compile-time enforcement only
if TYPE_CHECKING:
    Tag = NewType("Tag", str)
    ContentDigest = NewType("ContentDigest", str)
else:
    Tag = str
    ContentDigest = str

# Duration type alias
Duration = str | int  # "30s", "5m", "2h", "1d" or milliseconds
