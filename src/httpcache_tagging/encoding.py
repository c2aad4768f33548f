"""Tag header decoders.

A decoder turns the raw value of a tags header into a list of tags. Two are
registered by name, ``"json"`` and ``"comma-separated"``; others can be
registered with :func:`register_decoder` or passed directly as objects
implementing :class:`TagDecoder`.
"""

import json
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from httpcache_tagging.errors import ConfigurationError, DecodeError
from httpcache_tagging.types import Tag


@runtime_checkable
class TagDecoder(Protocol):
    """Decodes a raw header value into tags."""

    def decode(self, raw: str) -> list[Tag]:
        """Decode raw into a list of tags, raising DecodeError if malformed."""
        ...


class JsonTagDecoder:
    """Decodes a JSON array of strings."""

    def decode(self, raw: str) -> list[Tag]:
        try:
            tags = json.loads(raw)
        except ValueError as e:
            raise DecodeError(
                f"Could not JSON decode tags header with value {raw!r}", raw
            ) from e
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise DecodeError(
                f"Tags header must be a JSON array of strings, got {raw!r}", raw
            )
        return [Tag(t) for t in tags]


class CommaSeparatedTagDecoder:
    """Splits on commas. Whitespace around tags is kept."""

    def decode(self, raw: str) -> list[Tag]:
        return [Tag(t) for t in raw.split(",")]


class FunctionTagDecoder:
    """Adapts a plain function to the TagDecoder protocol."""

    def __init__(self, fn: Callable[[str], list[str]]) -> None:
        self._fn = fn

    def decode(self, raw: str) -> list[Tag]:
        return [Tag(t) for t in self._fn(raw)]


_DECODERS: dict[str, TagDecoder] = {
    "json": JsonTagDecoder(),
    "comma-separated": CommaSeparatedTagDecoder(),
}


def register_decoder(name: str, decoder: TagDecoder) -> None:
    """Register a decoder under a name usable as the tag_encoding option."""
    if not isinstance(decoder, TagDecoder):
        raise ConfigurationError(f"Decoder for {name!r} must implement decode()")
    _DECODERS[name] = decoder


def get_decoder(encoding: str | TagDecoder) -> TagDecoder:
    """Look up a decoder by name, or pass a decoder object through."""
    if isinstance(encoding, str):
        try:
            return _DECODERS[encoding]
        except KeyError:
            valid = '", "'.join(_DECODERS)
            raise ConfigurationError(
                f'Invalid tag encoding option "{encoding}". It must either be '
                f'a TagDecoder or one of: "{valid}"'
            ) from None
    if isinstance(encoding, TagDecoder):
        return encoding
    raise ConfigurationError(f"Invalid tag encoding option {encoding!r}")
