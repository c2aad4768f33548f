"""Handler options."""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from httpcache_tagging.encoding import TagDecoder, get_decoder
from httpcache_tagging.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class TaggingOptions:
    """Options for the tagging handler, validated on construction."""

    purge_method: str = "POST"
    tags_header: str = "X-Cache-Tags"
    invalidate_tags_header: str = "X-Cache-Invalidate-Tags"
    content_digest_header: str = "X-Content-Digest"
    tag_encoding: str | TagDecoder = "json"
    allowed_ips: tuple[str, ...] = ("127.0.0.1",)
    invalidate_from_response: bool = False

    def __post_init__(self) -> None:
        for name in (
            "purge_method",
            "tags_header",
            "invalidate_tags_header",
            "content_digest_header",
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"{name} must be a non-empty string")
        if not isinstance(self.invalidate_from_response, bool):
            raise ConfigurationError("invalidate_from_response must be a bool")
        object.__setattr__(self, "purge_method", self.purge_method.upper())
        if isinstance(self.allowed_ips, str):
            object.__setattr__(self, "allowed_ips", (self.allowed_ips,))
        else:
            object.__setattr__(self, "allowed_ips", tuple(self.allowed_ips))
        for ip in self.allowed_ips:
            try:
                ipaddress.ip_network(ip, strict=False)
            except ValueError as e:
                raise ConfigurationError(f"Invalid allowed IP {ip!r}") from e
        # Fail on unknown encodings now rather than on the first tagged message
        get_decoder(self.tag_encoding)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> TaggingOptions:
        """Build options from a mapping, rejecting unknown names."""
        valid = [f.name for f in fields(cls)]
        unknown = [str(name) for name in options if name not in valid]
        if unknown:
            raise ConfigurationError(
                'Unknown options: "{}", valid options: "{}"'.format(
                    '", "'.join(unknown), '", "'.join(valid)
                )
            )
        return cls(**options)
