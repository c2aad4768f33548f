"""Exceptions raised by httpcache_tagging."""


class TaggingError(Exception):
    """Base class for all tagging errors."""


class ConfigurationError(TaggingError, ValueError):
    """Invalid options, unknown option names or an unknown tag encoding."""


class DecodeError(TaggingError, ValueError):
    """A tags header value could not be decoded into a list of tags."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class MissingDigestError(TaggingError, LookupError):
    """A tagged response carries no content digest header."""

    def __init__(self, header: str, present: list[str]) -> None:
        names = '", "'.join(present)
        super().__init__(
            f'Could not find content digest header: "{header}". '
            f'Got headers: "{names}"'
        )
        self.header = header
        self.present = present


class CorruptIndexError(TaggingError):
    """A stored tag record exists but cannot be decoded.

    This never happens in normal operation, so it is raised rather than
    treated as an empty record: dropping the record would silently skip an
    invalidation.
    """

    def __init__(self, tag: str, payload: str) -> None:
        super().__init__(f"Could not decode record for tag {tag!r}: {payload!r}")
        self.tag = tag
        self.payload = payload
