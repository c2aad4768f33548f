"""Tests for package exports."""

import httpcache_tagging


def test_public_api_importable() -> None:
    """Test that the documented API is importable from the package."""
    from httpcache_tagging import (
        AsyncMemoryBackend,
        TaggingHandler,
        TaggingOptions,
        TaggingTransport,
        TagIndex,
        TagManager,
        create_tagging_transport,
    )

    assert AsyncMemoryBackend is not None
    assert TagIndex is not None
    assert TagManager is not None
    assert TaggingHandler is not None
    assert TaggingOptions is not None
    assert TaggingTransport is not None
    assert create_tagging_transport is not None


def test_all_names_exist() -> None:
    """Test that every name in __all__ is defined, optional adapters aside."""
    optional = {"AsyncRedisBackend"}
    for name in httpcache_tagging.__all__:
        if name in optional:
            continue
        assert hasattr(httpcache_tagging, name), name


def test_errors_share_base() -> None:
    """Test that all errors derive from TaggingError."""
    from httpcache_tagging import (
        ConfigurationError,
        CorruptIndexError,
        DecodeError,
        MissingDigestError,
        TaggingError,
    )

    for error in (ConfigurationError, CorruptIndexError, DecodeError, MissingDigestError):
        assert issubclass(error, TaggingError)
