"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error hierarchy for the cache engine, its configuration and upstream fetches.
"""

from __future__ import annotations


class MavenCacheError(RuntimeError):
    """Base error for all cache failures."""


class InvalidCachePathError(MavenCacheError, ValueError):
    """Raised when a requested path cannot map to a location under the cache root."""


class ConfigError(MavenCacheError, ValueError):
    """Raised for invalid or incomplete configuration."""


class PropertiesFormatError(ConfigError):
    """Raised when a properties file contains a malformed line."""


class CachePersistError(MavenCacheError):
    """Raised when a fetched body cannot be written into the cache directory."""


class IncompleteBodyError(MavenCacheError):
    """Raised when an upstream body ends before its declared length."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Upstream body ended after {received} of {expected} declared bytes"
        )
        self.expected = expected
        self.received = received
