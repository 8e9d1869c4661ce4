"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

simple-maven-cache: a pull-through cache for Maven-style artifact repositories.

Quick start::

    from pathlib import Path

    from mavencache import CacheManager, CacheServer

    manager = CacheManager(["https://repo.maven.apache.org/maven2"], Path("maven"))
    CacheServer(manager).run()  # http://localhost:5956
"""

from .cache import CacheManager, CachedContent, DownloadLock, DownloadLockRegistry
from .config import CacheConfig
from .errors import (
    CachePersistError,
    ConfigError,
    IncompleteBodyError,
    InvalidCachePathError,
    MavenCacheError,
    PropertiesFormatError,
)
from .props import dump_properties, load_properties, read_properties, write_properties
from .server import CacheServer, CacheServerConfig, create_cache_server
from .settings import CacheSettings
from .upstream import (
    FetchRejected,
    FetchSuccess,
    UpstreamClient,
    UpstreamFailed,
    UpstreamResponse,
    UpstreamTimeouts,
)

__all__ = [
    "CacheManager",
    "CachedContent",
    "DownloadLock",
    "DownloadLockRegistry",
    "CacheConfig",
    "CacheSettings",
    "CacheServer",
    "CacheServerConfig",
    "create_cache_server",
    "UpstreamClient",
    "UpstreamResponse",
    "UpstreamTimeouts",
    "FetchSuccess",
    "UpstreamFailed",
    "FetchRejected",
    "MavenCacheError",
    "InvalidCachePathError",
    "ConfigError",
    "PropertiesFormatError",
    "CachePersistError",
    "IncompleteBodyError",
    "load_properties",
    "dump_properties",
    "read_properties",
    "write_properties",
]
