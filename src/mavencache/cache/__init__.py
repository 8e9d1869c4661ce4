"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .engine import CacheManager, iter_file
from .listing import ListingEntry, list_directory, render_listing
from .locks import DownloadLock, DownloadLockRegistry
from .persist import persist_response
from .types import CachedContent

__all__ = [
    "CacheManager",
    "CachedContent",
    "DownloadLock",
    "DownloadLockRegistry",
    "ListingEntry",
    "list_directory",
    "render_listing",
    "persist_response",
    "iter_file",
]
