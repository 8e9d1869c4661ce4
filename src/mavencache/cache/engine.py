"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache-fill engine: serve from disk or fetch, persist and serve.

Invariants:
- If a cache path exists, it is a complete file (or a directory to list).
- Else, if the lock registry holds a lock for that path, another coordinator
  is filling it. Once the lock is released and the path is still absent, that
  attempt failed and the next contender becomes the coordinator.
- Otherwise nobody is filling it, and the first contender to register a lock
  is the only coordinator.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from collections.abc import AsyncIterator, Sequence
from pathlib import Path

import httpx

from ..config import CacheConfig
from ..errors import ConfigError, InvalidCachePathError
from ..settings import CacheSettings
from ..upstream import FetchRejected, FetchSuccess, UpstreamClient, UpstreamTimeouts
from ..upstream.types import OCTET_STREAM
from .listing import render_listing
from .locks import DownloadLock, DownloadLockRegistry
from .persist import persist_response
from .types import HTML, CachedContent

logger = logging.getLogger("mavencache.cache")

DEFAULT_CHUNK_SIZE = 64 * 1024


async def iter_file(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Stream a file's bytes without blocking the loop."""
    handle = await asyncio.to_thread(path.open, "rb")
    try:
        while True:
            chunk = await asyncio.to_thread(handle.read, chunk_size)
            if not chunk:
                return
            yield chunk
    finally:
        handle.close()


def _log_fill_failure(path: str, task: asyncio.Task[bool]) -> None:
    # Retrieves the error even when every caller of the fill was cancelled.
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Download of '%s' failed", path, exc_info=exc)


class CacheManager:
    """
    Pull-through cache over an ordered list of upstream repositories.

    Usage::

        manager = CacheManager(["https://repo.maven.apache.org/maven2"], Path("maven"))
        content = await manager.get("org/example/lib/1.0/lib-1.0.pom")
        if content is None:
            ...  # no upstream has it

    Args:
        servers: Upstream base URLs, tried in order.
        cache_directory: Root directory of the on-disk cache.
        client: Optional preconfigured ``httpx.AsyncClient``.
        timeouts: Per-attempt upstream timeouts.
        chunk_size: Read size when streaming cached files.
    """

    def __init__(
        self,
        servers: Sequence[str],
        cache_directory: Path,
        *,
        client: httpx.AsyncClient | None = None,
        timeouts: UpstreamTimeouts | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if not servers:
            raise ConfigError("No servers provided!")
        self._servers = tuple(servers)
        cache_directory = Path(cache_directory)
        cache_directory.mkdir(parents=True, exist_ok=True)
        self._cache_directory = cache_directory.resolve()
        self._chunk_size = chunk_size
        self._locks = DownloadLockRegistry()
        self._upstream = UpstreamClient(
            client=client, timeouts=timeouts, chunk_size=chunk_size
        )
        self._fills: set[asyncio.Task[bool]] = set()

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        settings: CacheSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> "CacheManager":
        settings = settings or CacheSettings()
        return cls(
            config.servers,
            config.cache_directory,
            client=client,
            timeouts=settings.to_timeouts(),
            chunk_size=settings.chunk_size,
        )

    @property
    def servers(self) -> tuple[str, ...]:
        return self._servers

    @property
    def cache_directory(self) -> Path:
        return self._cache_directory

    @property
    def in_flight(self) -> DownloadLockRegistry:
        """Registry of locks for fills currently in progress."""
        return self._locks

    def cache_path(self, path: str) -> Path:
        """Resolve a request path to its location under the cache root."""
        if path.startswith("/"):
            raise InvalidCachePathError("Path should not start with a slash")
        root = self._cache_directory
        resolved = Path(os.path.normpath(root / path))
        if resolved != root and root not in resolved.parents:
            raise InvalidCachePathError(f"Path escapes the cache directory: '{path}'")
        return resolved

    async def get(self, path: str) -> CachedContent | None:
        """
        Return content for ``path``, fetching and caching it on a miss.

        Returns ``None`` when no upstream has the path. At most one fill per
        path runs at a time; concurrent callers wait for it and then serve
        the persisted file.
        """
        logger.info("Request for '%s'", path)
        cache_path = self.cache_path(path)
        while True:
            if cache_path.exists():
                return self._serve_existing(path, cache_path)

            lock, is_new = self._locks.try_acquire(cache_path)
            if not is_new:
                logger.debug("Waiting for in-flight download of '%s'", path)
                await lock.wait()
                # Re-check the disk: a failed attempt leaves the path absent.
                continue

            if not await self._run_fill(path, cache_path, lock):
                return None

    fetch = get

    async def _run_fill(self, path: str, cache_path: Path, lock: DownloadLock) -> bool:
        # The fill outlives a cancelled caller so waiters still get the file.
        task = asyncio.create_task(self._fill(path, cache_path, lock))
        self._fills.add(task)
        task.add_done_callback(self._fills.discard)
        task.add_done_callback(functools.partial(_log_fill_failure, path))
        return await asyncio.shield(task)

    async def _fill(self, path: str, cache_path: Path, lock: DownloadLock) -> bool:
        try:
            if cache_path.exists():
                return True
            sink = functools.partial(
                persist_response,
                cache_path=cache_path,
                temp_dir=self._cache_directory,
            )
            for server in self._servers:
                outcome = await self._upstream.fetch(server, path, sink)
                if isinstance(outcome, FetchSuccess):
                    return True
                if isinstance(outcome, FetchRejected):
                    raise outcome.error
            logger.info("No upstream server has '%s'", path)
            return False
        finally:
            self._locks.release(lock)

    def _serve_existing(self, path: str, cache_path: Path) -> CachedContent:
        logger.debug("Serving '%s' for '%s'", cache_path, path)
        if cache_path.is_dir():
            return CachedContent(
                content=render_listing(cache_path),
                content_length=None,
                content_type=HTML,
            )
        return CachedContent(
            content=iter_file(cache_path, self._chunk_size),
            content_length=cache_path.stat().st_size,
            content_type=OCTET_STREAM,
        )

    async def aclose(self) -> None:
        """Wait for in-flight fills, then close the upstream client."""
        if self._fills:
            await asyncio.gather(*self._fills, return_exceptions=True)
        await self._upstream.aclose()

    async def __aenter__(self) -> "CacheManager":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
