"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Atomic write of an upstream body into the cache directory.

The body is streamed into a hidden temporary file inside the cache root and
published with ``os.replace``; readers see either no file or the complete one.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, TypeVar

from ..errors import CachePersistError, IncompleteBodyError
from ..upstream.types import UpstreamResponse

logger = logging.getLogger("mavencache.cache")

T = TypeVar("T")

TEMP_PREFIX = "."
TEMP_SUFFIX = ".tmp"


async def _disk(fn: Callable[..., T], *args, **kwargs) -> T:
    """Run blocking filesystem work off the loop, reporting failures as persist errors."""
    try:
        return await asyncio.to_thread(fn, *args, **kwargs)
    except OSError as exc:
        raise CachePersistError(f"{type(exc).__name__}: {exc}") from exc


def _sync_and_close(out: BinaryIO) -> None:
    with out:
        out.flush()
        os.fsync(out.fileno())


async def _copy_bounded(
    upstream: UpstreamResponse, out: BinaryIO, *, limit: int | None
) -> int:
    written = 0
    async for chunk in upstream.content:
        if limit is not None:
            chunk = chunk[: limit - written]
        if chunk:
            await _disk(out.write, chunk)
            written += len(chunk)
        if limit is not None and written >= limit:
            break
    return written


async def persist_response(
    upstream: UpstreamResponse,
    cache_path: Path,
    *,
    temp_dir: Path,
) -> int:
    """
    Copy ``upstream`` into ``cache_path`` atomically and return the bytes written.

    At most ``upstream.content_length`` bytes are copied when it is declared;
    a shorter body raises ``IncompleteBodyError``. The temporary file is
    removed on every exit path.
    """
    fd, temp_name = await _disk(
        tempfile.mkstemp, prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=temp_dir
    )
    temp_path = Path(temp_name)
    try:
        try:
            out = await _disk(os.fdopen, fd, "wb")
        except CachePersistError:
            os.close(fd)
            raise
        try:
            written = await _copy_bounded(upstream, out, limit=upstream.content_length)
        finally:
            await _disk(_sync_and_close, out)

        expected = upstream.content_length
        if expected is not None and written < expected:
            raise IncompleteBodyError(expected=expected, received=written)

        await _disk(cache_path.parent.mkdir, parents=True, exist_ok=True)
        await _disk(os.replace, temp_path, cache_path)
    finally:
        try:
            await _disk(temp_path.unlink, missing_ok=True)
        except CachePersistError as exc:
            logger.error("Could not remove temporary file '%s': %s", temp_path, exc)

    logger.debug("Saved '%s' for later.", cache_path)
    return written
