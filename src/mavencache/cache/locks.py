"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-path download locks guaranteeing a single coordinator per cache path.
"""

from __future__ import annotations

import asyncio
from collections.abc import Hashable


class DownloadLock:
    """
    Single-owner gate for one in-flight fill of one cache path.

    The lock is created already held by its coordinator. Other contenders
    ``wait()`` for its release and then re-evaluate the disk. A released lock
    is never reused.
    """

    __slots__ = ("key", "_released")

    def __init__(self, key: Hashable) -> None:
        self.key = key
        self._released = asyncio.Event()

    @property
    def released(self) -> bool:
        return self._released.is_set()

    async def wait(self) -> None:
        await self._released.wait()

    def _release(self) -> None:
        self._released.set()

    def __repr__(self) -> str:
        state = "released" if self.released else "held"
        return f"DownloadLock({self.key!r}, {state})"


class DownloadLockRegistry:
    """
    Registry of in-flight download locks keyed by resolved cache path.

    ``try_acquire`` is a single compare-and-insert on the underlying dict, so
    two contenders can never both see themselves as the new owner, and locks
    for distinct paths never contend.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, DownloadLock] = {}

    def try_acquire(self, key: Hashable) -> tuple[DownloadLock, bool]:
        """
        Register a new held lock for ``key`` unless one already exists.

        Returns the registered lock and whether it was created by this call.
        """
        candidate = DownloadLock(key)
        lock = self._locks.setdefault(key, candidate)
        return lock, lock is candidate

    def release(self, lock: DownloadLock) -> None:
        """Deregister ``lock`` and wake everyone waiting on it."""
        if self._locks.get(lock.key) is lock:
            del self._locks[lock.key]
        lock._release()

    def get(self, key: Hashable) -> DownloadLock | None:
        return self._locks.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._locks

    def __len__(self) -> int:
        return len(self._locks)
