"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Mapping of fetch exceptions to transient or fatal outcomes.
"""

from __future__ import annotations

import asyncio

import httpx

from ..errors import CachePersistError, IncompleteBodyError
from .types import FetchRejected, UpstreamFailed

# Failures that only disqualify the current upstream.
TRANSIENT_FETCH_ERRORS: tuple[type[BaseException], ...] = (
    httpx.RequestError,
    TimeoutError,
    asyncio.TimeoutError,
    IncompleteBodyError,
    OSError,
)

# Checked first: these would otherwise match a transient type.
FATAL_FETCH_ERRORS: tuple[type[BaseException], ...] = (CachePersistError,)


def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, FATAL_FETCH_ERRORS):
        return False
    return isinstance(exc, TRANSIENT_FETCH_ERRORS)


def classify_fetch_error(server: str, exc: BaseException) -> UpstreamFailed | FetchRejected:
    """
    Map an exception raised while fetching from ``server`` to an outcome.

    - ``httpx`` transport/request errors, timeouts, network ``OSError`` and
      short bodies -> ``UpstreamFailed``
    - persist failures and anything else -> ``FetchRejected``
    """
    if is_transient(exc):
        return UpstreamFailed(server=server, reason=f"{type(exc).__name__}: {exc}")
    return FetchRejected(server=server, error=exc)
