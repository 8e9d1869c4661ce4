"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Upstream response and fetch outcome types.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass

OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class UpstreamTimeouts:
    """
    Per-attempt timeouts for one upstream request.

    Attributes:
        connect_s: Connection establishment bound.
        read_s: Longest allowed stall between body chunks.
        request_s: Bound on the time until response headers arrive.
    """

    connect_s: float | None = 5.0
    read_s: float | None = 5.0
    request_s: float | None = 5.0


@dataclass(frozen=True, slots=True)
class UpstreamResponse:
    """
    In-flight upstream body.

    ``content_length``, when declared, is exactly how many bytes are copied
    out of ``content``.
    """

    content: AsyncIterator[bytes]
    content_length: int | None = None
    content_type: str = OCTET_STREAM

    def __post_init__(self) -> None:
        if self.content_length is not None and self.content_length < 0:
            raise ValueError("Content length must be greater than or equal to zero")


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    """The upstream answered with a success status and the body was consumed."""

    server: str
    content_length: int | None


@dataclass(frozen=True, slots=True)
class UpstreamFailed:
    """This upstream could not provide the path; the next one may."""

    server: str
    reason: str
    status_code: int | None = None


@dataclass(frozen=True, slots=True)
class FetchRejected:
    """Fatal failure; no further upstream is consulted."""

    server: str
    error: BaseException


FetchOutcome = FetchSuccess | UpstreamFailed | FetchRejected

ResponseSink = Callable[[UpstreamResponse], Awaitable[object]]
