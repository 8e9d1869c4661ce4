"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

HTTP client performing one GET against one upstream per attempt.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar
from urllib.parse import quote

import httpx

from .classify import classify_fetch_error
from .types import (
    OCTET_STREAM,
    FetchOutcome,
    FetchSuccess,
    ResponseSink,
    UpstreamFailed,
    UpstreamResponse,
    UpstreamTimeouts,
)

logger = logging.getLogger("mavencache.upstream")

T = TypeVar("T")

USER_AGENT = "simple-maven-cache"


async def await_with_timeout(awaitable: Awaitable[T], timeout_s: float | None) -> T:
    """Await value with optional timeout."""
    if timeout_s is None:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout_s)


def declared_length(headers: httpx.Headers) -> int | None:
    """
    Return the body length the upstream committed to, if usable.

    Encoded bodies are decoded while streaming, so their ``Content-Length``
    does not describe the bytes we receive.
    """
    encoding = headers.get("Content-Encoding", "identity").strip().lower()
    if encoding not in ("", "identity"):
        return None
    raw = headers.get("Content-Length")
    if raw is None:
        return None
    try:
        length = int(raw)
    except ValueError:
        return None
    return length if length >= 0 else None


class UpstreamClient:
    """Fetch paths from upstream repositories with bounded per-attempt time."""

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeouts: UpstreamTimeouts | None = None,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._timeouts = timeouts or UpstreamTimeouts()
        self._chunk_size = chunk_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(
                None,
                connect=self._timeouts.connect_s,
                read=self._timeouts.read_s,
            ),
            follow_redirects=True,
            headers={"Accept-Encoding": "identity", "User-Agent": USER_AGENT},
        )

    @property
    def timeouts(self) -> UpstreamTimeouts:
        return self._timeouts

    @staticmethod
    def url_for(server: str, path: str) -> str:
        """Join ``server`` and a decoded cache path into an upstream URL."""
        return f"{server.rstrip('/')}/{quote(path, safe='/')}"

    async def fetch(self, server: str, path: str, sink: ResponseSink) -> FetchOutcome:
        """
        GET ``path`` from ``server`` and hand a successful body to ``sink``.

        The response stays open while ``sink`` runs and is always closed
        afterwards. Exceptions never escape; they are classified into
        ``UpstreamFailed`` or ``FetchRejected``.
        """
        url = self.url_for(server, path)
        logger.debug("Trying to get '%s' from '%s'", path, server)
        response: httpx.Response | None = None
        try:
            request = self._client.build_request("GET", url)
            response = await await_with_timeout(
                self._client.send(request, stream=True), self._timeouts.request_s
            )
            if not response.is_success:
                logger.debug(
                    "'%s' said %s for '%s'", server, response.status_code, path
                )
                return UpstreamFailed(
                    server=server,
                    reason=f"HTTP {response.status_code}",
                    status_code=response.status_code,
                )

            logger.debug("Found '%s' at '%s'", path, server)
            upstream = UpstreamResponse(
                content=response.aiter_bytes(self._chunk_size),
                content_length=declared_length(response.headers),
                content_type=response.headers.get("Content-Type", OCTET_STREAM),
            )
            await sink(upstream)
            return FetchSuccess(server=server, content_length=upstream.content_length)
        except Exception as exc:  # noqa: BLE001
            outcome = classify_fetch_error(server, exc)
            if isinstance(outcome, UpstreamFailed):
                logger.warning("Failed to fetch '%s' from '%s': %s", path, server, exc)
            return outcome
        finally:
            if response is not None:
                await response.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
