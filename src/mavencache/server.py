"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

HTTP front end for the cache built on FastAPI.

Every ``GET``/``HEAD`` sub-path is handed to ``CacheManager.get``:
- content found -> ``200`` streaming the body (``Content-Length`` when known)
- no upstream has it -> ``404`` plain text
- any failure -> ``500`` plain text describing the error
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from .cache import CacheManager, CachedContent

logger = logging.getLogger("mavencache.server")

NOT_FOUND_MESSAGE = "No such entry found."


@dataclass
class CacheServerConfig:
    """
    Configuration for the cache HTTP server.

    Attributes:
        name: Value of the ``Server`` response header and the app title.
        host: Bind host for uvicorn.
        port: Bind port for uvicorn.
        allow_head: Whether ``HEAD`` requests are routed like ``GET``.
    """

    name: str = "simple-maven-cache"
    host: str = "localhost"
    port: int = 5956
    allow_head: bool = True


def _content_headers(content: CachedContent) -> dict[str, str]:
    if content.content_length is None:
        return {}
    return {"Content-Length": str(content.content_length)}


class CacheServer:
    """
    Expose a ``CacheManager`` over HTTP.

    Usage::

        server = CacheServer(manager, config=CacheServerConfig(port=5956))
        server.run()

    For tests, wrap ``server.app`` in ``fastapi.testclient.TestClient``.
    """

    def __init__(
        self,
        manager: CacheManager,
        *,
        config: CacheServerConfig | None = None,
    ) -> None:
        self._manager = manager
        self._config = config or CacheServerConfig()
        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        return self._app

    @property
    def config(self) -> CacheServerConfig:
        return self._config

    @property
    def manager(self) -> CacheManager:
        return self._manager

    def _create_router(self) -> APIRouter:
        router = APIRouter()
        methods = ["GET", "HEAD"] if self._config.allow_head else ["GET"]

        @router.api_route("/{path:path}", methods=methods)
        async def serve(path: str, request: Request) -> Response:
            return await self._handle(path, request)

        return router

    def _create_app(self) -> FastAPI:
        manager = self._manager

        @asynccontextmanager
        async def lifespan(_: FastAPI) -> AsyncIterator[None]:
            try:
                yield
            finally:
                await manager.aclose()

        app = FastAPI(title=self._config.name, lifespan=lifespan)

        @app.middleware("http")
        async def call_logging(request: Request, call_next: Any) -> Response:
            started = time.perf_counter()
            response = await call_next(request)
            response.headers.setdefault("Server", self._config.name)
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response

        app.include_router(self._create_router())
        return app

    def mount(self, app: FastAPI) -> FastAPI:
        """Mount the cache route into an existing FastAPI app."""
        app.include_router(self._create_router())
        return app

    async def _handle(self, path: str, request: Request) -> Response:
        try:
            content = await self._manager.get(path)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to respond for %s", request.url.path)
            return PlainTextResponse(f"{type(exc).__name__}: {exc}", status_code=500)

        if content is None:
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)

        headers = _content_headers(content)
        if request.method == "HEAD":
            return Response(
                status_code=200, headers=headers, media_type=content.content_type
            )
        return StreamingResponse(
            content.content,
            status_code=200,
            headers=headers,
            media_type=content.content_type,
        )

    def run(self, **kwargs: Any) -> None:
        """
        Start the server using uvicorn.

        Args:
            **kwargs: Additional arguments passed to ``uvicorn.run()``.
        """
        import uvicorn

        kwargs.setdefault("server_header", False)
        uvicorn.run(
            self._app,
            host=kwargs.pop("host", self._config.host),
            port=kwargs.pop("port", self._config.port),
            **kwargs,
        )


def create_cache_server(
    manager: CacheManager,
    *,
    config: CacheServerConfig | None = None,
    app: FastAPI | None = None,
) -> CacheServer:
    """
    Build a cache server, optionally mounting its route into ``app``.
    """
    server = CacheServer(manager, config=config)
    if app is not None:
        server.mount(app)
    return server
