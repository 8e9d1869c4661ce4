from __future__ import annotations

from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mavencache.cache import CacheManager
from mavencache.server import NOT_FOUND_MESSAGE, CacheServer, create_cache_server


def make_manager(tmp_path: Path, handler) -> CacheManager:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CacheManager(["http://a.test"], tmp_path / "cache", client=client)


def test_artifact_is_fetched_cached_and_served_with_length(tmp_path: Path):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=b"jar-bytes")

    server = CacheServer(make_manager(tmp_path, handler))
    with TestClient(server.app) as client:
        first = client.get("/org/x/1.0/x-1.0.jar")
        second = client.get("/org/x/1.0/x-1.0.jar")

    assert first.status_code == 200
    assert first.content == b"jar-bytes"
    assert first.headers["content-length"] == "9"
    assert first.headers["server"] == "simple-maven-cache"
    assert second.content == b"jar-bytes"
    assert seen == ["http://a.test/org/x/1.0/x-1.0.jar"]
    assert (server.manager.cache_directory / "org/x/1.0/x-1.0.jar").read_bytes() == b"jar-bytes"


def test_url_decoded_path_is_passed_to_the_cache(tmp_path: Path):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path.decode())
        return httpx.Response(200, content=b"ok")

    server = CacheServer(make_manager(tmp_path, handler))
    with TestClient(server.app) as client:
        response = client.get("/dir%20name/file.jar")

    assert response.status_code == 200
    assert seen == ["/dir%20name/file.jar"]
    assert (server.manager.cache_directory / "dir name" / "file.jar").exists()


def test_encoded_question_mark_reaches_upstream_as_part_of_path(tmp_path: Path):
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.url.raw_path.decode(), request.url.query.decode()))
        return httpx.Response(200, content=b"a-question-b")

    server = CacheServer(make_manager(tmp_path, handler))
    with TestClient(server.app) as client:
        response = client.get("/a%3Fb")

    assert response.status_code == 200
    assert response.content == b"a-question-b"
    assert seen == [("/a%3Fb", "")]
    assert (server.manager.cache_directory / "a?b").read_bytes() == b"a-question-b"


def test_missing_everywhere_is_404_plain_text(tmp_path: Path):
    server = CacheServer(make_manager(tmp_path, lambda request: httpx.Response(404)))
    with TestClient(server.app) as client:
        response = client.get("/nope.jar")

    assert response.status_code == 404
    assert response.text == NOT_FOUND_MESSAGE
    assert response.headers["content-type"].startswith("text/plain")


def test_engine_failure_is_500_with_description(tmp_path: Path):
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("boom")

    server = CacheServer(make_manager(tmp_path, handler))
    with TestClient(server.app) as client:
        response = client.get("/explodes.jar")

    assert response.status_code == 500
    assert response.text == "RuntimeError: boom"
    assert response.headers["content-type"].startswith("text/plain")


def test_directory_is_listed_without_content_length(tmp_path: Path):
    manager = make_manager(tmp_path, lambda request: httpx.Response(404))
    repo = manager.cache_directory / "org" / "x"
    (repo / "1.0").mkdir(parents=True)
    (repo / "maven-metadata.xml").write_text("<metadata/>")
    (repo / ".partial.tmp").write_text("")

    with TestClient(CacheServer(manager).app) as client:
        response = client.get("/org/x/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "content-length" not in response.headers
    assert 'href="1.0/"' in response.text
    assert 'href="maven-metadata.xml"' in response.text
    assert ".partial.tmp" not in response.text


def test_head_reports_length_without_body(tmp_path: Path):
    server = CacheServer(
        make_manager(tmp_path, lambda request: httpx.Response(200, content=b"12345"))
    )
    with TestClient(server.app) as client:
        response = client.head("/five.bin")

    assert response.status_code == 200
    assert response.headers["content-length"] == "5"
    assert response.content == b""


def test_cache_route_can_be_mounted_into_existing_app(tmp_path: Path):
    app = FastAPI()
    create_cache_server(
        make_manager(tmp_path, lambda request: httpx.Response(200, content=b"m")),
        app=app,
    )

    response = TestClient(app).get("/mounted.pom")

    assert response.status_code == 200
    assert response.content == b"m"
