from __future__ import annotations

from pathlib import Path

import pytest

from mavencache.cli import build_parser, load_config, main
from mavencache.config import CacheConfig
from mavencache.server import CacheServer
from mavencache.settings import CacheSettings


def test_parser_defaults_come_from_settings():
    settings = CacheSettings(host="0.0.0.0", port=7000, config_location="/tmp/c.properties")

    args = build_parser(settings).parse_args([])

    assert args.host == "0.0.0.0"
    assert args.port == 7000
    assert args.config_location == "/tmp/c.properties"


def test_load_config_writes_defaults_back(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    location = tmp_path / "etc" / "simple-maven-cache.properties"

    config = load_config(location)

    assert config.servers == CacheConfig.default().servers
    text = location.read_text()
    assert text.startswith("servers=")
    assert f"cache-directory={config.cache_directory}" in text


def test_main_builds_server_from_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    location = tmp_path / "cache.properties"
    location.write_text(
        "# upstreams\n"
        "servers=http://a.test/m2\n"
        f"cache-directory={tmp_path / 'store'}\n"
    )
    captured: dict[str, object] = {}

    def fake_run(self: CacheServer, **kwargs: object) -> None:
        captured["server"] = self
        captured["kwargs"] = kwargs

    monkeypatch.setattr(CacheServer, "run", fake_run)

    exit_code = main(
        ["--config-location", str(location), "--port", "9000", "--log-level", "debug"]
    )

    server = captured["server"]
    assert exit_code == 0
    assert isinstance(server, CacheServer)
    assert server.config.port == 9000
    assert server.manager.servers == ("http://a.test/m2",)
    assert server.manager.cache_directory == (tmp_path / "store").resolve()
    assert captured["kwargs"] == {"log_level": "debug"}
