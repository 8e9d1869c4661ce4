from __future__ import annotations

import asyncio
from pathlib import Path

from mavencache.cache import ListingEntry, list_directory, render_listing


def run_async(coro):
    return asyncio.run(coro)


def test_listing_hides_dotfiles_and_marks_directories(tmp_path: Path):
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / ".hidden.tmp").write_text("partial")

    entries = list_directory(tmp_path)

    assert [entry.label for entry in entries] == ["a.txt", "b/"]
    assert [entry.href for entry in entries] == ["a.txt", "b/"]


def test_listing_order_is_deterministic(tmp_path: Path):
    for name in ("zeta", "alpha", "mid"):
        (tmp_path / name).write_text(name)

    assert [e.name for e in list_directory(tmp_path)] == ["alpha", "mid", "zeta"]


def test_href_encodes_special_characters_but_keeps_separator():
    entry = ListingEntry(name="my dir&co", is_dir=True)

    assert entry.label == "my dir&co/"
    assert entry.href == "my%20dir%26co/"


def test_rendered_listing_is_html_with_one_link_per_entry(tmp_path: Path):
    (tmp_path / "only.pom").write_text("<project/>")

    async def scenario() -> str:
        return b"".join([chunk async for chunk in render_listing(tmp_path)]).decode()

    page = run_async(scenario())

    assert page.startswith("<!doctype html>")
    assert page.count("<li>") == 1
    assert '<a href="only.pom">only.pom</a>' in page


def test_empty_directory_renders_empty_list(tmp_path: Path):
    async def scenario() -> str:
        return b"".join([chunk async for chunk in render_listing(tmp_path)]).decode()

    assert "<li>" not in run_async(scenario())
