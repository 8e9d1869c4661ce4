"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Browsable index synthesized for directories under the cache root.
"""

from __future__ import annotations

import asyncio
import html
import os
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

HIDDEN_PREFIX = "."

_HEADER = '<!doctype html>\n<html lang="en">\n<body>\n<ul>\n'
_FOOTER = "</ul>\n</body>\n</html>\n"


@dataclass(frozen=True, slots=True)
class ListingEntry:
    """One visible child of a listed directory."""

    name: str
    is_dir: bool

    @property
    def label(self) -> str:
        # Trailing separator keeps directories distinguishable once encoded.
        return f"{self.name}/" if self.is_dir else self.name

    @property
    def href(self) -> str:
        return quote(self.label, safe="/")


def list_directory(directory: Path) -> list[ListingEntry]:
    """Return visible immediate children of ``directory`` sorted by name."""
    with os.scandir(directory) as entries:
        visible = [
            ListingEntry(name=entry.name, is_dir=entry.is_dir())
            for entry in entries
            if not entry.name.startswith(HIDDEN_PREFIX)
        ]
    return sorted(visible, key=lambda entry: entry.name)


def render_entry(entry: ListingEntry) -> str:
    return f'<li><a href="{html.escape(entry.href)}">{html.escape(entry.label)}</a></li>\n'


async def render_listing(directory: Path) -> AsyncIterator[bytes]:
    """Stream an HTML index of ``directory``."""
    entries = await asyncio.to_thread(list_directory, directory)
    yield _HEADER.encode("utf-8")
    for entry in entries:
        yield render_entry(entry).encode("utf-8")
    yield _FOOTER.encode("utf-8")
