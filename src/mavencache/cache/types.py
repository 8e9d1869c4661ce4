"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/types.py.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

HTML = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class CachedContent:
    """Content served for one request: a byte stream plus its size when known."""

    content: AsyncIterator[bytes]
    content_length: int | None
    content_type: str

    def __post_init__(self) -> None:
        if self.content_length is not None and self.content_length < 0:
            raise ValueError("Content length must be greater than or equal to zero")
