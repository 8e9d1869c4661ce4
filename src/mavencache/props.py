"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Flat ``key=value`` properties format used by the configuration file.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .errors import PropertiesFormatError

Props = Mapping[str, str]


def load_properties(text: str, defaults: Props | None = None) -> dict[str, str]:
    """
    Parse properties text on top of ``defaults``.

    Anything after ``#`` on a line is a comment. Blank lines are skipped.
    Every other line must hold ``key=value``; whitespace around the first
    ``=`` is ignored.
    """
    props: dict[str, str] = dict(defaults or {})
    for line_number, line in enumerate(text.splitlines(), start=1):
        important = line.split("#", 1)[0].strip()
        if not important:
            continue
        key, sep, value = important.partition("=")
        if not sep:
            raise PropertiesFormatError(f"No '=' in line {line_number}: '{line}'")
        props[key.rstrip()] = value.lstrip()
    return props


def dump_properties(props: Props) -> str:
    return "".join(f"{key}={value}\n" for key, value in props.items())


def read_properties(path: Path, defaults: Props | None = None) -> dict[str, str]:
    """Load properties from ``path``; a missing file yields only the defaults."""
    text = path.read_text(encoding="utf-8") if path.exists() else ""
    return load_properties(text, defaults)


def write_properties(path: Path, props: Props) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_properties(props), encoding="utf-8")
