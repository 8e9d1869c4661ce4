"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Process settings and explicit environment loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError
from .upstream.types import UpstreamTimeouts


def _env_number(name: str, default: str, cast: type[int] | type[float]) -> int | float:
    raw = os.getenv(name, default).strip() or default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Explicit settings for the HTTP listener and upstream client."""

    host: str = "localhost"
    port: int = 5956
    config_location: str = "/etc/simple-maven-cache.properties"

    connect_timeout_s: float = 5.0
    read_timeout_s: float = 5.0
    request_timeout_s: float = 5.0
    chunk_size: int = 64 * 1024

    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from ``MAVENCACHE_*`` environment variables."""
        return CacheSettings(
            host=os.getenv("MAVENCACHE_HOST", "localhost"),
            port=int(_env_number("MAVENCACHE_PORT", "5956", int)),
            config_location=os.getenv(
                "MAVENCACHE_CONFIG_LOCATION", "/etc/simple-maven-cache.properties"
            ),
            connect_timeout_s=float(
                _env_number("MAVENCACHE_CONNECT_TIMEOUT_S", "5", float)
            ),
            read_timeout_s=float(_env_number("MAVENCACHE_READ_TIMEOUT_S", "5", float)),
            request_timeout_s=float(
                _env_number("MAVENCACHE_REQUEST_TIMEOUT_S", "5", float)
            ),
            chunk_size=int(_env_number("MAVENCACHE_CHUNK_SIZE", "65536", int)),
            log_level=os.getenv("MAVENCACHE_LOG_LEVEL", "INFO").upper(),
        )

    def to_timeouts(self) -> UpstreamTimeouts:
        return UpstreamTimeouts(
            connect_s=self.connect_timeout_s,
            read_s=self.read_timeout_s,
            request_s=self.request_timeout_s,
        )
