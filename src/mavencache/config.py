"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Upstream servers and cache directory configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .props import Props, read_properties, write_properties

SERVERS_KEY = "servers"
CACHE_DIRECTORY_KEY = "cache-directory"

DEFAULT_SERVERS: tuple[str, ...] = (
    "https://repo.maven.apache.org/maven2",
    "https://plugins.gradle.org/m2",
)
DEFAULT_CACHE_DIRECTORY = "./maven"


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """
    Validated cache configuration.

    Attributes:
        servers: Upstream base URLs, consulted in order.
        cache_directory: Root directory holding every cached artifact.
    """

    servers: tuple[str, ...]
    cache_directory: Path

    def __post_init__(self) -> None:
        if not self.servers:
            raise ConfigError("No servers provided!")

    @classmethod
    def default(cls) -> "CacheConfig":
        return cls(
            servers=DEFAULT_SERVERS,
            cache_directory=Path(DEFAULT_CACHE_DIRECTORY).absolute(),
        )

    @classmethod
    def from_properties(cls, props: Props) -> "CacheConfig":
        """Build a config from parsed properties; both keys are required."""
        try:
            raw_servers = props[SERVERS_KEY]
            raw_directory = props[CACHE_DIRECTORY_KEY]
        except KeyError as exc:
            raise ConfigError(f"Missing configuration key: {exc.args[0]}") from exc
        servers = tuple(
            server.strip() for server in raw_servers.split(",") if server.strip()
        )
        return cls(servers=servers, cache_directory=Path(raw_directory))

    def to_properties(self) -> dict[str, str]:
        return {
            SERVERS_KEY: ", ".join(self.servers),
            CACHE_DIRECTORY_KEY: str(self.cache_directory),
        }

    @classmethod
    def load_from(cls, location: Path) -> "CacheConfig":
        """
        Load the config file at ``location`` merged over the defaults.

        The cache directory is created if needed and resolved to its real path.
        """
        props = read_properties(location, defaults=cls.default().to_properties())
        config = cls.from_properties(props)
        config.cache_directory.mkdir(parents=True, exist_ok=True)
        return cls(
            servers=config.servers,
            cache_directory=config.cache_directory.resolve(strict=True),
        )

    def save_to(self, location: Path) -> None:
        write_properties(location, self.to_properties())

    def log_to(self, logger: logging.Logger) -> None:
        logger.info("Using upstream servers:")
        for server in self.servers:
            logger.info("\t- %s", server)
        logger.info("Using maven cache directory: %s", self.cache_directory)
