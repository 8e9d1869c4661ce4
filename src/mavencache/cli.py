"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Command line entry point: load configuration and serve the cache.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from .cache import CacheManager
from .config import CacheConfig
from .server import CacheServer, CacheServerConfig
from .settings import CacheSettings

logger = logging.getLogger("mavencache")

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def build_parser(settings: CacheSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simple-maven-cache",
        description="Pull-through cache for Maven-style artifact repositories.",
    )
    parser.add_argument(
        "--config-location",
        default=settings.config_location,
        help="Properties file holding servers and cache-directory.",
    )
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def load_config(location: Path) -> CacheConfig:
    """Load the config and write it back so absent keys gain their defaults."""
    logger.info("Loading configuration from %s", location.absolute())
    config = CacheConfig.load_from(location)
    config.save_to(location)
    config.log_to(logger)
    return config


def build_server(
    config: CacheConfig, settings: CacheSettings, *, host: str, port: int
) -> CacheServer:
    manager = CacheManager.from_config(config, settings)
    return CacheServer(manager, config=CacheServerConfig(host=host, port=port))


def main(argv: Sequence[str] | None = None) -> int:
    settings = CacheSettings.from_env()
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper(), format=LOG_FORMAT)

    config = load_config(Path(args.config_location))
    server = build_server(config, settings, host=args.host, port=args.port)
    server.run(log_level=str(args.log_level).lower())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
