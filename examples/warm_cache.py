"""
warm_cache.py — Pre-populate a local cache directory.

Fetches a few artifacts concurrently through the cache engine, without
starting the HTTP server. Requests for the same path share one download.

Usage:
    python examples/warm_cache.py ./maven org/slf4j/slf4j-api/2.0.13/slf4j-api-2.0.13.pom
"""

import sys
from pathlib import Path

from mavencache import CacheManager


async def main(cache_directory: str, paths: list[str]) -> None:
    async with CacheManager(
        ["https://repo.maven.apache.org/maven2"], Path(cache_directory)
    ) as manager:
        for path in paths:
            content = await manager.get(path)
            if content is None:
                print(f"missing  {path}")
            else:
                print(f"cached   {path} ({content.content_length} bytes)")


if __name__ == "__main__":
    import asyncio

    asyncio.run(main(sys.argv[1], sys.argv[2:]))
