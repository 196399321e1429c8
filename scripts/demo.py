#!/usr/bin/env python3
"""
Demo script for the fetch cache.

Resolves the same page twice against a live origin to show the difference
between a cache miss and a cache hit, then shows an allow-list rejection.

Usage:
    python scripts/demo.py [origin] [resource]
"""

import asyncio
import sys
import time

from fetch_cache import (
    FetchService,
    HttpxOriginFetcher,
    InMemoryCacheRepository,
    OriginNotAllowedError,
)
from fetch_cache.logging_config import configure_logging


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo(origin: str, resource: str) -> None:
    """Demonstrate miss, hit and rejection."""
    service = FetchService.create(
        repository=InMemoryCacheRepository.create(),
        fetcher=HttpxOriginFetcher.create(timeout=10.0),
        allowed_origins={origin},
    )

    try:
        print_section("Cache miss and hit")
        for attempt in ("miss", "hit"):
            start_time = time.time()
            obj = await service.resolve(origin, resource)
            elapsed_ms = (time.time() - start_time) * 1000
            print(f"\n{attempt:>4}: {len(obj.body)} bytes in {elapsed_ms:.1f}ms")
            print(f"      ETag:         {obj.content_hash}")
            print(f"      Content-Type: {obj.content_type or '(none)'}")
            print(f"      Expires:      {obj.expires_at.isoformat()}")

        print_section("Allow-list")
        try:
            await service.resolve("https://example.com", "index.html")
        except OriginNotAllowedError as e:
            print(f"\nRejected: {e.details['origin']} ({e.code})")
    finally:
        await service.close()


if __name__ == "__main__":
    configure_logging("info")
    origin = sys.argv[1] if len(sys.argv) > 1 else "https://paulgraham.com"
    resource = sys.argv[2] if len(sys.argv) > 2 else "index.html"
    asyncio.run(demo(origin, resource))
