"""Repository layer for data access.

This layer abstracts the cache storage and the outbound HTTP client behind
protocol-based interfaces. The repositories are protocol-based (structural
typing), not inheritance-based.
"""

from fetch_cache.protocols import CacheStore, OriginFetcher

from .httpx_origin_fetcher import HttpxOriginFetcher
from .memory_repository import InMemoryCacheRepository

__all__ = [
    "CacheStore",
    "OriginFetcher",
    "InMemoryCacheRepository",
    "HttpxOriginFetcher",
]
