"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory -> shared store, httpx -> another client)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from fetch_cache.protocols import CacheStore, OriginFetcher

    # Type hints work with any implementation
    repo: CacheStore = InMemoryCacheRepository()
    fetcher: OriginFetcher = HttpxOriginFetcher()
    ```
"""

from .cache_store import CacheStore
from .origin_fetcher import OriginFetcher

__all__ = [
    "CacheStore",
    "OriginFetcher",
]
