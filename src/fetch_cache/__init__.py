"""Fetch Cache - caching HTTP fetcher for an allow-list of origins.

This package provides a layered architecture for fetch-through caching:

Layers:
    - protocols: Interface contracts (CacheStore, OriginFetcher)
    - repositories: In-memory store and httpx origin client
    - services: Business logic (allow-list, freshness, fetch/populate)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from fetch_cache import FetchService, HttpxOriginFetcher, InMemoryCacheRepository

    service = FetchService.create(
        repository=InMemoryCacheRepository.create(),
        fetcher=HttpxOriginFetcher.create(),
        allowed_origins={"https://paulgraham.com"},
    )
    obj = await service.resolve("https://paulgraham.com", "index.html")
    ```

For HTTP API:
    ```python
    from fetch_cache.api.app import app
    ```
"""

from fetch_cache.config import Settings, get_settings, settings
from fetch_cache.entities import CachedObject, OriginResponse
from fetch_cache.exceptions import (
    FetchCacheError,
    FetchFailedError,
    InvalidInputError,
    InvalidTargetError,
    OriginNotAllowedError,
)
from fetch_cache.handlers import FetchHandler
from fetch_cache.protocols import CacheStore, OriginFetcher
from fetch_cache.repositories import HttpxOriginFetcher, InMemoryCacheRepository
from fetch_cache.services import FetchService

__all__ = [
    # Configuration
    "Settings",
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CacheStore",
    "OriginFetcher",
    # Services (business logic)
    "FetchService",
    # Handlers (HTTP)
    "FetchHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "HttpxOriginFetcher",
    # Entities (domain models)
    "CachedObject",
    "OriginResponse",
    # Errors
    "FetchCacheError",
    "InvalidInputError",
    "InvalidTargetError",
    "OriginNotAllowedError",
    "FetchFailedError",
]
