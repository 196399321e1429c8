"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from fetch_cache.services import FetchService

    service = FetchService.create(repository=repo, fetcher=fetcher)
    obj = await service.resolve("https://paulgraham.com", "index.html")
    ```
"""

from .fetch_service import FetchService

__all__ = [
    "FetchService",
]
