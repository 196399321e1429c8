"""Fetch service for core business logic.

This service implements fetch-through-cache: the allow-list gate, the
freshness check against the cache store, and the origin fetch that
repopulates the store on a miss or a stale hit.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from fetch_cache.config import settings
from fetch_cache.entities import CachedObject
from fetch_cache.exceptions import InvalidInputError, OriginNotAllowedError
from fetch_cache.logging_config import get_logger
from fetch_cache.protocols import CacheStore, OriginFetcher

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class FetchService:
    """Core fetch-through-cache orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: in-memory by default
    - OriginFetcher: httpx by default

    Stale entries are always refetched. A failed refetch surfaces the error;
    the stale copy is left in the store but never served. Two concurrent
    misses for the same key both fetch and the last write wins.

    Example:
        ```python
        from fetch_cache.repositories import HttpxOriginFetcher, InMemoryCacheRepository
        from fetch_cache.services import FetchService

        service = FetchService.create(
            repository=InMemoryCacheRepository.create(),
            fetcher=HttpxOriginFetcher.create(),
            allowed_origins={"https://paulgraham.com"},
        )
        obj = await service.resolve("https://paulgraham.com", "index.html")
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        fetcher: OriginFetcher,
        allowed_origins: Iterable[str],
        ttl: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the fetch service.

        Args:
            repository: Cache storage backend (required).
            fetcher: Outbound HTTP client (required).
            allowed_origins: Origins that may be fetched, e.g. {"https://example.com"}.
            ttl: Freshness window in seconds. Defaults to settings.
            clock: Callable returning the current aware UTC datetime.
        """
        self._repository = repository
        self._fetcher = fetcher
        self._allowed = frozenset(allowed_origins)
        self._ttl = ttl or settings.cache_ttl
        self._clock = clock or utc_now

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        fetcher: OriginFetcher,
        allowed_origins: Iterable[str] | None = None,
        ttl: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "FetchService":
        """Factory method to create FetchService with sensible defaults.

        Args:
            repository: Cache storage backend (required).
            fetcher: Outbound HTTP client (required).
            allowed_origins: Allow-list. If None, uses settings.
            ttl: Freshness window in seconds. If None, uses settings.
            clock: Clock override, mainly for tests.

        Returns:
            Configured FetchService instance
        """
        if allowed_origins is None:
            allowed_origins = settings.allowed_origins
        return cls(
            repository=repository,
            fetcher=fetcher,
            allowed_origins=allowed_origins,
            ttl=ttl,
            clock=clock,
        )

    async def resolve(self, origin: str, resource: str) -> CachedObject:
        """Return a fresh snapshot of ``origin/resource``.

        Business logic:
        1. Validate input, then check the allow-list
        2. Serve from the store when the entry is still fresh
        3. Otherwise fetch from the origin, store the new snapshot and return it

        Args:
            origin: Origin identifier including scheme, e.g. "https://example.com"
            resource: Resource path within the origin, e.g. "index.html"

        Returns:
            The cached or freshly fetched object

        Raises:
            InvalidInputError: If origin or resource is empty
            OriginNotAllowedError: If origin is not in the allow-list
            FetchFailedError: If the origin fetch fails
        """
        logger.info("resolve", origin=origin, resource=resource)

        if not origin:
            raise InvalidInputError("Origin is empty")
        if not resource:
            raise InvalidInputError("Resource is empty")

        if origin not in self._allowed:
            logger.warning("origin_not_allowed", origin=origin)
            raise OriginNotAllowedError(origin)

        cached = self._repository.get(origin, resource)
        if cached is not None and cached.is_fresh(self._clock()):
            logger.debug("cache_hit", origin=origin, resource=resource)
            return cached

        # No escaping: the resource is appended verbatim
        url = f"{origin}/{resource}"
        response = await self._fetcher.fetch(url)

        obj = CachedObject.from_body(
            body=response.body,
            content_type=response.content_type,
            fetched_at=self._clock(),
            ttl=timedelta(seconds=self._ttl),
        )
        self._repository.put(origin, resource, obj)

        logger.debug(
            "origin_fetched",
            url=url,
            etag=obj.content_hash,
            size=len(obj.body),
            stale=cached is not None,
        )
        return obj

    async def close(self) -> None:
        """Release the fetcher's network resources."""
        await self._fetcher.close()

    @property
    def allowed_origins(self) -> frozenset[str]:
        """Get the allow-list."""
        return self._allowed

    @property
    def ttl(self) -> int:
        """Get the freshness window in seconds."""
        return self._ttl

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository

    @property
    def fetcher(self) -> OriginFetcher:
        """Get the underlying fetcher (for testing)."""
        return self._fetcher
