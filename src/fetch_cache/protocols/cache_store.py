"""Cache storage protocol.

Defines the interface for a store keyed by (origin, resource) that holds
fetched snapshots. Freshness is evaluated by the caller, not the store.
"""

from typing import Protocol, runtime_checkable

from fetch_cache.entities import CachedObject


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    def get(self, origin: str, resource: str) -> CachedObject | None:
        """Look up an entry without side effects and without checking expiry.

        Args:
            origin: Origin identifier including scheme, e.g. "https://example.com"
            resource: Resource path within the origin

        Returns:
            The stored object, or None when the key was never populated
        """
        ...

    def put(self, origin: str, resource: str, obj: CachedObject) -> None:
        """Insert or overwrite the entry for (origin, resource).

        Args:
            origin: Origin identifier including scheme
            resource: Resource path within the origin
            obj: Snapshot to store
        """
        ...

    def count_all(self) -> int:
        """Count total entries in the cache.

        Returns:
            Total number of cached entries
        """
        ...
