"""In-memory implementation of CacheStore.

Entries live in a two-level mapping ``origin -> {resource -> CachedObject}``
for the lifetime of the process. There is no eviction: an entry is only ever
replaced by a newer snapshot for the same key.
"""

import threading

from fetch_cache.entities import CachedObject


class InMemoryCacheRepository:
    """Thread-safe in-memory store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    A single lock guards the mapping. It is held only for the dictionary
    operation itself, never while the caller talks to an origin.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._entries: dict[str, dict[str, CachedObject]] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository."""
        return cls()

    def get(self, origin: str, resource: str) -> CachedObject | None:
        """Look up an entry.

        Args:
            origin: Origin identifier including scheme
            resource: Resource path within the origin

        Returns:
            The stored object (fresh or stale), or None
        """
        with self._lock:
            resources = self._entries.get(origin)
            if resources is None:
                return None
            return resources.get(resource)

    def put(self, origin: str, resource: str, obj: CachedObject) -> None:
        """Insert or overwrite an entry.

        Args:
            origin: Origin identifier including scheme
            resource: Resource path within the origin
            obj: Snapshot to store
        """
        with self._lock:
            self._entries.setdefault(origin, {})[resource] = obj

    def count_all(self) -> int:
        """Count total entries across all origins."""
        with self._lock:
            return sum(len(resources) for resources in self._entries.values())

