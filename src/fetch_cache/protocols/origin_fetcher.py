"""Origin fetcher protocol.

Defines the outbound "fetch bytes and headers from a URL" capability the
fetch service uses on a cache miss.
"""

from typing import Protocol, runtime_checkable

from fetch_cache.entities import OriginResponse


@runtime_checkable
class OriginFetcher(Protocol):
    """Protocol for outbound HTTP clients."""

    async def fetch(self, url: str) -> OriginResponse:
        """Perform a GET against ``url`` and read the whole body.

        Args:
            url: Absolute URL to fetch

        Returns:
            The successful origin response

        Raises:
            FetchFailedError: On transport errors, non-2xx statuses or body read failures
        """
        ...

    async def close(self) -> None:
        """Release network resources held by the fetcher."""
        ...
