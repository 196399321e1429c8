"""httpx-based origin fetcher.

Performs the blocking part of a cache miss: one GET against the origin with
the whole body read into memory. The call is a coroutine, so cancelling the
awaiting task (for example when the inbound client disconnects) aborts the
outbound request as well.
"""

import httpx

from fetch_cache.config import settings
from fetch_cache.entities import OriginResponse
from fetch_cache.exceptions import FetchFailedError
from fetch_cache.logging_config import get_logger

logger = get_logger(__name__)


class HttpxOriginFetcher:
    """httpx implementation of the OriginFetcher protocol.

    This class satisfies the OriginFetcher protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        fetcher = HttpxOriginFetcher.create(timeout=10.0)
        response = await fetcher.fetch("https://paulgraham.com/index.html")
        print(response.content_type, len(response.body))
        await fetcher.close()
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.origin_timeout.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        self._timeout = timeout or settings.origin_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxOriginFetcher":
        """Factory method to create HttpxOriginFetcher with defaults.

        Args:
            timeout: Request timeout in seconds. If None, uses settings.
            transport: Optional httpx transport.

        Returns:
            Configured HttpxOriginFetcher
        """
        return cls(timeout=timeout, transport=transport)

    @property
    def timeout(self) -> float:
        """Get the request timeout in seconds."""
        return self._timeout

    async def fetch(self, url: str) -> OriginResponse:
        """Fetch ``url`` and read the full body.

        Args:
            url: Absolute URL to fetch

        Returns:
            The origin response

        Raises:
            FetchFailedError: If the request, the status or the body read fails
        """
        try:
            response = await self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("origin_fetch_failed", url=url, error=str(e))
            raise FetchFailedError("Failed to get object", {"url": url}) from e

        if not response.is_success:
            logger.error("origin_fetch_failed", url=url, status_code=response.status_code)
            raise FetchFailedError(
                "Origin returned a non-success status",
                {"url": url, "status_code": response.status_code},
            )

        # Latin-1 maps each header byte to one character, so the value round-trips
        response.headers.encoding = "latin-1"
        return OriginResponse(
            url=url,
            status_code=response.status_code,
            body=response.content,
            content_type=response.headers.get("content-type", ""),
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
