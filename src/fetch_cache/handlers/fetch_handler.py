"""HTTP handlers for fetch operations.

Handlers convert between HTTP requests/responses and service calls.
They handle HTTP concerns like status codes, CORS headers and client
disconnects.
"""

import asyncio

from fastapi import Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from fetch_cache.dto import ErrorResponse
from fetch_cache.entities import CachedObject
from fetch_cache.exceptions import (
    FetchCacheError,
    FetchFailedError,
    InvalidInputError,
    OriginNotAllowedError,
)
from fetch_cache.logging_config import get_logger
from fetch_cache.services import FetchService
from fetch_cache.utils import parse_target_url, serve_content

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}

# nginx convention for "client closed request"
CLIENT_CLOSED_REQUEST = 499


class ClientDisconnected(Exception):
    """The inbound client went away before the object was resolved."""


class FetchHandler:
    """HTTP handlers for fetch operations.

    This handler delegates business logic to FetchService
    and handles HTTP-specific concerns like:
    - Parsing the ``url`` query parameter
    - Mapping service errors to status codes
    - Conditional/range responses and CORS headers

    By default every failure is answered with 404 Not Found. With
    ``distinct_error_status`` the error kinds map to 400, 403 and 502.
    """

    def __init__(
        self,
        fetch_service: FetchService,
        distinct_error_status: bool = False,
        disconnect_poll_interval: float = 0.1,
    ) -> None:
        """Initialize the fetch handler.

        Args:
            fetch_service: The fetch service instance
            distinct_error_status: Report error kinds with distinct status codes
            disconnect_poll_interval: Seconds between client disconnect checks
        """
        self._service = fetch_service
        self._distinct_error_status = distinct_error_status
        self._poll_interval = disconnect_poll_interval

    async def health(self) -> PlainTextResponse:
        """Handle GET /health requests."""
        return PlainTextResponse("OK")

    async def fetch(self, request: Request, url: str) -> Response:
        """Handle GET / requests.

        Args:
            request: The inbound request
            url: Value of the ``url`` query parameter

        Returns:
            The object bytes, or an error response
        """
        try:
            origin, resource = parse_target_url(url)
        except InvalidInputError as e:
            logger.error("invalid_path", url=url, path=request.url.path)
            return self._error_response(e)

        logger.info("get_object", host=origin, page=resource)

        try:
            obj = await self._resolve_until_disconnect(request, origin, resource)
        except ClientDisconnected:
            logger.info("client_disconnected", host=origin, page=resource)
            return Response(status_code=CLIENT_CLOSED_REQUEST)
        except FetchCacheError as e:
            return self._error_response(e)

        response = serve_content(request, obj)
        response.headers.update(CORS_HEADERS)
        return response

    async def _resolve_until_disconnect(
        self, request: Request, origin: str, resource: str
    ) -> CachedObject:
        """Resolve the object, cancelling the origin fetch if the client leaves."""
        resolve_task = asyncio.ensure_future(self._service.resolve(origin, resource))
        watch_task = asyncio.ensure_future(self._wait_for_disconnect(request))
        try:
            done, _ = await asyncio.wait(
                {resolve_task, watch_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if resolve_task in done:
                return resolve_task.result()
            raise ClientDisconnected()
        finally:
            for task in (resolve_task, watch_task):
                if not task.done():
                    task.cancel()

    async def _wait_for_disconnect(self, request: Request) -> None:
        while not await request.is_disconnected():
            await asyncio.sleep(self._poll_interval)

    def _error_response(self, error: FetchCacheError) -> JSONResponse:
        """Map a service error to an HTTP response."""
        if not self._distinct_error_status:
            body = ErrorResponse(code="NOT_FOUND", message="Not Found")
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())

        if isinstance(error, OriginNotAllowedError):
            status_code = status.HTTP_403_FORBIDDEN
        elif isinstance(error, FetchFailedError):
            status_code = status.HTTP_502_BAD_GATEWAY
        elif isinstance(error, InvalidInputError):
            status_code = status.HTTP_400_BAD_REQUEST
        else:
            status_code = status.HTTP_404_NOT_FOUND
        return JSONResponse(status_code=status_code, content=error.to_response().model_dump())
