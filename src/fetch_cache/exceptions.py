"""Error types raised by the fetch service and its collaborators."""

from typing import Any

from fetch_cache.dto import ErrorResponse


class FetchCacheError(Exception):
    """Base exception for fetch-cache errors."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class InvalidInputError(FetchCacheError):
    """Empty origin or resource, or an unparseable target URL."""

    def __init__(self, message: str = "Invalid input", details: dict[str, Any] | None = None) -> None:
        super().__init__("INVALID_INPUT", message, details)


class InvalidTargetError(InvalidInputError):
    """The ``url`` query parameter has no ``/`` between host and path."""


class OriginNotAllowedError(FetchCacheError):
    """The origin is not in the configured allow-list."""

    def __init__(self, origin: str) -> None:
        super().__init__("ORIGIN_NOT_ALLOWED", "Origin not allowed", {"origin": origin})


class FetchFailedError(FetchCacheError):
    """Transport error, non-2xx origin status, or body read failure."""

    def __init__(self, message: str = "Failed to get object", details: dict[str, Any] | None = None) -> None:
        super().__init__("FETCH_FAILED", message, details)
