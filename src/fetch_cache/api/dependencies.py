"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - A service placed on app.state before startup (tests) is used as-is
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from fetch_cache.config import Settings, get_settings
from fetch_cache.handlers import FetchHandler
from fetch_cache.logging_config import configure_logging, get_logger
from fetch_cache.repositories import HttpxOriginFetcher, InMemoryCacheRepository
from fetch_cache.services import FetchService

logger = get_logger(__name__)


def get_handler(request: Request) -> FetchHandler:
    """Dependency injection for FetchHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The FetchHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "fetch_handler", None)
    if handler is None:
        raise RuntimeError("FetchHandler not initialized. Check lifespan setup.")
    return handler


def build_fetch_service(settings: Settings) -> FetchService:
    """Wire the default repository and fetcher from settings."""
    return FetchService.create(
        repository=InMemoryCacheRepository.create(),
        fetcher=HttpxOriginFetcher.create(timeout=settings.origin_timeout),
        allowed_origins=settings.allowed_origins,
        ttl=settings.cache_ttl,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Logging, from settings
    2. Service (business logic) - app.state.fetch_service, unless one was injected
    3. Handler (HTTP endpoints) - app.state.fetch_handler

    Any exception raised here aborts startup.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the origin fetcher and removes what startup added to app.state.
        An injected service stays in place for the next startup.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    fetch_service = getattr(app.state, "fetch_service", None)
    injected = fetch_service is not None
    if not injected:
        fetch_service = build_fetch_service(settings)

    app.state.fetch_service = fetch_service
    app.state.fetch_handler = FetchHandler(
        fetch_service=fetch_service,
        distinct_error_status=settings.distinct_error_status,
    )

    logger.info(
        "fetch_service_started",
        allowed_origins=sorted(fetch_service.allowed_origins),
        ttl_seconds=fetch_service.ttl,
    )

    yield

    await fetch_service.close()
    logger.info("fetch_service_stopped", entries=fetch_service.repository.count_all())

    del app.state.fetch_handler
    if not injected:
        del app.state.fetch_service


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[FetchHandler, Depends(get_handler)]
