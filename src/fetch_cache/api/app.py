from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from fetch_cache.api.dependencies import HandlerDep, lifespan
from fetch_cache.config import Settings, settings
from fetch_cache.services import FetchService


def create_app(
    fetch_service: FetchService | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        fetch_service: Pre-built service to serve. If None, the lifespan builds one from settings.
        app_settings: Settings override. If None, uses the environment.

    Returns:
        The configured application
    """
    app = FastAPI(
        title="Fetch Cache",
        description="Caching HTTP fetcher for an allow-list of origins",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings or settings
    if fetch_service is not None:
        app.state.fetch_service = fetch_service

    @app.api_route("/health", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def health(handler: HandlerDep) -> PlainTextResponse:
        """Liveness probe; always answers OK."""
        return await handler.health()

    @app.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
    @app.api_route("/", methods=["GET", "HEAD"])
    async def fetch_object(request: Request, handler: HandlerDep) -> Response:
        """
        Serve the ``url`` query parameter from the cache, fetching it from its
        origin when needed. When ``url`` is repeated the first value is used.

        Query:
            url: Target such as ``https://paulgraham.com/index.html``.

        Returns:
            The object bytes with Content-Type, ETag, Last-Modified and CORS headers.
        """
        urls = request.query_params.getlist("url")
        return await handler.fetch(request, urls[0] if urls else "")

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "fetch_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
