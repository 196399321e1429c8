"""
Tests for the fetch cache API.
"""

import hashlib

import httpx
import pytest
from fastapi.testclient import TestClient

from fetch_cache.api.app import create_app
from fetch_cache.config import Settings
from fetch_cache.repositories import HttpxOriginFetcher, InMemoryCacheRepository
from fetch_cache.services import FetchService

from .conftest import ORIGIN

TARGET = f"{ORIGIN}/index.html"


def make_service(origin) -> FetchService:
    return FetchService(
        repository=InMemoryCacheRepository(),
        fetcher=HttpxOriginFetcher(timeout=5.0, transport=httpx.MockTransport(origin)),
        allowed_origins={ORIGIN},
    )


@pytest.fixture
def client(origin):
    """Create a test client serving the scripted origin."""
    app = create_app(make_service(origin), Settings(allowed_origins=frozenset({ORIGIN})))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def strict_client(origin):
    """Create a test client that reports distinct error statuses."""
    app = create_app(
        make_service(origin),
        Settings(allowed_origins=frozenset({ORIGIN}), distinct_error_status=True),
    )
    with TestClient(app) as client:
        yield client


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.text == "OK"


def test_fetch(client, origin):
    """A target is fetched and served with cache headers."""
    response = client.get("/", params={"url": TARGET})

    assert response.status_code == 200
    assert response.content == origin.body
    assert response.headers["content-type"] == "text/html; charset=utf-8"
    assert response.headers["etag"] == f'"{hashlib.md5(origin.body).hexdigest()}"'
    assert "last-modified" in response.headers
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert origin.calls == 1
    assert str(origin.requests[0].url) == TARGET


def test_fetch_is_cached(client, origin):
    """A second request within the TTL does not reach the origin."""
    first = client.get("/", params={"url": TARGET})
    second = client.get("/", params={"url": TARGET})

    assert origin.calls == 1
    assert second.content == first.content
    assert second.headers["etag"] == first.headers["etag"]


def test_conditional_request(client):
    """Revalidation with the ETag yields 304."""
    etag = client.get("/", params={"url": TARGET}).headers["etag"]

    response = client.get("/", params={"url": TARGET}, headers={"If-None-Match": etag})

    assert response.status_code == 304
    assert response.content == b""


def test_range_request(client, origin):
    """A byte range is served as partial content."""
    response = client.get("/", params={"url": TARGET}, headers={"Range": "bytes=0-5"})

    assert response.status_code == 206
    assert response.content == origin.body[:6]


def test_head(client, origin):
    """HEAD is routed like GET."""
    response = client.head("/", params={"url": TARGET})

    assert response.status_code == 200
    assert response.headers["content-length"] == str(len(origin.body))


def test_any_path_serves_target(client, origin):
    """The url parameter is honoured on any path."""
    response = client.get("/some/path", params={"url": TARGET})

    assert response.status_code == 200
    assert response.content == origin.body


def test_origin_not_allowed(client, origin):
    """Rejected origins answer 404 without contacting anything."""
    response = client.get("/", params={"url": "https://not-allowed.test/x"})

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert origin.calls == 0


@pytest.mark.parametrize("params", [{"url": ORIGIN}, {"url": f"{ORIGIN}/"}, {}])
def test_invalid_path(client, origin, params):
    """Targets without a resource answer 404."""
    response = client.get("/", params=params)

    assert response.status_code == 404
    assert origin.calls == 0


def test_origin_failure(client, origin):
    """Origin errors answer 404 by default."""
    origin.status_code = 500

    response = client.get("/", params={"url": TARGET})

    assert response.status_code == 404


def test_missing_scheme(client, origin):
    """A target without scheme gets the httpd:// origin, which is not allowed."""
    response = client.get("/", params={"url": "example.test/index.html"})

    assert response.status_code == 404
    assert origin.calls == 0


def test_distinct_status_not_allowed(strict_client):
    """With distinct statuses a rejected origin is 403."""
    response = strict_client.get("/", params={"url": "https://not-allowed.test/x"})

    assert response.status_code == 403
    data = response.json()
    assert data["code"] == "ORIGIN_NOT_ALLOWED"
    assert data["details"] == {"origin": "https://not-allowed.test"}


def test_distinct_status_fetch_failed(strict_client, origin):
    """With distinct statuses an origin failure is 502."""
    origin.error = httpx.ConnectError("connection refused")

    response = strict_client.get("/", params={"url": TARGET})

    assert response.status_code == 502
    assert response.json()["code"] == "FETCH_FAILED"


def test_distinct_status_invalid_input(strict_client):
    """With distinct statuses a malformed target is 400."""
    response = strict_client.get("/", params={"url": ORIGIN})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_default_app_starts():
    """The app builds its own service from settings at startup."""
    with TestClient(create_app()) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert client.app.state.fetch_service.repository.count_all() == 0


def test_non_latin1_content_type(client, origin):
    """Content-Type bytes outside latin-1 are served back unchanged."""
    raw = "text/plain; name=€".encode()
    origin.content_type = raw

    for _ in range(2):
        response = client.get("/", params={"url": TARGET})
        assert response.status_code == 200
        assert response.content == origin.body
        assert dict(response.headers.raw)[b"content-type"] == raw

    assert origin.calls == 1


def test_repeated_url_uses_first(client, origin):
    """The first ``url`` value wins when the parameter is repeated."""
    response = client.get("/", params=[("url", TARGET), ("url", "https://evil.test/x")])

    assert response.status_code == 200
    assert str(origin.requests[0].url) == TARGET


def test_injected_service_survives_restart(origin):
    """An injected service is reused when the same app starts again."""
    service = make_service(origin)
    app = create_app(service, Settings(allowed_origins=frozenset({ORIGIN})))

    with TestClient(app) as client:
        assert client.get("/", params={"url": TARGET}).status_code == 200

    with TestClient(app) as client:
        assert app.state.fetch_service is service
        assert client.get("/", params={"url": TARGET}).status_code == 200

    assert origin.calls == 1
