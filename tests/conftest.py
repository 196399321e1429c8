"""
Shared fixtures: a controllable clock and a scripted origin server.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

ORIGIN = "https://example.test"


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class OriginStub:
    """httpx.MockTransport handler that records every request it serves."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.body = b"<html><body>hello</body></html>"
        self.content_type: str | bytes | None = "text/html; charset=utf-8"
        self.status_code = 200
        self.error: Exception | None = None
        self.stream: httpx.AsyncByteStream | None = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Yield so concurrent resolves interleave like real network calls
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        headers = {"content-type": self.content_type} if self.content_type else {}
        if self.stream is not None:
            return httpx.Response(self.status_code, stream=self.stream, headers=headers)
        return httpx.Response(self.status_code, content=self.body, headers=headers)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def origin():
    """Create a scripted origin."""
    return OriginStub()
