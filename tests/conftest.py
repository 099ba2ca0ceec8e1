"""Shared test fixtures for the stackprobe test suite.

Hosting APIs are faked with `httpx.MockTransport`: each test registers the
URLs it expects and gets a 404 for everything else, which is exactly how
the real hosts answer a probe for a missing file.
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from stackprobe.core.config import Settings, get_settings
from stackprobe.main import create_app


class FakeHost:
    """Canned responses keyed by URL (query string ignored).

    Values may be a dict or list (JSON body), a str (raw text body), an int
    (bare status code) or an exception instance (raised as a transport
    error). Every request is recorded in `calls`.
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        value = self.routes.get(str(request.url).split("?", 1)[0])
        if value is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(value, Exception):
            raise value
        if isinstance(value, int):
            return httpx.Response(value)
        if isinstance(value, str):
            return httpx.Response(200, text=value)
        return httpx.Response(200, json=value)

    def urls(self) -> list[str]:
        return [str(request.url) for request in self.calls]


def _test_settings() -> Settings:
    return Settings(sentry_dsn="", debug=False, detect_cache_ttl_seconds=60)


@pytest.fixture
def settings() -> Settings:
    return _test_settings()


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
async def http_client(fake_host) -> AsyncGenerator[httpx.AsyncClient, None]:
    """AsyncClient whose every request is answered by `fake_host`."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_host.handler)) as ac:
        yield ac


@pytest.fixture
def app():
    """Create a FastAPI app with settings overridden.

    The SlowAPI limiter and the detection result cache are module-level,
    so both are reset before each test.
    """
    from stackprobe.core.limiter import limiter
    from stackprobe.repos.router import clear_cache

    limiter.reset()
    clear_cache()

    test_app = create_app()
    test_app.dependency_overrides[get_settings] = _test_settings
    return test_app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client wired to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
