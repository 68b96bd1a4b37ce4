from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Upstream:
    """Routes mock-transport requests to per-host handlers and records them."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.handlers: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, host: str, handler) -> None:
        self.handlers[host] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.handlers.get(request.url.host)
        if handler is None:
            return httpx.Response(404, json={"message": "no handler"})
        return handler(request)

    def calls_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.calls if r.url.host == host]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "places-key")
    monkeypatch.setenv("RAPIDAPI_KEY", "rapid-key")
    monkeypatch.setenv("MAKE_LEAD_WEBHOOK_URL", "https://hook.make.test/lead")
    monkeypatch.setenv("MAKE_SEARCH_WEBHOOK_URL", "https://hook.make.test/search")
    monkeypatch.setenv("MAKE_REQUEST_WEBHOOK_URL", "https://hook.make.test/request")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "3600")
    monkeypatch.setenv("RATE_LIMIT_MAX", "100")
    return Settings()


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(settings, http_client):
    app = create_app(settings=settings, http_client=http_client)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
