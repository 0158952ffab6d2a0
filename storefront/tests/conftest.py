"""
Storefront service test configuration.

The storefront API is faked with httpx.MockTransport: tests register
canned responses per (method, path) and unmatched requests answer 404.
"""

from __future__ import annotations

import httpx
import pytest

from storefront.services.api_client import StorefrontApi
from storefront.services.notifier import MemoryNotifier

API_URL = "http://api.test/api/v1"


class FakeApi:
    """Route table for httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, json=None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, json)

    def add_handler(self, method: str, path: str, handler) -> None:
        self.routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v1")
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, tuple):
            status, body = route
            return httpx.Response(status, json=body)
        return route(request)

    def sent(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == f"/api/v1{path}"]


@pytest.fixture
def fake():
    return FakeApi()


@pytest.fixture
def api(fake):
    return StorefrontApi(api_url=API_URL, token="test-token", transport=httpx.MockTransport(fake.handler))


@pytest.fixture
def notifier():
    return MemoryNotifier()


@pytest.fixture
def store_json():
    return {
        "id": 7,
        "name": "Fern & Thread",
        "slug": "fern-thread",
        "description": "Slow fashion, made to last.",
        "template_id": 3,
        "status": "active",
    }


@pytest.fixture
def products_json():
    return [
        {"id": 1, "name": "Linen Shirt", "price": 59.5, "images": ["https://cdn.example.com/shirt.jpg"], "slug": "linen-shirt"},
        {"id": 2, "name": "Canvas Tote", "price": "24", "images": [], "slug": "canvas-tote"},
    ]
