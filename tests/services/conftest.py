"""Data-service client wired to an in-process httpx transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from merchant_admin.config import DataServiceConfig
from merchant_admin.services import DataServiceClient

Handler = Callable[[httpx.Request], httpx.Response]


class FakeDataService:
    """Routes requests to canned handlers and records what was sent."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def reply(self, method: str, path: str, status_code: int = 200, body=None) -> None:
        self.on(method, path, lambda _request: httpx.Response(status_code, json=body))

    def last_json(self):
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "Not found"})
        return handler(request)


@pytest.fixture
def data_service() -> FakeDataService:
    return FakeDataService()


@pytest.fixture
async def client(data_service):
    config = DataServiceConfig(base_url="https://data.test", token="tok", timeout=5.0)
    service = DataServiceClient(config, transport=httpx.MockTransport(data_service))
    await service.initialize()
    yield service
    await service.close()
