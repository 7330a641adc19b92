"""Shared test fixtures for the re-imagined.me API tests."""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from reimagined.config import settings
from reimagined.main import app

# Captured before any test patches httpx.AsyncClient
_RealAsyncClient = httpx.AsyncClient


def completion_body(content: str | None) -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class FakeProvider:
    """Stands in for the chat-completions API.

    Queued responses are served in order; once the queue is empty every
    request gets a generic completion. Every request body and the keyword
    arguments of every client constructed are recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queue: list[httpx.Response | Exception] = []
        self.client_kwargs: list[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def reply(self, content: str | None) -> None:
        self._queue.append(httpx.Response(200, json=completion_body(content)))

    def respond(self, status_code: int, **kwargs) -> None:
        self._queue.append(httpx.Response(status_code, **kwargs))

    def raise_error(self, exc: Exception) -> None:
        self._queue.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            return httpx.Response(200, json=completion_body("Generated text."))
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def client(self, **kwargs) -> httpx.AsyncClient:
        self.client_kwargs.append(kwargs)
        return _RealAsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def provider(monkeypatch) -> FakeProvider:
    """Route every httpx.AsyncClient created by the service to a FakeProvider."""
    fake = FakeProvider()
    monkeypatch.setattr(httpx, "AsyncClient", fake.client)
    return fake


@pytest.fixture
def api_key(monkeypatch) -> str:
    monkeypatch.setattr(settings, "openai_api_key", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch) -> None:
    monkeypatch.setattr(settings, "openai_api_key", "")


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
