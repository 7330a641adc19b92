"""Tests for application wiring: system endpoints, middleware, error boundary."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from reimagined.main import create_app


async def test_health_reports_provider_configured(client: AsyncClient, api_key):
    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["services"]["llm_provider"] == "ok"


async def test_health_reports_missing_provider(client: AsyncClient, no_api_key):
    response = await client.get("/health")
    assert response.json()["services"]["llm_provider"] == "not_configured"


async def test_version_endpoint(client: AsyncClient):
    response = await client.get("/api/v1/version")
    assert response.status_code == 200
    body = response.json()
    assert body["version"] == "0.1.0"
    assert body["api_prefix"] == "/api/v1"


async def test_root(client: AsyncClient):
    response = await client.get("/")
    assert response.json()["message"] == "re-imagined.me API"


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


async def test_request_id_is_generated(client: AsyncClient):
    response = await client.get("/health")
    assert len(response.headers["x-request-id"]) == 36


async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


async def test_security_headers(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"


async def test_cors_preflight_for_snapshot(client: AsyncClient):
    response = await client.options(
        "/api/v1/generate-snapshot",
        headers={
            "Origin": "https://re-imagined.me",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type, apikey",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "apikey" in response.headers["access-control-allow-headers"].lower()


async def test_plain_options_is_method_not_allowed(client: AsyncClient):
    response = await client.options("/api/v1/generate-snapshot")
    assert response.status_code == 405


# ---------------------------------------------------------------------------
# Global exception boundary
# ---------------------------------------------------------------------------


@pytest.fixture
def failing_app():
    app = create_app()

    @app.get("/explode")
    async def explode():
        raise RuntimeError("component exploded")

    return app


async def test_unhandled_exception_renders_generic_fallback(failing_app, caplog):
    transport = ASGITransport(app=failing_app, raise_app_exceptions=False)
    with caplog.at_level(logging.ERROR, logger="reimagined.main"):
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/explode", headers={"X-Request-ID": "req-9"})

    assert response.status_code == 500
    body = response.json()
    assert body["title"] == "Something went wrong."
    assert body["action_label"] == "Refresh"
    assert "/explode" in caplog.text
    assert "req-9" in caplog.text
