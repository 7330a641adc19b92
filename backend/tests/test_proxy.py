"""Tests for the chat-completions passthrough."""

import httpx
from httpx import AsyncClient

URL = "/api/v1/chat/completions"
MESSAGES = [{"role": "user", "content": "Return {\"ok\": true}"}]


async def test_forwards_with_defaults(client: AsyncClient, provider, api_key):
    response = await client.post(URL, json={"messages": MESSAGES})
    assert response.status_code == 200
    assert response.json()["choices"][0]["message"]["content"] == "Generated text."

    payload = provider.payloads[0]
    assert payload["model"] == "gpt-5.1"
    assert payload["temperature"] == 0.3
    assert payload["response_format"] == {"type": "json_object"}
    assert payload["messages"] == MESSAGES


async def test_caller_overrides_are_kept(client: AsyncClient, provider, api_key):
    await client.post(
        URL,
        json={
            "messages": MESSAGES,
            "model": "gpt-4o-mini",
            "temperature": 0,
            "response_format": {"type": "text"},
        },
    )
    payload = provider.payloads[0]
    assert payload["model"] == "gpt-4o-mini"
    # 0 is a real value, not "missing"
    assert payload["temperature"] == 0
    assert payload["response_format"] == {"type": "text"}


async def test_missing_key_is_500(client: AsyncClient, provider, no_api_key):
    response = await client.post(URL, json={"messages": MESSAGES})
    assert response.status_code == 500
    assert response.json() == {"error": "OpenAI API key not configured on server."}
    assert provider.call_count == 0


async def test_messages_required(client: AsyncClient, provider, api_key):
    for body in ({}, {"messages": "hi"}, {"messages": None}, ["messages"]):
        response = await client.post(URL, json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request: messages array is required."}
    assert provider.call_count == 0


async def test_empty_messages_array_is_forwarded(client: AsyncClient, provider, api_key):
    response = await client.post(URL, json={"messages": []})
    assert response.status_code == 200
    assert provider.call_count == 1
    assert provider.payloads[0]["messages"] == []


async def test_upstream_status_is_passed_through(client: AsyncClient, provider, api_key):
    provider.respond(429, json={"error": {"message": "slow down"}})
    response = await client.post(URL, json={"messages": MESSAGES})
    assert response.status_code == 429
    assert response.json() == {"error": "OpenAI request failed with status 429"}


async def test_malformed_json_is_internal_error(client: AsyncClient, provider, api_key):
    response = await client.post(URL, content=b"{oops", headers={"Content-Type": "application/json"})
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


async def test_network_error_is_internal_error(client: AsyncClient, provider, api_key):
    provider.raise_error(httpx.ConnectError("refused"))
    response = await client.post(URL, json={"messages": MESSAGES})
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
