"""Shared helpers for the OpenAI-compatible chat-completions API.

Every outbound call in this service targets ``/chat/completions`` with a
bearer credential, so URL building, headers and response picking live here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def chat_completions_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/chat/completions"


def auth_headers(api_key: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def build_messages(system_instruction: str, *user_prompts: str) -> list[dict[str, str]]:
    """Build a system message followed by one user message per prompt."""
    messages = [{"role": "system", "content": system_instruction}]
    messages.extend({"role": "user", "content": prompt} for prompt in user_prompts)
    return messages


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """Return ``error.message`` from a provider error body, or *fallback*."""
    try:
        payload = response.json()
    except ValueError:
        logger.debug("Provider error body is not JSON: %s", response.text[:500])
        return fallback

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message.strip():
                return message
    return fallback


def extract_completion_text(data: Any) -> str | None:
    """Pick ``choices[0].message.content`` out of a completion body.

    Returns None when the field is absent or not a string.
    """
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
