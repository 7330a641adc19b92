"""Snapshot relay: one chat completion per report section.

Sections are processed strictly in order. The first failure aborts the
batch and nothing computed so far is returned. There is no retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from reimagined.config import settings
from reimagined.services.exceptions import ProviderNotConfigured, UpstreamError
from reimagined.services.llm_client import (
    auth_headers,
    build_messages,
    chat_completions_url,
    extract_completion_text,
    extract_error_message,
)

logger = logging.getLogger(__name__)

SNAPSHOT_SYSTEM_INSTRUCTION = (
    "You are a concise career strategist. Reply with friendly, forward-looking, "
    "plain-language insights that fit comfortably inside a short paragraph or compact list."
)

GENERIC_FAILURE_MESSAGE = "Failed to generate an AI snapshot."
EMPTY_COMPLETION_MESSAGE = "The AI response was empty."


@dataclass(frozen=True)
class RelayConfig:
    """Fixed per-request provider settings for the relay."""

    model: str = "gpt-4o-mini"
    temperature: float = 0.4
    max_tokens: int = 250
    system_instruction: str = SNAPSHOT_SYSTEM_INSTRUCTION
    base_url: str = "https://api.openai.com/v1"

    @classmethod
    def from_settings(cls) -> "RelayConfig":
        return cls(
            model=settings.snapshot_model,
            temperature=settings.snapshot_temperature,
            max_tokens=settings.snapshot_max_tokens,
            base_url=settings.openai_base_url,
        )

    def payload_for(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "messages": build_messages(self.system_instruction, prompt),
        }


async def request_completion(
    client: httpx.AsyncClient,
    prompt: str,
    *,
    api_key: str,
    config: RelayConfig,
) -> str:
    """Send one prompt and return the trimmed completion text."""
    url = chat_completions_url(config.base_url)
    response = await client.post(url, headers=auth_headers(api_key), json=config.payload_for(prompt))
    logger.info("Provider response status: %d", response.status_code)

    if not response.is_success:
        message = extract_error_message(response, GENERIC_FAILURE_MESSAGE)
        logger.error("Provider error %d: %s", response.status_code, response.text[:500])
        raise UpstreamError(message, status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as exc:
        raise UpstreamError(EMPTY_COMPLETION_MESSAGE, status_code=response.status_code) from exc

    content = extract_completion_text(data)
    if content is None or not content.strip():
        raise UpstreamError(EMPTY_COMPLETION_MESSAGE, status_code=response.status_code)
    return content.strip()


async def generate_sections(
    sections: dict[str, str],
    *,
    api_key: str,
    config: RelayConfig,
    client: httpx.AsyncClient | None = None,
) -> dict[str, str]:
    """Generate a completion for every section, in the mapping's order.

    Raises ProviderNotConfigured before any call when *api_key* is empty and
    UpstreamError on the first failing section.
    """
    if not api_key:
        raise ProviderNotConfigured()

    if client is None:
        # No explicit timeout: the network stack and provider decide
        async with httpx.AsyncClient(timeout=None) as owned_client:
            return await _generate_all(owned_client, sections, api_key=api_key, config=config)
    return await _generate_all(client, sections, api_key=api_key, config=config)


async def _generate_all(
    client: httpx.AsyncClient,
    sections: dict[str, str],
    *,
    api_key: str,
    config: RelayConfig,
) -> dict[str, str]:
    results: dict[str, str] = {}
    total = len(sections)
    for index, (key, prompt) in enumerate(sections.items(), start=1):
        logger.info(
            "Generating section %d/%d key=%s model=%s prompt_len=%d",
            index, total, key, config.model, len(prompt),
        )
        try:
            results[key] = await request_completion(client, prompt, api_key=api_key, config=config)
        except httpx.HTTPError as exc:
            logger.error("Provider call for section %s failed: %s", key, exc)
            raise UpstreamError(GENERIC_FAILURE_MESSAGE) from exc
        except UpstreamError:
            logger.warning("Aborting snapshot at section %s (%d/%d)", key, index, total)
            raise
    return results
