"""Chat-completions passthrough for clients that build their own messages."""

import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from reimagined.config import settings
from reimagined.services.llm_client import auth_headers, chat_completions_url

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/chat/completions")
async def chat_completions(request: Request) -> JSONResponse:
    """Forward a messages array to the provider and return its reply verbatim."""
    api_key = settings.openai_api_key
    if not api_key:
        return _error("OpenAI API key not configured on server.", 500)

    try:
        body = await request.json()
        messages = body.get("messages") if isinstance(body, dict) else None
        if not isinstance(messages, list):
            return _error("Invalid request: messages array is required.", 400)

        temperature = body.get("temperature")
        payload = {
            "model": body.get("model") or settings.proxy_default_model,
            "temperature": settings.proxy_default_temperature if temperature is None else temperature,
            "response_format": body.get("response_format") or {"type": "json_object"},
            "messages": messages,
        }

        async with httpx.AsyncClient(timeout=httpx.Timeout(90.0, connect=10.0)) as client:
            response = await client.post(
                chat_completions_url(settings.openai_base_url),
                headers=auth_headers(api_key),
                json=payload,
            )

        if not response.is_success:
            logger.error("OpenAI API error: %d %s", response.status_code, response.text[:500])
            return _error(
                f"OpenAI request failed with status {response.status_code}",
                response.status_code,
            )

        return JSONResponse(response.json())
    except Exception:
        logger.error("Chat completions proxy error", exc_info=True)
        return _error("Internal server error", 500)
