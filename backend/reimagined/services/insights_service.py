"""Structured snapshot insights with a template fallback."""

import logging

import httpx

from reimagined.config import settings
from reimagined.core.fallback_boundary import render_with_fallback, resolve_with_fallback
from reimagined.core.snapshot_prompts import build_fallback_insights, build_insights_messages
from reimagined.models.assessment import (
    SnapshotInsights,
    SnapshotInsightsRequest,
    SnapshotInsightsResponse,
)
from reimagined.services.exceptions import UpstreamError
from reimagined.services.llm_client import (
    auth_headers,
    chat_completions_url,
    extract_completion_text,
    extract_error_message,
)
from reimagined.services.snapshot_relay import GENERIC_FAILURE_MESSAGE, RelayConfig
from reimagined.utils.json_parser import parse_json_from_llm_response

logger = logging.getLogger(__name__)


def _parse_insights(content: str | None) -> SnapshotInsightsResponse:
    parsed = parse_json_from_llm_response(content, SnapshotInsights)
    return SnapshotInsightsResponse(
        work_evolution=parsed.work_evolution.strip(),
        future_directions=parsed.future_directions.strip(),
        next_steps=parsed.next_steps.strip(),
        source="ai",
    )


async def _request_insights(
    client: httpx.AsyncClient,
    body: SnapshotInsightsRequest,
    *,
    api_key: str,
    config: RelayConfig,
) -> str | None:
    payload = {
        "model": config.model,
        "temperature": settings.insights_temperature,
        "messages": build_insights_messages(body.form, body.goal_text, body.industry_labels),
    }
    response = await client.post(
        chat_completions_url(config.base_url), headers=auth_headers(api_key), json=payload,
    )
    logger.info("Insights provider response status: %d", response.status_code)
    if not response.is_success:
        raise UpstreamError(
            extract_error_message(response, GENERIC_FAILURE_MESSAGE),
            status_code=response.status_code,
        )
    return extract_completion_text(response.json())


async def generate_snapshot_insights(
    body: SnapshotInsightsRequest,
    *,
    api_key: str,
    config: RelayConfig,
    client: httpx.AsyncClient | None = None,
) -> SnapshotInsightsResponse:
    """Ask the provider for insights; any failure yields template insights.

    This never raises for provider problems: a missing key, an upstream
    error, or unparseable content all fall back.
    """

    def fallback() -> SnapshotInsightsResponse:
        insights = build_fallback_insights(body.form, body.goal_text, body.industry_labels)
        return SnapshotInsightsResponse(**insights.model_dump(), source="fallback")

    if not api_key:
        logger.warning("Missing provider API key; using fallback snapshot insights.")
        return fallback()

    async def produce() -> SnapshotInsightsResponse:
        if client is None:
            async with httpx.AsyncClient(timeout=httpx.Timeout(60.0, connect=10.0)) as owned:
                content = await _request_insights(owned, body, api_key=api_key, config=config)
        else:
            content = await _request_insights(client, body, api_key=api_key, config=config)
        return render_with_fallback(
            lambda: _parse_insights(content),
            fallback,
            region="snapshot-insights.parse",
        )

    insights, _ = await resolve_with_fallback(
        produce,
        fallback,
        region="snapshot-insights.request",
        context={"model": config.model},
    )
    return insights
