"""Career snapshot endpoints: prompt relay, prompt building and insights."""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from reimagined.config import settings
from reimagined.core.snapshot_prompts import build_snapshot_prompts
from reimagined.models.assessment import (
    SnapshotInsightsRequest,
    SnapshotInsightsResponse,
    SnapshotPromptsRequest,
)
from reimagined.models.snapshot import SnapshotRequest, SnapshotResponse
from reimagined.services.exceptions import (
    InvalidSnapshotRequest,
    ProviderNotConfigured,
    UpstreamError,
)
from reimagined.services.insights_service import generate_snapshot_insights
from reimagined.services.snapshot_relay import RelayConfig, generate_sections

logger = logging.getLogger(__name__)

router = APIRouter()

RELAY_PATH = "/generate-snapshot"


@router.post(RELAY_PATH)
async def generate_snapshot(request: Request) -> Response:
    """Relay each named prompt to the provider and return the completions.

    Errors are returned as plain text. Any failure means no section was
    generated, even if earlier prompts succeeded.
    """
    api_key = settings.openai_api_key
    if not api_key:
        logger.error("Snapshot requested but no provider API key is configured")
        return PlainTextResponse(str(ProviderNotConfigured()), status_code=500)

    try:
        payload = await request.json()
    except ValueError:
        return PlainTextResponse("Request body must be valid JSON.", status_code=400)

    try:
        body = SnapshotRequest.from_payload(payload)
    except InvalidSnapshotRequest as exc:
        return PlainTextResponse(str(exc), status_code=400)

    logger.info("Generating snapshot with %d section(s)", len(body.sections))
    try:
        results = await generate_sections(
            body.sections, api_key=api_key, config=RelayConfig.from_settings(),
        )
    except UpstreamError as exc:
        logger.error("Snapshot generation failed: %s", exc)
        return PlainTextResponse(str(exc), status_code=500)

    return JSONResponse(SnapshotResponse(results).model_dump())


def method_not_allowed() -> PlainTextResponse:
    """Plain-text 405 for the relay, whatever the method."""
    return PlainTextResponse(
        "Method not allowed", status_code=405, headers={"Allow": "POST"},
    )


@router.post("/snapshot/prompts")
async def snapshot_prompts(body: SnapshotPromptsRequest) -> dict:
    """Build the relay request for a completed assessment."""
    return {"sections": build_snapshot_prompts(body.form, body.goal_text, body.industry_label)}


@router.post("/snapshot/insights", response_model=SnapshotInsightsResponse)
async def snapshot_insights(body: SnapshotInsightsRequest) -> SnapshotInsightsResponse:
    """Structured insights for the snapshot card, falling back to templates."""
    return await generate_snapshot_insights(
        body, api_key=settings.openai_api_key, config=RelayConfig.from_settings(),
    )
