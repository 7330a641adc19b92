"""Shared utility for parsing JSON objects out of LLM responses."""

import json
import logging
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)
logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_EMBEDDED_RE = re.compile(r"\{.*\}", re.DOTALL)


class LLMResponseParseError(ValueError):
    """Raised when no valid JSON object can be recovered from the content."""


def parse_json_from_llm_response(content: str | None, model_class: type[T]) -> T:
    """Parse a single JSON object from LLM output into *model_class*.

    Handles three formats:
    1. Direct JSON: {"key": "value"}
    2. Markdown fence: ```json\\n{...}\\n```
    3. Embedded JSON: text before {"key": "value"} text after

    Raises:
        LLMResponseParseError: if none of the formats yields a valid object.
    """
    if not content or not content.strip():
        raise LLMResponseParseError("LLM response was empty")

    candidates = [content.strip()]
    fence = _FENCE_RE.search(content)
    if fence:
        candidates.append(fence.group(1))
    embedded = _EMBEDDED_RE.search(content)
    if embedded:
        candidates.append(embedded.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if not isinstance(data, dict):
            continue
        try:
            return model_class.model_validate(data)
        except ValidationError as exc:
            logger.debug("JSON object did not match %s: %s", model_class.__name__, exc)

    logger.warning("Could not parse %s from LLM response: %s", model_class.__name__, content[:200])
    raise LLMResponseParseError(f"No valid {model_class.__name__} JSON found in LLM response")
