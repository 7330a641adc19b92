"""Render-with-fallback boundary.

Wraps a region of work, intercepts any failure raised inside it, logs the
region and traceback, and substitutes a fallback result instead.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FallbackView:
    """Content shown in place of a region that failed."""

    title: str
    message: str
    action_label: str = "Refresh"

    def to_dict(self) -> dict:
        return asdict(self)


GENERIC_FALLBACK = FallbackView(
    title="Something went wrong.",
    message="Please refresh the page. If the problem persists, contact support.",
)


def _log_failure(region: str, exc: Exception, context: dict | None) -> None:
    logger.error(
        "Fallback boundary caught %s in region=%s context=%s",
        type(exc).__name__, region, context or {},
        exc_info=exc,
    )


def render_with_fallback(
    render: Callable[[], T],
    fallback: Callable[[], T],
    *,
    region: str,
    context: dict | None = None,
) -> T:
    """Return ``render()``, or ``fallback()`` if it raises."""
    try:
        return render()
    except Exception as exc:
        _log_failure(region, exc, context)
        return fallback()


async def resolve_with_fallback(
    produce: Callable[[], Awaitable[T]],
    fallback: Callable[[], T],
    *,
    region: str,
    context: dict | None = None,
) -> tuple[T, bool]:
    """Await ``produce()``; on failure return ``fallback()``.

    The second element of the result is True when the fallback was used.
    """
    try:
        return await produce(), False
    except Exception as exc:
        _log_failure(region, exc, context)
        return fallback(), True
