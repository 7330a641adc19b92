"""Request ID middleware: tags every request and response with an ID.

Pure ASGI rather than BaseHTTPMiddleware so plain-text error responses and
CORS headers pass through untouched. The ID lands on request.state so the
global exception boundary can tag its error logs with it.
"""

import logging
import uuid
from typing import Any

from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = b"x-request-id"


class RequestIDMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = dict(scope.get("headers", [])).get(REQUEST_ID_HEADER, b"").decode("latin-1")
        if not request_id:
            request_id = str(uuid.uuid4())

        # request.state.request_id for handlers and the exception boundary
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers
                logger.debug(
                    "%s %s -> %d [%s]",
                    scope.get("method"), scope.get("path"), message["status"], request_id,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
