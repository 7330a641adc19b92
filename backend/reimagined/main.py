"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from reimagined.api.routes import proxy, snapshot
from reimagined.config import settings
from reimagined.core.fallback_boundary import GENERIC_FALLBACK
from reimagined.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
RELAY_URL = f"{API_PREFIX}{snapshot.RELAY_PATH}"

# Configure logging format based on dev_mode
if not settings.dev_mode:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}',
    )
else:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Security headers middleware
# ---------------------------------------------------------------------------

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if not settings.dev_mode:
            response.headers["Strict-Transport-Security"] = (
                "max-age=63072000; includeSubDomains"
            )
        return response


# ---------------------------------------------------------------------------
# Global exception boundary
# ---------------------------------------------------------------------------

async def _global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Unhandled exception on %s %s [request_id=%s]",
        request.method, request.url.path, request_id,
        exc_info=exc,
    )
    content = GENERIC_FALLBACK.to_dict()
    if settings.dev_mode:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    # The relay answers every non-POST method in plain text
    if exc.status_code == 405 and request.url.path == RELAY_URL:
        return snapshot.method_not_allowed()
    return await http_exception_handler(request, exc)


def create_app() -> FastAPI:
    app = FastAPI(
        title="re-imagined.me API",
        description="Career snapshot generation for the re-imagined.me portal",
        version="0.1.0",
        openapi_url="/api/v1/openapi.json",
        docs_url="/docs" if settings.dev_mode else None,
        redoc_url="/redoc" if settings.dev_mode else None,
    )

    app.add_exception_handler(Exception, _global_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    # Outermost, so preflight requests are answered before routing
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    # Routers — all under /api/v1/
    app.include_router(snapshot.router, prefix=API_PREFIX, tags=["snapshot"])
    app.include_router(proxy.router, prefix=API_PREFIX, tags=["proxy"])

    @app.get("/health")
    async def health_check() -> dict:
        """Liveness check; reports whether the provider key is configured."""
        return {
            "status": "healthy",
            "services": {
                "llm_provider": "ok" if settings.openai_api_key else "not_configured",
            },
        }

    @app.get("/api/v1/version")
    async def version() -> dict:
        """Return build / version metadata."""
        return {
            "version": app.version,
            "title": app.title,
            "api_prefix": "/api/v1",
        }

    @app.get("/")
    async def root() -> dict:
        return {"message": "re-imagined.me API", "docs": "/docs"}

    return app


app = create_app()
