"""Audience proxy service.

This service accepts a topic from the browser, asks Google Gemini for a
list of user behaviors with 8 to 10 targetable audiences each, and relays
Gemini's JSON back unchanged. The Gemini API key stays on the server.

Endpoints:
- POST `/api/proxy` (configurable via PROXY_PATH): `{"topic": str}` in,
  Gemini `generateContent` JSON out. Any other verb answers 405 with
  `{"error": "Method Not Allowed"}`.
- GET `/` and `/health`: liveness probes.

Run locally with ``uvicorn services.audience_proxy.app.main:app``.
"""

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.logging_utils import (
    configure_service_logging,
    create_service_logger,
    install_request_logging,
)
from shared.settings import Settings

from .errors import InternalProxyError
from .handler import ProxyHandler

PROXY_METHODS = ["POST", "GET", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

logger = create_service_logger("audience_proxy")


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the FastAPI app around a ProxyHandler.

    Args:
        settings: Configuration; loaded from the environment when omitted.
        transport: Optional httpx transport for the Gemini call (tests pass
            an ``httpx.MockTransport``).
    """
    s = settings or Settings()
    configure_service_logging(
        service_name=s.service_name,
        environment=s.environment,
        log_level=s.log_level,
        log_format=s.log_format,
    )

    app = FastAPI(title="Audience Proxy Service", version="0.1.0")
    app.state.settings = s
    install_request_logging(app, service_name=s.service_name)

    # ---------- Global safety net: never crash the worker ----------
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """Catch-all for any unhandled exception; return the generic 500 body."""
        logger.exception("unhandled_exception", error_type=exc.__class__.__name__)
        return InternalProxyError.from_exception(exc).to_response()

    # ---------------------------------------------------------------

    @app.get("/")
    def _root():
        return {"status": "ok", "service": s.service_name}

    @app.get("/health")
    def _health():
        return {"status": "ok"}

    handler = ProxyHandler(s, transport=transport)

    @app.api_route(s.proxy_path, methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(request: Request) -> JSONResponse:
        return await handler.handle(request)

    return app


app = create_app()
