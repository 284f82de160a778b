"""Proxy handler: topic in, Gemini JSON out.

Flow per request:
  Validate method -> Validate body -> Load credential -> Build payload ->
  Call Gemini -> Translate result.

Every branch ends in exactly one JSON response. Settings and the optional
httpx transport are injected at construction; the credential is read from
the injected settings on each request and never cached.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from shared.logging_utils import create_service_logger
from shared.models import TopicRequest
from shared.settings import Settings

from .errors import (
    InternalProxyError,
    MethodNotAllowed,
    MissingCredential,
    MissingTopic,
    ProxyError,
)
from .gemini import GeminiClient
from .prompts import build_audience_payload

logger = create_service_logger("audience_proxy")


class ProxyHandler:
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def handle(self, request: Request) -> JSONResponse:
        try:
            if request.method != "POST":
                raise MethodNotAllowed()
            topic = await self._read_topic(request)
            api_key = self._require_credential()
            payload = build_audience_payload(topic).to_wire()
            client = GeminiClient.from_settings(
                api_key, self._settings, transport=self._transport
            )
            data = await client.generate_content(payload)
        except ProxyError as exc:
            if exc.status_code >= 500 and exc.details:
                logger.error("proxy_failed", details=exc.details)
            return exc.to_response()
        except Exception as exc:
            logger.exception("proxy_failed", error_type=exc.__class__.__name__)
            return InternalProxyError.from_exception(exc).to_response()

        return JSONResponse(status_code=200, content=data)

    async def _read_topic(self, request: Request) -> str:
        try:
            body: Any = await request.json()
            parsed = TopicRequest.model_validate(body)
        except (ValueError, ValidationError):
            # Unparseable JSON, a non-object body, or a non-string topic
            raise MissingTopic()
        if not parsed.topic:
            raise MissingTopic()
        return parsed.topic

    def _require_credential(self) -> str:
        api_key = self._settings.gemini_api_key
        if not api_key:
            logger.error("missing_credential", variable="GEMINI_API_KEY")
            raise MissingCredential()
        return api_key
