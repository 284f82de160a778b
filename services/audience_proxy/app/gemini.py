"""Thin async client for Gemini's ``generateContent`` REST endpoint.

One ``generate_content`` call issues exactly one POST with a fresh
``httpx.AsyncClient``; there are no retries and nothing is kept between
calls. The credential travels as the ``key`` query parameter, so neither
the request URL nor the params are ever logged.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from shared.logging_utils import create_service_logger
from shared.settings import Settings

from .errors import UpstreamStatusError

logger = create_service_logger("gemini")

# Upper bound on upstream error text written to the log
_ERROR_BODY_LIMIT = 2000


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: httpx.Timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        api_key: str,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GeminiClient":
        connect = settings.upstream_connect_timeout
        return cls(
            api_key=api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_api_base,
            timeout=httpx.Timeout(
                connect=connect,
                read=settings.upstream_read_timeout,
                write=connect,
                pool=connect,
            ),
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def generate_content(self, payload: dict) -> Any:
        """POST the payload and return the parsed JSON body.

        Raises:
            UpstreamStatusError: Gemini answered with a non-2xx status.
            httpx.HTTPError: the request could not be completed.
            ValueError: the success body is not valid JSON.
        """
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            r = await client.post(
                self.endpoint,
                params={"key": self._api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )
        if not r.is_success:
            logger.error(
                "gemini_api_error",
                model=self._model,
                status_code=r.status_code,
                body=(r.text or "")[:_ERROR_BODY_LIMIT],
            )
            raise UpstreamStatusError(r.status_code)
        return r.json()
