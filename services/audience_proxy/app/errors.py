"""Error taxonomy for the audience proxy.

Each error carries the HTTP status and the short message returned to the
caller. Upstream internals (response bodies, URLs) stay in the server log
and never go into ``details``.
"""

from __future__ import annotations

from typing import Optional

from fastapi.responses import JSONResponse

from shared.models import ErrorResponse

INTERNAL_ERROR_MESSAGE = "後端伺服器發生內部錯誤"


class ProxyError(Exception):
    status_code: int = 500
    message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, details: Optional[str] = None) -> None:
        super().__init__(details or self.message)
        self.details = details

    def to_response(self) -> JSONResponse:
        body = ErrorResponse(error=self.message, details=self.details)
        return JSONResponse(
            status_code=self.status_code, content=body.model_dump(exclude_none=True)
        )


class MethodNotAllowed(ProxyError):
    status_code = 405
    message = "Method Not Allowed"


class MissingTopic(ProxyError):
    status_code = 400
    message = "主題為必填項"


class MissingCredential(ProxyError):
    status_code = 500
    message = "API 金鑰未在伺服器上設定"


class InternalProxyError(ProxyError):
    """Transport or unexpected failure; ``details`` is the caught message."""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "InternalProxyError":
        return cls(details=str(exc) or exc.__class__.__name__)


class UpstreamStatusError(InternalProxyError):
    """Gemini answered with a status outside the 2xx range."""

    def __init__(self, upstream_status: int) -> None:
        super().__init__(details=f"Gemini API 請求失敗，狀態碼: {upstream_status}")
        self.upstream_status = upstream_status
