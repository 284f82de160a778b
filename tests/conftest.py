import os
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

# Never pick up a developer's real key from the shell
os.environ.pop("GEMINI_API_KEY", None)
os.environ.setdefault("LOG_FORMAT", "console")

from services.audience_proxy.app.main import create_app  # noqa: E402
from shared.settings import Settings  # noqa: E402

FAKE_KEY = "test-secret-key-123"
SAMPLE_AUDIENCES = [
    {
        "behavior": "搜尋線上英語課程比較",
        "audiences": [
            "職場英語進修者 (興趣: 商業英語) [人數範圍: 20萬 - 150萬]",
            "準備出國留學的學生 (興趣: 留學) [人數範圍: 10萬 - 50萬]",
        ],
    }
]


class RecordingUpstream:
    """Mock Gemini endpoint that records every request it receives."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_settings(**overrides) -> Settings:
    values = {"gemini_api_key": FAKE_KEY, "log_format": "console"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream_ok() -> RecordingUpstream:
    return RecordingUpstream(lambda req: httpx.Response(200, json=SAMPLE_AUDIENCES))


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    def _make(upstream: RecordingUpstream | None = None, **overrides) -> TestClient:
        transport = upstream.transport if upstream is not None else None
        app = create_app(make_settings(**overrides), transport=transport)
        return TestClient(app)

    return _make
