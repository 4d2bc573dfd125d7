import json

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlproxy.config import Settings
from sqlproxy.main import create_app

GEMINI_HOST = "gemini.test"
EXECUTION_URL = "https://db.test/functions/v1/run-sql"


class FakeUpstream:
    """Scripted stand-in for both the generation and the execution service."""

    def __init__(self):
        self.gemini_replies = []  # (status, body) popped one per generation call
        self.db_reply = (200, [])
        self.calls: list[httpx.Request] = []

    @property
    def gemini_calls(self) -> list[httpx.Request]:
        return [r for r in self.calls if r.url.host == GEMINI_HOST]

    @property
    def db_calls(self) -> list[httpx.Request]:
        return [r for r in self.calls if str(r.url) == EXECUTION_URL]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.host == GEMINI_HOST:
            status, body = self.gemini_replies.pop(0)
        else:
            status, body = self.db_reply
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def sent_json(self, request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def settings():
    return Settings(
        gemini_key="test-key",
        gemini_base_url=f"https://{GEMINI_HOST}",
        gemini_models=("gemini-1.5-flash", "gemini-1.5-flash-8b"),
        execution_url=EXECUTION_URL,
        execution_key="anon-key",
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


# Outbound client wired to the fake upstream
@pytest_asyncio.fixture
async def http(upstream: FakeUpstream):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as c:
        yield c


# Client talking to the app in-process
@pytest_asyncio.fixture
async def client(settings: Settings, upstream: FakeUpstream):
    app = create_app(settings, transport=httpx.MockTransport(upstream.handler))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
