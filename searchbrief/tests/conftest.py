"""Shared test fixtures for SearchBrief tests."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from searchbrief.nlp.pipeline import SummaryPipeline
from searchbrief.nlp.summarizer import ExtractiveSummarizer
from searchbrief.observability.metrics import metrics
from searchbrief.search.base import Document
from searchbrief.utils.time import fixed_clock

FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=ZoneInfo("Asia/Tokyo"))


@pytest.fixture
def clock():
    return fixed_clock(FIXED_NOW)


@pytest.fixture
def summarizer(clock):
    return ExtractiveSummarizer(clock=clock)


@pytest.fixture
def pipeline(summarizer):
    return SummaryPipeline(backend=summarizer, max_documents=10)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def make_document():
    def _make(title: str = "", content: str = "", url: str = "https://example.com") -> Document:
        return Document(title=title, url=url, content=content)

    return _make


@pytest.fixture
def build_app():
    """Create a bare app with the given routers and dependency overrides."""

    def _build(*routers, overrides: dict | None = None) -> FastAPI:
        app = FastAPI()
        for router in routers:
            app.include_router(router)
        app.dependency_overrides.update(overrides or {})
        return app

    return _build


@pytest_asyncio.fixture
async def client_for():
    clients: list[AsyncClient] = []

    def _client(app: FastAPI) -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _client

    for client in clients:
        await client.aclose()
