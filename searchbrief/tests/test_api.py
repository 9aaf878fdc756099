"""Tests for the search, summarize and settings routes."""

import httpx
import pytest

from searchbrief.api import settings as settings_api
from searchbrief.api.search import get_search_provider, router as search_router
from searchbrief.api.settings import classify_api_key, router as settings_router
from searchbrief.api.summarize import get_summary_pipeline, router as summarize_router
from searchbrief.config import Settings
from searchbrief.errors import RateLimitError, SummaryGenerationError
from searchbrief.nlp.pipeline import SummaryPipeline
from searchbrief.nlp.summarizer import SummaryBackend
from searchbrief.observability.metrics import metrics
from searchbrief.search.base import Document, SearchProvider
from searchbrief.search.tavily import TavilySearchProvider


class StubProvider(SearchProvider):
    def __init__(self, documents=None, error=None) -> None:
        self.documents = documents or []
        self.error = error
        self.queries: list[str] = []

    @property
    def provider_name(self) -> str:
        return "stub"

    async def search(self, query: str) -> list[Document]:
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.documents


class BrokenBackend(SummaryBackend):
    @property
    def backend_name(self) -> str:
        return "broken"

    async def generate_summary(self, query: str, combined_text: str) -> str:
        raise SummaryGenerationError()


WEATHER_RESULTS = [
    {
        "title": "東京の天気",
        "url": "https://example.com/weather",
        "content": "今日は晴れです。明日は雨が降るでしょう。気温は20度前後です。",
    }
]


class TestSummarizeRoute:
    @pytest.fixture
    def app(self, build_app, pipeline):
        return build_app(summarize_router, overrides={get_summary_pipeline: lambda: pipeline})

    @pytest.mark.asyncio
    async def test_returns_summary_and_counts(self, app, client_for):
        resp = await client_for(app).post(
            "/api/summarize", json={"query": "東京 天気", "results": WEATHER_RESULTS}
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["query"] == "東京 天気"
        assert body["sourceCount"] == 1
        assert body["summary"].startswith("「東京 天気」に関する検索結果のサマリ：")
        assert len(body["summary"]) <= 500

    @pytest.mark.asyncio
    async def test_null_fields_are_accepted(self, app, client_for):
        resp = await client_for(app).post(
            "/api/summarize",
            json={"query": "検索", "results": [{"title": None, "url": None, "content": None}]},
        )
        assert resp.status_code == 200
        assert resp.json()["sourceCount"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"query": "", "results": WEATHER_RESULTS},
            {"query": 42, "results": WEATHER_RESULTS},
            {"results": WEATHER_RESULTS},
            {"query": "東京", "results": []},
            {"query": "東京"},
        ],
    )
    async def test_rejects_missing_query_or_results(self, app, client_for, payload):
        resp = await client_for(app).post("/api/summarize", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "クエリと検索結果が必要です"}

    @pytest.mark.asyncio
    async def test_non_string_fields_are_summarized_as_text(self, app, client_for):
        resp = await client_for(app).post(
            "/api/summarize",
            json={"query": "検索", "results": [{"title": 5, "url": None, "content": "これは十分に長い文章です"}]},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["sourceCount"] == 1
        assert "1. これは十分に長い文章です" in body["summary"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("results", ["not a list", {"title": "t"}, [1, 2], [{"title": "t"}, "x"]])
    async def test_malformed_results_get_error_body(self, app, client_for, results):
        resp = await client_for(app).post("/api/summarize", json={"query": "東京", "results": results})
        assert resp.status_code == 400
        assert resp.json() == {"error": "クエリと検索結果が必要です"}

    @pytest.mark.asyncio
    async def test_generation_failure_is_500(self, build_app, client_for):
        broken = SummaryPipeline(backend=BrokenBackend())
        app = build_app(summarize_router, overrides={get_summary_pipeline: lambda: broken})

        resp = await client_for(app).post(
            "/api/summarize", json={"query": "東京", "results": WEATHER_RESULTS}
        )
        assert resp.status_code == 500
        assert resp.json() == {"error": "サマリ生成中にエラーが発生しました"}


class TestSearchRoute:
    @pytest.mark.asyncio
    async def test_returns_results(self, build_app, client_for):
        provider = StubProvider(documents=[Document(title="t", url="https://u", content="c")])
        app = build_app(search_router, overrides={get_search_provider: lambda: provider})

        resp = await client_for(app).post("/api/search", json={"query": "東京 天気"})

        assert resp.status_code == 200
        assert resp.json() == {
            "results": [{"title": "t", "url": "https://u", "content": "c"}],
            "query": "東京 天気",
        }
        assert provider.queries == ["東京 天気"]
        assert metrics.snapshot()["searches"] == {"stub:ok": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": 7}])
    async def test_rejects_bad_query(self, build_app, client_for, payload):
        provider = StubProvider()
        app = build_app(search_router, overrides={get_search_provider: lambda: provider})

        resp = await client_for(app).post("/api/search", json=payload)

        assert resp.status_code == 400
        assert resp.json() == {"error": "検索クエリが必要です"}
        assert provider.queries == []

    @pytest.mark.asyncio
    async def test_provider_error_message_is_returned(self, build_app, client_for):
        provider = StubProvider(error=RateLimitError())
        app = build_app(search_router, overrides={get_search_provider: lambda: provider})

        resp = await client_for(app).post("/api/search", json={"query": "東京"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "APIの利用制限に達しました。しばらく後に再試行してください"}
        assert metrics.snapshot()["searches"] == {"stub:error": 1}


class TestApiKeyStatus:
    @pytest.mark.parametrize(
        "key, status, message",
        [
            ("", "invalid", "APIキーが設定されていません"),
            ("your_tavily_api_key_here", "invalid", "デフォルトのAPIキーが設定されています"),
            ("short", "invalid", "APIキーの形式が正しくありません"),
            ("tvly-0123456789", "valid", "APIキーが設定されています"),
        ],
    )
    def test_classify_api_key(self, key, status, message):
        result = classify_api_key(Settings(_env_file=None, TAVILY_API_KEY=key))
        assert result.status == status
        assert result.message == message

    @pytest.mark.asyncio
    async def test_route_reports_status(self, build_app, client_for, monkeypatch):
        monkeypatch.setattr(settings_api, "settings", Settings(_env_file=None, TAVILY_API_KEY=""))
        app = build_app(settings_router)

        resp = await client_for(app).get("/api/settings/api-key-status")

        assert resp.status_code == 200
        assert resp.json() == {"status": "invalid", "message": "APIキーが設定されていません"}

    @pytest.mark.asyncio
    async def test_settings_view(self, build_app, client_for, monkeypatch):
        monkeypatch.setattr(
            settings_api,
            "settings",
            Settings(_env_file=None, TAVILY_API_KEY="tvly-0123456789", SUMMARY_MAX_DOCUMENTS=7),
        )
        app = build_app(settings_router)

        resp = await client_for(app).get("/api/settings")

        body = resp.json()
        assert body["search_provider"] == "tavily"
        assert body["summary_max_documents"] == 7
        assert body["api_key_configured"] is True


class TestSearchRouteWithTavily:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply",
        [
            {"text": "<html>gateway</html>"},
            {"json": [1, 2]},
        ],
    )
    async def test_malformed_provider_reply_gets_error_body(self, build_app, client_for, reply):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, **reply))
        provider = TavilySearchProvider(
            api_key="tvly-test-key-123456",
            client=httpx.AsyncClient(transport=transport),
            base_url="https://api.tavily.test",
        )
        app = build_app(search_router, overrides={get_search_provider: lambda: provider})

        resp = await client_for(app).post("/api/search", json={"query": "東京"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "検索中にエラーが発生しました"}
        assert metrics.snapshot()["searches"] == {"tavily:error": 1}
