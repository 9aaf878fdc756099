"""Tavily search provider: web search over the Tavily REST API."""

from __future__ import annotations

import logging

import httpx

from searchbrief.config import settings
from searchbrief.errors import (
    InvalidApiKeyError,
    RateLimitError,
    SearchConfigurationError,
    SearchProviderError,
)
from searchbrief.search.base import Document, SearchProvider, as_text

logger = logging.getLogger("searchbrief.search.tavily")

UNTITLED = "タイトルなし"
NO_CONTENT = "内容なし"


class TavilySearchProvider(SearchProvider):
    """Searches the web through Tavily.

    Requires TAVILY_API_KEY in .env. Pass ``client`` to reuse a connection
    pool (or a mock transport in tests); otherwise one client is opened per
    search.
    """

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        max_results: int | None = None,
        search_depth: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = settings.tavily_api_key if api_key is None else api_key
        self.base_url = (settings.tavily_base_url if base_url is None else base_url).rstrip("/")
        self.max_results = settings.search_max_results if max_results is None else max_results
        self.search_depth = settings.search_depth if search_depth is None else search_depth
        self.timeout = settings.search_timeout_seconds if timeout is None else timeout
        self._client = client

    @property
    def provider_name(self) -> str:
        return "tavily"

    async def search(self, query: str) -> list[Document]:
        if not self.api_key:
            raise SearchConfigurationError()

        payload = {
            "query": query,
            "max_results": self.max_results,
            "search_depth": self.search_depth,
            "include_answer": False,
            "include_raw_content": False,
            "include_images": False,
        }

        if self._client is not None:
            resp = await self._post(self._client, payload)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await self._post(client, payload)

        self._raise_for_error(resp)
        return self._parse_results(self._results_from(resp))

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        try:
            return await client.post(
                f"{self.base_url}/search",
                json={**payload, "api_key": self.api_key},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as exc:
            raise SearchProviderError(str(exc) or None) from exc

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text
        detail = body.get("detail", body) if isinstance(body, dict) else body
        if isinstance(detail, dict):
            return str(detail.get("error") or detail.get("message") or detail)
        return str(detail)

    def _raise_for_error(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        message = self._error_message(resp)
        lowered = message.lower()
        logger.warning(
            f"Tavily search failed: {message}",
            extra={"provider": self.provider_name, "status_code": resp.status_code},
        )
        if resp.status_code in (401, 403) or "api key" in lowered:
            raise InvalidApiKeyError()
        if resp.status_code == 429 or "rate limit" in lowered:
            raise RateLimitError()
        raise SearchProviderError(message or None)

    def _results_from(self, resp: httpx.Response) -> list[dict]:
        """Pull the result list out of a 2xx reply, rejecting malformed bodies."""
        try:
            body = resp.json()
        except ValueError as exc:
            logger.warning("Tavily returned a non-JSON body", extra={"provider": self.provider_name})
            raise SearchProviderError() from exc
        if not isinstance(body, dict):
            raise SearchProviderError()
        results = body.get("results") or []
        if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
            raise SearchProviderError()
        return results

    @staticmethod
    def _parse_results(results: list[dict]) -> list[Document]:
        return [
            Document(
                title=as_text(result.get("title")) or UNTITLED,
                url=as_text(result.get("url")),
                content=as_text(result.get("content")) or NO_CONTENT,
            )
            for result in results
        ]
