"""Search API: forwards a query to the configured web search provider."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from searchbrief.errors import SearchProviderError
from searchbrief.observability.metrics import metrics
from searchbrief.search.base import SearchProvider
from searchbrief.search.tavily import TavilySearchProvider

logger = logging.getLogger("searchbrief.api.search")
router = APIRouter(prefix="/api/search", tags=["search"])

MISSING_QUERY = "検索クエリが必要です"


class SearchRequest(BaseModel):
    query: Any = None


class SearchResult(BaseModel):
    title: str
    url: str
    content: str


class SearchResponse(BaseModel):
    results: list[SearchResult]
    query: str


def get_search_provider() -> SearchProvider:
    return TavilySearchProvider()


@router.post("", response_model=SearchResponse)
async def search(
    body: SearchRequest,
    provider: SearchProvider = Depends(get_search_provider),
):
    """Run a web search and return the normalized results."""
    if not isinstance(body.query, str) or not body.query:
        return JSONResponse({"error": MISSING_QUERY}, status_code=400)

    try:
        documents = await provider.search(body.query)
    except SearchProviderError as exc:
        metrics.observe_search(provider.provider_name, ok=False)
        logger.exception("Search error", extra={"provider": provider.provider_name})
        return JSONResponse({"error": exc.message}, status_code=500)

    metrics.observe_search(provider.provider_name, ok=True)
    logger.info(
        f"search returned {len(documents)} results",
        extra={"provider": provider.provider_name, "document_count": len(documents)},
    )
    return {
        "results": [document.to_dict() for document in documents],
        "query": body.query,
    }
