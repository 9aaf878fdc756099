"""Summarize API: extractive summary over a query's search results."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from searchbrief.errors import InvalidInputError, SummaryGenerationError
from searchbrief.nlp.pipeline import SummaryPipeline
from searchbrief.search.base import Document

logger = logging.getLogger("searchbrief.api.summarize")
router = APIRouter(prefix="/api/summarize", tags=["summarize"])

_pipeline: SummaryPipeline | None = None


# ── Request / Response schemas ──────────────────────────────────


class SummarizeRequest(BaseModel):
    # Loosely typed so malformed payloads get the 400 error body, not a 422.
    query: Any = None
    results: Any = None


class SummarizeResponse(BaseModel):
    summary: str
    query: str
    sourceCount: int


def get_summary_pipeline() -> SummaryPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = SummaryPipeline()
    return _pipeline


def validate_request(body: SummarizeRequest) -> tuple[str, list[Document]]:
    """Return the query and documents, or raise InvalidInputError."""
    if not isinstance(body.query, str) or not body.query:
        raise InvalidInputError()
    results = body.results
    if not isinstance(results, list) or not results:
        raise InvalidInputError()
    if not all(isinstance(item, dict) for item in results):
        raise InvalidInputError()
    documents = [Document.from_mapping(item) for item in results]
    return body.query, documents


@router.post("", response_model=SummarizeResponse)
async def summarize(
    body: SummarizeRequest,
    pipeline: SummaryPipeline = Depends(get_summary_pipeline),
):
    """Summarize search results for a query."""
    try:
        query, documents = validate_request(body)
    except InvalidInputError as exc:
        return JSONResponse({"error": exc.message}, status_code=400)

    try:
        result = await pipeline.summarize(query, documents)
    except SummaryGenerationError as exc:
        logger.exception("Summary generation error")
        return JSONResponse({"error": exc.message}, status_code=500)

    return result.to_dict()
