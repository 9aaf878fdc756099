"""Summary pipeline: combines search results and runs the summarizer backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from searchbrief.config import settings
from searchbrief.nlp.summarizer import ExtractiveSummarizer, SummaryBackend
from searchbrief.observability.metrics import metrics
from searchbrief.search.base import Document

logger = logging.getLogger("searchbrief.pipeline")

DOCUMENT_SEPARATOR = "\n\n"


@dataclass
class SummaryResult:
    """Result of summarizing one query's documents."""

    summary: str
    query: str
    source_count: int

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "query": self.query,
            "sourceCount": self.source_count,
        }


def combine_documents(documents: Iterable[Document], max_documents: int = 10) -> str:
    """Join titled bodies of the first ``max_documents`` documents."""
    blocks = []
    for document in list(documents)[:max_documents]:
        blocks.append(f"【{document.title or ''}】\n{document.content or ''}")
    return DOCUMENT_SEPARATOR.join(blocks)


class SummaryPipeline:
    """Orchestrates summary generation for a query and its search results."""

    def __init__(
        self,
        backend: SummaryBackend | None = None,
        max_documents: int | None = None,
    ) -> None:
        self.backend = backend or ExtractiveSummarizer(
            max_length=settings.summary_max_length,
            timezone=settings.summary_timezone,
        )
        self.max_documents = settings.summary_max_documents if max_documents is None else max_documents

    async def summarize(self, query: str, documents: list[Document]) -> SummaryResult:
        """Summarize ``documents`` for ``query``.

        Empty input is tolerated and yields a summary without key points.
        Backend failures propagate to the caller.
        """
        combined = combine_documents(documents, self.max_documents)
        summary = await self.backend.generate_summary(query or "", combined)

        truncated = summary.endswith("...") and len(summary) >= self.backend_max_length
        metrics.observe_summary(len(summary), truncated=truncated)
        logger.info(
            "summary generated",
            extra={
                "query_length": len(query or ""),
                "document_count": len(documents),
                "summary_length": len(summary),
                "truncated": truncated,
            },
        )
        return SummaryResult(summary=summary, query=query, source_count=len(documents))

    @property
    def backend_max_length(self) -> int:
        return getattr(self.backend, "max_length", settings.summary_max_length)
