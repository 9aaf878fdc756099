"""Summary generation for search results."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from searchbrief.errors import SummaryGenerationError
from searchbrief.nlp.keywords import extract_key_terms
from searchbrief.nlp.sentences import split_sentences
from searchbrief.utils.time import Clock, format_short_date_ja, zone_clock

logger = logging.getLogger("searchbrief.summarizer")

ELLIPSIS = "..."
MAX_SUMMARY_LENGTH = 500
MAX_SENTENCES = 15
KEY_POINT_COUNT = 5
EXTRA_SENTENCE_END = 10
KEY_POINT_WIDTH = 150


class SummaryBackend(ABC):
    """Turns a query and combined result text into a summary string."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        ...

    @abstractmethod
    async def generate_summary(self, query: str, combined_text: str) -> str:
        ...


def truncate_summary(text: str, max_length: int = MAX_SUMMARY_LENGTH) -> str:
    """Cut ``text`` to exactly ``max_length`` chars, ending in "...", if too long."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


class ExtractiveSummarizer(SummaryBackend):
    """Builds a fixed-layout report from the leading sentences and top keywords.

    The report has a header, an optional keyword line, up to five numbered
    key points, an optional line with the next five sentences, and a closing
    line dated with ``clock``.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        max_length: int = MAX_SUMMARY_LENGTH,
        timezone: str = "Asia/Tokyo",
    ) -> None:
        self.clock = clock or zone_clock(timezone)
        self.max_length = max_length

    @property
    def backend_name(self) -> str:
        return "extractive"

    async def generate_summary(self, query: str, combined_text: str) -> str:
        try:
            return self.compose(query, combined_text)
        except Exception as exc:
            raise SummaryGenerationError() from exc

    def compose(self, query: str, combined_text: str) -> str:
        sentences = split_sentences(combined_text, limit=MAX_SENTENCES)
        keywords = extract_key_terms(query, combined_text)

        keyword_block = f"主要キーワード: {'、'.join(keywords)}\n\n" if keywords else ""
        key_points = "\n".join(
            self._key_point(index, sentence)
            for index, sentence in enumerate(sentences[:KEY_POINT_COUNT], start=1)
        )
        extra_block = ""
        if len(sentences) > KEY_POINT_COUNT:
            extra = "。".join(sentences[KEY_POINT_COUNT:EXTRA_SENTENCE_END])
            extra_block = f"\nその他の関連情報として、{extra}。"
        as_of = format_short_date_ja(self.clock())

        summary = (
            f"「{query}」に関する検索結果のサマリ：\n"
            "\n"
            f"{keyword_block}重要なポイント:\n"
            f"{key_points}\n"
            "\n"
            f"{extra_block}\n"
            "\n"
            f"この情報は{as_of}時点での検索結果に基づいています。"
        )
        truncated = truncate_summary(summary, self.max_length)
        logger.debug(
            "composed %d key points, %d keywords",
            min(len(sentences), KEY_POINT_COUNT),
            len(keywords),
        )
        return truncated

    @staticmethod
    def _key_point(index: int, sentence: str) -> str:
        suffix = ELLIPSIS if len(sentence) > KEY_POINT_WIDTH else ""
        return f"{index}. {sentence[:KEY_POINT_WIDTH]}{suffix}"
