"""Frequency-based key term extraction over combined search result text."""

from __future__ import annotations

import re

from searchbrief.nlp.sentences import WHITESPACE

# Hiragana, Katakana, CJK ideographs and ASCII word characters, 3+ in a row.
WORD_PATTERN = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAFA-Za-z0-9_]{3,}")
QUERY_SPLIT_PATTERN = re.compile(f"[{re.escape(WHITESPACE)}]+")

MIN_KEYWORD_COUNT = 3
MAX_KEYWORDS = 5


def query_terms(query: str) -> list[str]:
    """Split a query on (full-width) whitespace, dropping 1-char tokens."""
    if not query:
        return []
    return [term for term in QUERY_SPLIT_PATTERN.split(query) if len(term) > 1]


def word_frequencies(text: str) -> dict[str, int]:
    """Count lowercased word-like runs in first-seen order."""
    frequency: dict[str, int] = {}
    for word in WORD_PATTERN.findall(text or ""):
        normalized = word.lower()
        frequency[normalized] = frequency.get(normalized, 0) + 1
    return frequency


def extract_key_terms(query: str, combined_text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Return up to ``limit`` frequent words from ``combined_text``.

    A word qualifies when it occurs at least three times and is not one of
    the query's terms. Query terms are compared as typed, so a keyword that
    differs from a query term only by case is still returned.

    Ordering is by count, highest first; equal counts keep the order in
    which the words first appeared (``sorted`` is stable and ``dict``
    preserves insertion order).
    """
    excluded = query_terms(query)
    candidates = [
        (word, count)
        for word, count in word_frequencies(combined_text).items()
        if count >= MIN_KEYWORD_COUNT and word not in excluded
    ]
    candidates = sorted(candidates, key=lambda item: item[1], reverse=True)
    return [word for word, _ in candidates[:limit]]
