"""Sentence segmentation for Japanese/mixed search result text."""

from __future__ import annotations

import re

SENTENCE_BOUNDARY = re.compile(r"[。！？\n]")

# Trimmed from sentences and used to split queries. Includes the BOM (U+FEFF);
# the U+001C-U+001F separators are not whitespace here.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
MIN_SENTENCE_LENGTH = 11


def split_sentences(text: str, limit: int | None = None) -> list[str]:
    """Split on 。！？ and newlines, keeping trimmed pieces longer than 10 chars."""
    sentences = []
    for piece in SENTENCE_BOUNDARY.split(text or ""):
        piece = piece.strip(WHITESPACE)
        if len(piece) < MIN_SENTENCE_LENGTH:
            continue
        sentences.append(piece)
        if limit is not None and len(sentences) >= limit:
            break
    return sentences
