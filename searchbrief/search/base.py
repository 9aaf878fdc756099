"""Base interfaces for search providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


def as_text(value: Any) -> str:
    """Render a loosely typed result field as text; None becomes ""."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Document:
    """A single search result as handed to the summarizer."""

    title: str = ""
    url: str = ""
    content: str = ""

    @classmethod
    def from_mapping(cls, data: dict) -> "Document":
        """Build a Document, treating missing or null fields as empty strings and
        rendering non-string scalars as text."""
        return cls(
            title=as_text(data.get("title")),
            url=as_text(data.get("url")),
            content=as_text(data.get("content")),
        )

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url, "content": self.content}


class SearchProvider(ABC):
    """Abstract base class for web search providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Identifier for this provider."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[Document]:
        """Return ranked documents for ``query``."""
        ...

    async def health_check(self) -> bool:
        """Check if the provider is reachable."""
        return True
