"""Error taxonomy for search and summarization."""

from __future__ import annotations


class SearchBriefError(Exception):
    """Base class for all SearchBrief errors.

    ``message`` is the user-facing text the API layer returns as ``error``.
    """

    default_message = "エラーが発生しました"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(SearchBriefError):
    """Request is missing a query or documents; mapped to HTTP 400."""

    default_message = "クエリと検索結果が必要です"


class SummaryGenerationError(SearchBriefError):
    """Unexpected failure while composing a summary; mapped to HTTP 500."""

    default_message = "サマリ生成中にエラーが発生しました"


class SearchProviderError(SearchBriefError):
    """The search provider call failed."""

    default_message = "検索中にエラーが発生しました"


class SearchConfigurationError(SearchProviderError):
    default_message = "Tavily APIキーが設定されていません"


class InvalidApiKeyError(SearchProviderError):
    default_message = "APIキーが無効です"


class RateLimitError(SearchProviderError):
    default_message = "APIの利用制限に達しました。しばらく後に再試行してください"
