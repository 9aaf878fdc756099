"""SearchBrief configuration loaded from environment variables."""

from __future__ import annotations

import json
from pydantic_settings import BaseSettings
from pydantic import Field, AliasChoices

PLACEHOLDER_TAVILY_KEY = "your_tavily_api_key_here"


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    cors_origins: str = Field(default='["http://localhost:3000"]', alias="CORS_ORIGINS")
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    rate_limit: str = Field(default="100/minute", alias="RATE_LIMIT")

    # Search provider (Tavily)
    tavily_api_key: str = Field(default="", alias="TAVILY_API_KEY")
    tavily_base_url: str = Field(default="https://api.tavily.com", alias="TAVILY_BASE_URL")
    search_max_results: int = Field(default=20, alias="SEARCH_MAX_RESULTS")
    search_depth: str = Field(default="basic", alias="SEARCH_DEPTH")
    search_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices("SEARCH_TIMEOUT_SECONDS", "SEARCH_TIMEOUT"),
    )

    # Summarization
    summary_max_documents: int = Field(default=10, alias="SUMMARY_MAX_DOCUMENTS")
    summary_max_length: int = Field(default=500, alias="SUMMARY_MAX_LENGTH")
    summary_timezone: str = Field(default="Asia/Tokyo", alias="SUMMARY_TIMEZONE")

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in {"production", "prod"}

    @property
    def has_placeholder_key(self) -> bool:
        return self.tavily_api_key == PLACEHOLDER_TAVILY_KEY

    @property
    def cors_origins_list(self) -> list[str]:
        raw = (self.cors_origins or "").strip()
        if not raw:
            return []

        # Supports JSON list format and comma-separated format.
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [str(origin).strip() for origin in parsed if str(origin).strip()]
            except json.JSONDecodeError:
                pass

        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
