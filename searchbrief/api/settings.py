"""Settings API: read-only view of search provider configuration."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from searchbrief.config import Settings, settings

logger = logging.getLogger("searchbrief.settings")
router = APIRouter(prefix="/api/settings", tags=["settings"])

MIN_KEY_LENGTH = 10


class ApiKeyStatus(BaseModel):
    status: Literal["valid", "invalid", "error"]
    message: str


class SettingsResponse(BaseModel):
    search_provider: str
    search_max_results: int
    search_depth: str
    summary_max_documents: int
    summary_max_length: int
    summary_timezone: str
    api_key_configured: bool


def classify_api_key(config: Settings) -> ApiKeyStatus:
    """Check the Tavily key without calling the provider."""
    key = config.tavily_api_key
    if not key:
        return ApiKeyStatus(status="invalid", message="APIキーが設定されていません")
    if config.has_placeholder_key:
        return ApiKeyStatus(status="invalid", message="デフォルトのAPIキーが設定されています")
    if len(key) < MIN_KEY_LENGTH:
        return ApiKeyStatus(status="invalid", message="APIキーの形式が正しくありません")
    return ApiKeyStatus(status="valid", message="APIキーが設定されています")


@router.get("/api-key-status", response_model=ApiKeyStatus)
async def api_key_status():
    """Report whether the search provider key looks usable."""
    try:
        return classify_api_key(settings)
    except Exception:
        logger.exception("API key status check error")
        return ApiKeyStatus(status="error", message="APIキーの状態確認中にエラーが発生しました")


@router.get("", response_model=SettingsResponse)
async def get_settings():
    """Get search and summary settings (read-only view)."""
    return SettingsResponse(
        search_provider="tavily",
        search_max_results=settings.search_max_results,
        search_depth=settings.search_depth,
        summary_max_documents=settings.summary_max_documents,
        summary_max_length=settings.summary_max_length,
        summary_timezone=settings.summary_timezone,
        api_key_configured=classify_api_key(settings).status == "valid",
    )
