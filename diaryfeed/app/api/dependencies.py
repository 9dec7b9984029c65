"""Shared API dependencies."""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from ..config import Settings
from ..domain.diary_feed import FeedAssembler
from ..infra.diary_api import DiaryApiClient

__all__ = [
    "get_settings",
    "get_http_client",
    "get_diary_client",
    "get_feed_assembler",
]


def get_settings(request: Request) -> Settings:
    """Return the settings the application was constructed with."""

    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the process-wide upstream HTTP client opened by the lifespan."""

    return request.app.state.http_client


def get_diary_client(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> DiaryApiClient:
    return DiaryApiClient(http_client, settings.upstream)


def get_feed_assembler(
    settings: Settings = Depends(get_settings),
    diary_client: DiaryApiClient = Depends(get_diary_client),
) -> FeedAssembler:
    return FeedAssembler(diary_client, settings.feed)
