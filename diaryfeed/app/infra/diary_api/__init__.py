"""Upstream diary API entry points."""

from .client import (
    DiaryApiClient,
    DiaryApiError,
    build_http_client,
    build_request_body,
)

__all__ = [
    "DiaryApiClient",
    "DiaryApiError",
    "build_http_client",
    "build_request_body",
]
