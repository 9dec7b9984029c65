"""Diary entries as served upstream and the feed document built from them."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def datetime_from_epoch_ms(value: Any) -> datetime:
    """Convert an epoch-milliseconds JSON number into an aware UTC datetime."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("timestamp must be a number of epoch milliseconds")
    try:
        return EPOCH + timedelta(milliseconds=value)
    except OverflowError as exc:
        raise ValueError(f"timestamp {value!r} is out of range") from exc


class DiaryEntry(BaseModel):
    """One public diary post as returned by ``fetchPublicDiaries``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    author: str
    content_md: str = Field(alias="contentMd")
    created_at: datetime = Field(alias="createdAt")
    last_updated_at: datetime = Field(alias="lastUpdatedAt")

    @field_validator("created_at", "last_updated_at", mode="before")
    @classmethod
    def _parse_epoch_ms(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value
        return datetime_from_epoch_ms(value)


class DiaryQueryResult(BaseModel):
    """Upstream response body; ``result`` keeps the upstream order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    result: Tuple[DiaryEntry, ...]

    def latest(self) -> DiaryEntry | None:
        """Return the entry treated as most recently updated (the last one)."""

        return self.result[-1] if self.result else None


class FeedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str
    link: str
    description: str
    pub_date: datetime


class FeedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    link: str
    description: str = ""
    last_build_date: datetime
    items: Tuple[FeedItem, ...] = ()
