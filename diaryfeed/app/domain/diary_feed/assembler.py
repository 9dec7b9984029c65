"""Translate a user's public diaries into an RSS feed."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from ...config import FeedConfig
from ...infra.logging import get_logger
from .models import DiaryEntry, DiaryQueryResult, FeedDocument, FeedItem
from .rss import render_rss

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class DiaryFetcher(Protocol):  # pragma: no cover - interface only
    """Anything able to return a user's public diaries."""

    async def fetch_public_diaries(self, user_id: str) -> DiaryQueryResult:
        """Fetch and decode the upstream result for ``user_id``."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_feed_item(entry: DiaryEntry, feed: FeedConfig) -> FeedItem:
    return FeedItem(
        author=entry.author,
        link=feed.entry_link(entry.id),
        description=entry.content_md,
        pub_date=entry.created_at,
    )


def build_feed_document(
    user_id: str,
    diaries: DiaryQueryResult,
    feed: FeedConfig,
    *,
    now: Clock = utc_now,
) -> FeedDocument:
    """Map upstream diaries onto a feed document.

    The last entry in upstream order supplies ``lastBuildDate``; entries are
    not re-sorted. An empty result falls back to ``now()``.
    """

    latest = diaries.latest()
    last_build_date = latest.last_updated_at if latest is not None else now()
    return FeedDocument(
        title=feed.title_for(user_id),
        link=feed.user_link(user_id),
        last_build_date=last_build_date,
        items=tuple(build_feed_item(entry, feed) for entry in diaries.result),
    )


class FeedAssembler:
    """Fetch diaries for a user and render them as RSS 2.0."""

    def __init__(
        self,
        fetcher: DiaryFetcher,
        feed: FeedConfig,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self._fetcher = fetcher
        self._feed = feed
        self._clock = clock or utc_now

    async def assemble(self, user_id: str) -> str:
        diaries = await self._fetcher.fetch_public_diaries(user_id)
        document = build_feed_document(user_id, diaries, self._feed, now=self._clock)
        logger.info(
            "feed_assembled",
            extra={"user_id": user_id, "num_items": len(document.items)},
        )
        return render_rss(document)
