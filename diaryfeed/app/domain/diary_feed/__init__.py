"""Diary-to-RSS feed assembly."""

from .assembler import FeedAssembler, build_feed_document
from .models import DiaryEntry, DiaryQueryResult, FeedDocument, FeedItem
from .rss import RSS_MEDIA_TYPE, render_rss

__all__ = [
    "DiaryEntry",
    "DiaryQueryResult",
    "FeedAssembler",
    "FeedDocument",
    "FeedItem",
    "RSS_MEDIA_TYPE",
    "build_feed_document",
    "render_rss",
]
