"""RSS 2.0 serialization for feed documents."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime

from .models import FeedDocument, FeedItem

RSS_VERSION = "2.0"
RSS_MEDIA_TYPE = "application/rss+xml"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
REPLACEMENT_CHAR = "\ufffd"

_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def rfc2822(value: datetime) -> str:
    """Format ``value`` the way RSS dates are written, e.g. ``Thu, 01 Jan 1970 00:00:02 +0000``."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc))


def xml_safe(value: str) -> str:
    """Replace characters outside the XML 1.0 ``Char`` production, lone surrogates included."""

    return _INVALID_XML_CHARS.sub(REPLACEMENT_CHAR, value)


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    child = ET.SubElement(parent, tag)
    child.text = xml_safe(value)
    return child


def _item_element(channel: ET.Element, item: FeedItem) -> None:
    node = ET.SubElement(channel, "item")
    _text(node, "link", item.link)
    _text(node, "description", item.description)
    _text(node, "author", item.author)
    _text(node, "pubDate", rfc2822(item.pub_date))


def render_rss(document: FeedDocument) -> str:
    """Serialize ``document`` as an RSS 2.0 XML string."""

    rss = ET.Element("rss", {"version": RSS_VERSION})
    channel = ET.SubElement(rss, "channel")
    _text(channel, "title", document.title)
    _text(channel, "link", document.link)
    _text(channel, "description", document.description)
    _text(channel, "lastBuildDate", rfc2822(document.last_build_date))
    for item in document.items:
        _item_element(channel, item)
    return XML_DECLARATION + ET.tostring(rss, encoding="unicode")
