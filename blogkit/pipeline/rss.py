"""RSS 2.0 feed of the newest posts."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Sequence
import xml.etree.ElementTree as ET

from blogkit.config import FeedConfig
from blogkit.domain.document import Document
from blogkit.pipeline.render import render_excerpt


def _rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def absolute_url(site_url: str, permalink: str) -> str:
    if not site_url:
        return permalink
    return site_url.rstrip("/") + permalink


def build_rss(posts: Sequence[Document], feed: FeedConfig, built_at: datetime) -> str:
    """Serialize ``posts`` (already ordered, newest first) as RSS 2.0.

    Args:
        posts: Posts to include, truncated to ``feed.max_items``
        feed: Feed configuration (site title, url, description)
        built_at: Snapshot build time, used for lastBuildDate

    Returns:
        XML document as a string
    """
    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = feed.site_title
    ET.SubElement(channel, "link").text = feed.site_url or "/"
    ET.SubElement(channel, "description").text = feed.description or feed.site_title
    ET.SubElement(channel, "language").text = feed.language
    ET.SubElement(channel, "lastBuildDate").text = _rfc822(built_at)

    for doc in list(posts)[: feed.max_items]:
        link = absolute_url(feed.site_url, doc.permalink or "")
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = doc.title
        ET.SubElement(item, "link").text = link
        ET.SubElement(item, "guid", isPermaLink="true" if feed.site_url else "false").text = link
        if doc.published_at is not None:
            ET.SubElement(item, "pubDate").text = _rfc822(doc.published_at)
        for tag in doc.tags:
            ET.SubElement(item, "category").text = tag
        ET.SubElement(item, "description").text = render_excerpt(doc)

    body = ET.tostring(rss, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
