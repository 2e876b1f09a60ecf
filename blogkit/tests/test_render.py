"""Tests for markdown rendering and the RSS feed."""

from datetime import datetime, timezone
import xml.etree.ElementTree as ET

from blogkit.config import FeedConfig
from blogkit.domain.document import Document, LayoutKind
from blogkit.pipeline.render import render_body, render_excerpt, render_markdown
from blogkit.pipeline.rss import absolute_url, build_rss


def _doc(**kwargs):
    defaults = dict(
        id="posts/hello",
        path="posts/hello.md",
        title="Hello",
        body="Lead **bold**.\n\n<!-- more -->\n\nRest.\n",
        layout_kind=LayoutKind.POST,
        published_at=datetime(2022, 10, 8, 9, 30),
        tags=("python",),
        excerpt="Lead **bold**.",
        permalink="/2022/10/08/hello",
    )
    defaults.update(kwargs)
    return Document(**defaults)


def test_render_markdown_basic():
    assert render_markdown("# Title\n\nText").startswith('<h1 id="title">Title</h1>')


def test_render_excerpt_uses_excerpt():
    html = render_excerpt(_doc())

    assert html == "<p>Lead <strong>bold</strong>.</p>"


def test_render_excerpt_falls_back_to_body():
    html = render_excerpt(_doc(body="Only body.\n", excerpt=None))

    assert html == "<p>Only body.</p>"


def test_render_body_strips_marker():
    html = render_body(_doc())

    assert "more" not in html
    assert "<p>Rest.</p>" in html


def test_absolute_url():
    assert absolute_url("https://example.com/", "/a/b") == "https://example.com/a/b"
    assert absolute_url("", "/a/b") == "/a/b"


def test_rss_channel_and_items():
    feed = FeedConfig(site_title="Blog", site_url="https://example.com", description="Notes")
    built_at = datetime(2022, 10, 9, tzinfo=timezone.utc)

    root = ET.fromstring(build_rss([_doc()], feed, built_at))
    item = root.find("channel/item")

    assert root.tag == "rss"
    assert root.get("version") == "2.0"
    assert root.findtext("channel/description") == "Notes"
    assert item.findtext("link") == "https://example.com/2022/10/08/hello"
    assert item.findtext("guid") == "https://example.com/2022/10/08/hello"
    assert item.findtext("pubDate") == "Sat, 08 Oct 2022 09:30:00 +0000"
    assert [c.text for c in item.findall("category")] == ["python"]
    assert "<strong>bold</strong>" in item.findtext("description")


def test_rss_respects_max_items():
    feed = FeedConfig(max_items=1)
    posts = [_doc(id=f"p{i}", permalink=f"/p{i}") for i in range(3)]

    root = ET.fromstring(build_rss(posts, feed, datetime(2022, 1, 1, tzinfo=timezone.utc)))

    assert len(root.findall("channel/item")) == 1
