"""Markdown to HTML for excerpts and bodies."""

from __future__ import annotations

import markdown

from blogkit.domain.document import Document
from blogkit.pipeline.excerpt import DEFAULT_MARKER, strip_marker

MARKDOWN_EXTENSIONS = ["extra", "toc"]


def render_markdown(text: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    return md.convert(text)


def render_excerpt(doc: Document) -> str:
    """HTML of the excerpt, or of the body when no excerpt was derived."""
    return render_markdown(doc.excerpt if doc.excerpt is not None else doc.body)


def render_body(doc: Document, marker: str = DEFAULT_MARKER) -> str:
    """HTML of the full article with the excerpt marker removed."""
    return render_markdown(strip_marker(doc.body, marker))
