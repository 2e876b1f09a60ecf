"""Excerpt extraction around a truncation marker line."""

from __future__ import annotations

import re

from blogkit.errors import MultipleMarkers

DEFAULT_MARKER = "<!-- more -->"

_fence_re = re.compile(r"^(`{3,}|~{3,})")


def _closes(stripped: str, fence: str) -> bool:
    run = len(stripped) - len(stripped.lstrip(fence[0]))
    return run >= len(fence) and not stripped[run:].strip()


def find_marker_lines(body: str, marker: str = DEFAULT_MARKER) -> list[int]:
    """Return zero-based indexes of marker lines outside fenced code blocks.

    A fence closes only on a run of the same character at least as long as
    the one that opened it, with nothing after it.
    """
    hits: list[int] = []
    fence: str | None = None
    for index, line in enumerate(body.splitlines()):
        stripped = line.strip()
        if fence is None:
            opener = _fence_re.match(stripped)
            if opener:
                fence = opener.group(1)
                continue
            if stripped == marker:
                hits.append(index)
        elif _closes(stripped, fence):
            fence = None
    return hits


def extract_excerpt(body: str, marker: str = DEFAULT_MARKER, source: str | None = None) -> str:
    """Derive the excerpt of a body.

    Args:
        body: Document body
        marker: Sentinel line content
        source: Source label used in error messages

    Returns:
        Text before the marker with trailing whitespace trimmed, or the
        full body when no marker is present

    Raises:
        MultipleMarkers: If the marker line appears more than once
    """
    hits = find_marker_lines(body, marker)
    if not hits:
        return body
    if len(hits) > 1:
        raise MultipleMarkers(source or "<string>", marker, [n + 1 for n in hits])

    lines = body.splitlines(keepends=True)
    return "".join(lines[: hits[0]]).rstrip()


def strip_marker(body: str, marker: str = DEFAULT_MARKER) -> str:
    """Remove the marker line so the full article renders without it."""
    hits = set(find_marker_lines(body, marker))
    if not hits:
        return body
    lines = body.splitlines(keepends=True)
    return "".join(line for index, line in enumerate(lines) if index not in hits)
