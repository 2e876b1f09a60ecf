"""Pytest configuration for blogkit tests."""

import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
repo_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(repo_root))

from blogkit.pipeline.collection import SourceDocument  # noqa: E402


def make_text(title, date=None, tags=None, body="Body text.\n", **extra):
    """Render a document with a YAML front matter block."""
    lines = ["---", f"title: {title}"]
    if date is not None:
        lines.append(f"date: {date}")
    if tags is not None:
        lines.append(f"tags: [{', '.join(tags)}]")
    for key, value in extra.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture
def source():
    """Factory for in-memory sources."""

    def _source(path, title, date=None, tags=None, body="Body text.\n", **extra):
        return SourceDocument(path=path, text=make_text(title, date, tags, body, **extra))

    return _source


@pytest.fixture
def content_dir(tmp_path):
    """A small site: two posts, one page, one draft."""
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)

    (root / "posts" / "2022-10-08-first.md").write_text(
        make_text(
            "First Post",
            date="2022-10-08",
            tags=["Python", "notes"],
            body="Intro paragraph.\n\n<!-- more -->\n\nRest of the post.\n",
        ),
        encoding="utf-8",
    )
    (root / "posts" / "2022-10-10-second.md").write_text(
        make_text("Second Post", date="2022-10-10", tags=["python"], body="Short post.\n"),
        encoding="utf-8",
    )
    (root / "posts" / "wip.md").write_text(
        make_text("Work In Progress", date="2022-11-01", draft="true"),
        encoding="utf-8",
    )
    (root / "about.md").write_text(
        make_text("About", body="About the author.\n"),
        encoding="utf-8",
    )
    return root
