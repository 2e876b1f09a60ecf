"""Snapshot export: JSONL documents, JSON listings and the RSS feed."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterator

from blogkit.config import AppConfig, resolve_path
from blogkit.domain.document import Document, LayoutKind, sort_chronologically
from blogkit.domain.snapshot import Snapshot
from blogkit.pipeline.feed import FeedGenerator
from blogkit.pipeline.render import render_excerpt
from blogkit.pipeline.rss import build_rss
from blogkit.pipeline.tags import build_tag_index

logger = logging.getLogger(__name__)


def listing_entry(doc: Document, newer: Document | None = None, older: Document | None = None) -> dict:
    """Listing record consumed by the templating layer."""
    return {
        "id": doc.id,
        "title": doc.title,
        "permalink": doc.permalink,
        "layout_kind": doc.layout_kind.value,
        "published_at": doc.published_at.isoformat() if doc.published_at else None,
        "updated_at": doc.updated_at.isoformat() if doc.updated_at else None,
        "tags": list(doc.tags),
        "excerpt_html": render_excerpt(doc),
        "newer": newer.permalink if newer else None,
        "older": older.permalink if older else None,
    }


def build_manifest(snapshot: Snapshot) -> dict:
    feed = FeedGenerator(snapshot)
    posts = feed.chronological(LayoutKind.POST)
    return {
        "built_at": snapshot.built_at.isoformat(),
        "posts": [
            listing_entry(
                doc,
                newer=posts[i - 1] if i > 0 else None,
                older=posts[i + 1] if i + 1 < len(posts) else None,
            )
            for i, doc in enumerate(posts)
        ],
        "pages": [listing_entry(doc) for doc in feed.chronological(LayoutKind.PAGE)],
    }


def build_tags_listing(snapshot: Snapshot) -> dict:
    return {
        entry.name: [snapshot.get(doc_id).permalink for doc_id in entry.doc_ids]
        for entry in snapshot.tag_index.entries()
    }


def _write_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


def export_snapshot(snapshot: Snapshot, config: AppConfig, base_dir: Path | None = None) -> dict[str, Path]:
    """Write every artifact of ``snapshot``.

    Args:
        snapshot: Finished snapshot
        config: Application configuration
        base_dir: Base directory for the output directory

    Returns:
        Mapping of artifact name to written path
    """
    output_dir = resolve_path(config.output.output_dir, base_dir)
    paths = {
        "documents": output_dir / config.output.documents_path,
        "manifest": output_dir / config.output.manifest_path,
        "tags": output_dir / config.output.tags_path,
        "feed": output_dir / config.output.feed_path,
    }

    # Render everything before touching the output directory.
    documents = "".join(
        json.dumps(doc.to_dict(), ensure_ascii=False, default=str) + "\n"
        for doc in snapshot.documents
    )
    manifest = json.dumps(build_manifest(snapshot), indent=2, ensure_ascii=False)
    tags = json.dumps(build_tags_listing(snapshot), indent=2, ensure_ascii=False)
    posts = FeedGenerator(snapshot).chronological(LayoutKind.POST)
    rss = build_rss(posts, config.feed, snapshot.built_at)

    _write_atomic(paths["documents"], documents)
    _write_atomic(paths["manifest"], manifest)
    _write_atomic(paths["tags"], tags)
    _write_atomic(paths["feed"], rss)

    for name, path in paths.items():
        logger.info("Wrote %s -> %s", name, path)
    return paths


def read_documents_jsonl(path: str | Path) -> Iterator[Document]:
    """Load documents from an exported JSONL file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield Document.from_dict(json.loads(line))


def load_snapshot(path: str | Path) -> Snapshot:
    """Rebuild a snapshot from an exported ``documents.jsonl``."""
    documents = tuple(sort_chronologically(read_documents_jsonl(path)))
    return Snapshot(documents=documents, tag_index=build_tag_index(documents))
