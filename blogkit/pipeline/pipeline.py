"""Complete publishing pipeline orchestrator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from blogkit.config import AppConfig
from blogkit.domain.snapshot import Snapshot
from blogkit.pipeline.collection import CollectionBuilder, SourceDocument
from blogkit.pipeline.excerpt import DEFAULT_MARKER
from blogkit.pipeline.sources import read_sources
from blogkit.pipeline.tags import build_tag_index

logger = logging.getLogger(__name__)


def build_snapshot(
    sources: Iterable[SourceDocument],
    marker: str = DEFAULT_MARKER,
    include_drafts: bool = False,
) -> Snapshot:
    """Run the build stages over ``sources`` in dependency order.

    Collection, permalinks and tag index are derived in strict sequence;
    the first build error aborts the pass and nothing is returned.
    """
    builder = CollectionBuilder(marker=marker, include_drafts=include_drafts)
    documents = builder.build(sources)
    tag_index = build_tag_index(documents)
    return Snapshot(documents=tuple(documents), tag_index=tag_index)


class PublishPipeline:
    """Reads a content tree and builds snapshots from it."""

    def __init__(self, config: AppConfig | None = None, base_dir: Path | None = None):
        """Initialize pipeline.

        Args:
            config: Application configuration (defaults if omitted)
            base_dir: Base directory for relative content and output paths
        """
        self._config = config or AppConfig()
        self._base_dir = base_dir or Path.cwd()

    @property
    def config(self) -> AppConfig:
        return self._config

    def read_sources(self, show_progress: bool = False) -> list[SourceDocument]:
        return read_sources(self._config.content, self._base_dir, show_progress)

    def build(self, show_progress: bool = False) -> Snapshot:
        """Read every source and build a fresh snapshot."""
        sources = self.read_sources(show_progress=show_progress)
        snapshot = build_snapshot(
            sources,
            marker=self._config.excerpt.marker,
            include_drafts=self._config.content.include_drafts,
        )
        logger.info(
            "Snapshot ready: %d documents, %d tags", len(snapshot), len(snapshot.tag_index)
        )
        return snapshot

    def export(self, snapshot: Snapshot) -> dict[str, Path]:
        """Write the snapshot artifacts to the output directory."""
        from blogkit.storage.export import export_snapshot

        return export_snapshot(snapshot, self._config, self._base_dir)


def run_full_pipeline(
    config: AppConfig | None = None,
    base_dir: Path | None = None,
    show_progress: bool = False,
) -> dict:
    """Build and export in one pass.

    Args:
        config: Application configuration
        base_dir: Base directory for relative paths
        show_progress: Show a progress bar while reading sources

    Returns:
        Statistics dict with document counts and written paths
    """
    pipeline = PublishPipeline(config=config, base_dir=base_dir)
    snapshot = pipeline.build(show_progress=show_progress)
    outputs = pipeline.export(snapshot)

    posts = sum(1 for doc in snapshot if doc.is_post)
    return {
        "total": len(snapshot),
        "posts": posts,
        "pages": len(snapshot) - posts,
        "tags": len(snapshot.tag_index),
        "outputs": {name: str(path) for name, path in outputs.items()},
    }
