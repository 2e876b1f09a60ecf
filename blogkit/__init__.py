"""Content publishing pipeline: posts, pages, permalinks, tags and feeds."""

__version__ = "0.1.0"

# Domain entities
from blogkit.domain.document import Document, LayoutKind
from blogkit.domain.snapshot import Snapshot, TagEntry, TagIndex

# Errors
from blogkit.errors import (
    BuildError,
    DuplicateId,
    InvalidPage,
    MalformedDocument,
    MultipleMarkers,
    PermalinkCollision,
    PublishError,
    QueryError,
)

# Pipeline components
from blogkit.config import AppConfig, load_config
from blogkit.pipeline.collection import CollectionBuilder, SourceDocument
from blogkit.pipeline.feed import FeedGenerator, Page
from blogkit.pipeline.pipeline import PublishPipeline, build_snapshot, run_full_pipeline

# CLI
from blogkit.cli import main

__all__ = [
    # Domain
    "Document",
    "LayoutKind",
    "Snapshot",
    "TagEntry",
    "TagIndex",
    # Errors
    "PublishError",
    "BuildError",
    "QueryError",
    "MalformedDocument",
    "MultipleMarkers",
    "DuplicateId",
    "PermalinkCollision",
    "InvalidPage",
    # Pipeline
    "AppConfig",
    "load_config",
    "CollectionBuilder",
    "SourceDocument",
    "FeedGenerator",
    "Page",
    "PublishPipeline",
    "build_snapshot",
    "run_full_pipeline",
    # CLI
    "main",
]
