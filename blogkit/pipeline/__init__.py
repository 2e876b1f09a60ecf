"""Publishing pipeline components."""

from blogkit.pipeline.parse import DocumentMetadata, ParsedDocument, parse_document
from blogkit.pipeline.excerpt import DEFAULT_MARKER, extract_excerpt, strip_marker
from blogkit.pipeline.collection import CollectionBuilder, SourceDocument, normalize_id
from blogkit.pipeline.permalink import PermalinkResolver
from blogkit.pipeline.tags import build_tag_index
from blogkit.pipeline.feed import FeedGenerator, Page
from blogkit.pipeline.pipeline import PublishPipeline, build_snapshot, run_full_pipeline

__all__ = [
    # Parsing
    "DocumentMetadata",
    "ParsedDocument",
    "parse_document",
    # Excerpts
    "DEFAULT_MARKER",
    "extract_excerpt",
    "strip_marker",
    # Collection
    "CollectionBuilder",
    "SourceDocument",
    "normalize_id",
    "PermalinkResolver",
    "build_tag_index",
    # Views
    "FeedGenerator",
    "Page",
    # Orchestration
    "PublishPipeline",
    "build_snapshot",
    "run_full_pipeline",
]
