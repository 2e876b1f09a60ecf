"""Domain entities for the publishing pipeline.

This module contains immutable data structures that represent published
content and the snapshot built from it.
"""

from blogkit.domain.document import Document, LayoutKind, chronological_key
from blogkit.domain.snapshot import Snapshot, TagEntry, TagIndex

__all__ = [
    "Document",
    "LayoutKind",
    "Snapshot",
    "TagEntry",
    "TagIndex",
    "chronological_key",
]
