"""Error taxonomy for the publishing pipeline.

Build errors abort the whole ingestion pass: they point at authoring or
configuration defects and nothing is published until they are fixed.
Query errors belong to a single read-path caller and leave the shared
snapshot untouched.
"""

from __future__ import annotations


class PublishError(Exception):
    """Base class for all blogkit errors."""


class BuildError(PublishError):
    """Fatal error raised while building a snapshot."""


class QueryError(PublishError):
    """Recoverable error raised by a read-path query."""


class MalformedDocument(BuildError):
    """Metadata block is missing, unterminated or carries a badly typed field."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class MultipleMarkers(BuildError):
    """The excerpt marker appears more than once in a body."""

    def __init__(self, source: str, marker: str, lines: list[int]):
        self.source = source
        self.marker = marker
        self.lines = lines
        joined = ", ".join(str(n) for n in lines)
        super().__init__(f"{source}: excerpt marker {marker!r} found on lines {joined}")


class DuplicateId(BuildError):
    """Two sources normalize to the same document id."""

    def __init__(self, doc_id: str, first: str, second: str):
        self.doc_id = doc_id
        self.paths = (first, second)
        super().__init__(f"duplicate document id {doc_id!r}: {first} and {second}")


class PermalinkCollision(BuildError):
    """Two documents resolve to the same permalink."""

    def __init__(self, permalink: str, first_id: str, second_id: str):
        self.permalink = permalink
        self.doc_ids = (first_id, second_id)
        super().__init__(
            f"permalink {permalink!r} claimed by both {first_id!r} and {second_id!r}"
        )


class InvalidPage(QueryError):
    """Page number or page size below 1."""

    def __init__(self, number: int, size: int):
        self.number = number
        self.size = size
        super().__init__(f"invalid page request: number={number}, size={size}")
