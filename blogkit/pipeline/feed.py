"""Ordered, read-only views over a snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil

from blogkit.domain.document import Document, LayoutKind
from blogkit.domain.snapshot import Snapshot
from blogkit.errors import InvalidPage


@dataclass(frozen=True, slots=True)
class Page:
    """One slice of the chronological feed."""

    items: tuple[Document, ...]
    number: int
    size: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool


@dataclass(frozen=True, slots=True)
class TagSummary:
    key: str
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class Neighbours:
    """Posts around a document in the chronological feed."""

    newer: Document | None
    older: Document | None


@dataclass(frozen=True, slots=True)
class ArchiveBucket:
    year: int
    month: int
    documents: tuple[Document, ...]


class FeedGenerator:
    """Query operations over one immutable snapshot.

    Every method is pure: the snapshot is never modified, so one generator
    can serve any number of concurrent readers.
    """

    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def chronological(self, kind: LayoutKind = LayoutKind.POST) -> list[Document]:
        """Documents of ``kind``, newest first, ties by id."""
        return [doc for doc in self._snapshot.documents if doc.layout_kind is kind]

    def by_tag(self, tag: str) -> list[Document]:
        """Documents carrying ``tag``; unknown tags give an empty list."""
        return [self._snapshot.get(doc_id) for doc_id in self._snapshot.tag_index.doc_ids(tag)]

    def page(self, number: int, size: int, kind: LayoutKind = LayoutKind.POST) -> Page:
        """Return page ``number`` (1-based) of the chronological feed.

        Raises:
            InvalidPage: If ``number`` or ``size`` is below 1
        """
        if number < 1 or size < 1:
            raise InvalidPage(number, size)

        feed = self.chronological(kind)
        start = (number - 1) * size
        items = tuple(feed[start : start + size])
        total_pages = ceil(len(feed) / size)
        return Page(
            items=items,
            number=number,
            size=size,
            total_items=len(feed),
            total_pages=total_pages,
            has_previous=number > 1,
            has_next=number < total_pages,
        )

    def get(self, doc_id: str) -> Document | None:
        return self._snapshot.get(doc_id)

    def by_permalink(self, permalink: str) -> Document | None:
        return self._snapshot.by_permalink(permalink)

    def tags(self) -> list[TagSummary]:
        return [
            TagSummary(key=entry.key, name=entry.name, count=len(entry))
            for entry in self._snapshot.tag_index.entries()
        ]

    def adjacent(self, doc_id: str) -> Neighbours:
        """Newer and older posts around ``doc_id`` for cross-linking."""
        feed = self.chronological(LayoutKind.POST)
        for index, doc in enumerate(feed):
            if doc.id == doc_id:
                newer = feed[index - 1] if index > 0 else None
                older = feed[index + 1] if index + 1 < len(feed) else None
                return Neighbours(newer=newer, older=older)
        return Neighbours(newer=None, older=None)

    def archive(self) -> list[ArchiveBucket]:
        """Posts grouped by year and month, newest first."""
        buckets: list[ArchiveBucket] = []
        current: list[Document] = []
        current_key: tuple[int, int] | None = None
        for doc in self.chronological(LayoutKind.POST):
            key = (doc.published_at.year, doc.published_at.month)
            if key != current_key and current:
                buckets.append(ArchiveBucket(*current_key, documents=tuple(current)))
                current = []
            current_key = key
            current.append(doc)
        if current:
            buckets.append(ArchiveBucket(*current_key, documents=tuple(current)))
        return buckets
