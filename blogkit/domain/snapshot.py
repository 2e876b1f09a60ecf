"""Immutable publication snapshot produced by one build pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterator, Mapping

from blogkit.domain.document import Document


@dataclass(frozen=True, slots=True)
class TagEntry:
    """One tag bucket.

    Attributes:
        key: Casefolded lookup key
        name: Display name (most common casing)
        doc_ids: Document ids in chronological order
    """

    key: str
    name: str
    doc_ids: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.doc_ids)


class TagIndex:
    """Read-only reverse mapping from tag to document ids.

    Lookups are case-insensitive; ``name`` keeps the casing used for
    display.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, TagEntry] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def get(self, tag: str) -> TagEntry | None:
        return self._entries.get(tag.casefold())

    def doc_ids(self, tag: str) -> tuple[str, ...]:
        entry = self.get(tag)
        return entry.doc_ids if entry else ()

    def entries(self) -> list[TagEntry]:
        """All entries sorted by lookup key."""
        return sorted(self._entries.values(), key=lambda e: (e.key, e.name))

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagIndex):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __repr__(self) -> str:
        return f"TagIndex({len(self)} tags)"


@dataclass(frozen=True)
class Snapshot:
    """Immutable, shareable result of one build.

    Attributes:
        documents: All documents in chronological order
        tag_index: Tag index over ``documents``
        built_at: Time the build finished
    """

    documents: tuple[Document, ...]
    tag_index: TagIndex = field(default_factory=TagIndex)
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _by_id: Mapping[str, Document] = field(init=False, repr=False, compare=False)
    _by_permalink: Mapping[str, Document] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_id", MappingProxyType({d.id: d for d in self.documents})
        )
        object.__setattr__(
            self,
            "_by_permalink",
            MappingProxyType({d.permalink: d for d in self.documents if d.permalink}),
        )

    def get(self, doc_id: str) -> Document | None:
        return self._by_id.get(doc_id)

    def by_permalink(self, permalink: str) -> Document | None:
        return self._by_permalink.get(permalink)

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)
