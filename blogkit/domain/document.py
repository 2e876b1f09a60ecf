"""Document entity for the publishing pipeline."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class LayoutKind(str, Enum):
    """Controls which views include a document."""

    PAGE = "page"
    POST = "post"


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable published unit.

    Represents a single post or page. Documents are created by the
    collection builder and never mutated afterwards; the derived fields
    (``excerpt`` and ``permalink``) are filled in through ``with_excerpt``
    and ``with_permalink`` which return new instances.

    Attributes:
        id: Unique document identifier (e.g., "posts/2022-10-08-hello")
        path: Source path relative to its content root
        title: Human-readable title
        body: Full text content
        layout_kind: Page or Post
        published_at: Publication timestamp (required for posts)
        updated_at: Last modification timestamp (optional)
        tags: Tag display names, duplicates collapsed case-insensitively
        slug: Explicit slug override from metadata
        draft: Draft documents are skipped unless drafts are included
        checksum: SHA-1 of the raw source text
        excerpt: Derived short-form summary
        permalink: Canonical URL path, assigned once
        extra: Unknown metadata fields passed through as-is (read-only copy)
    """

    id: str
    path: str
    title: str
    body: str
    layout_kind: LayoutKind = LayoutKind.PAGE
    published_at: datetime | None = None
    updated_at: datetime | None = None
    tags: tuple[str, ...] = ()
    slug: str | None = None
    draft: bool = False
    checksum: str = ""
    excerpt: str | None = None
    permalink: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(deepcopy(dict(self.extra))))

    @property
    def is_post(self) -> bool:
        return self.layout_kind is LayoutKind.POST

    def with_excerpt(self, excerpt: str) -> "Document":
        if len(excerpt) > len(self.body):
            raise ValueError(f"excerpt of {self.id!r} is longer than its body")
        return replace(self, excerpt=excerpt)

    def with_permalink(self, permalink: str) -> "Document":
        if self.permalink is not None:
            raise ValueError(
                f"permalink of {self.id!r} already assigned ({self.permalink!r})"
            )
        return replace(self, permalink=permalink)

    def has_tag(self, tag: str) -> bool:
        key = tag.casefold()
        return any(t.casefold() == key for t in self.tags)

    def to_dict(self) -> dict:
        """Convert document to a JSON-serializable dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["extra"] = deepcopy(dict(self.extra))
        data["layout_kind"] = self.layout_kind.value
        data["published_at"] = _format_dt(self.published_at)
        data["updated_at"] = _format_dt(self.updated_at)
        data["tags"] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        """Create document from dictionary (JSONL format).

        Args:
            data: Dictionary with document fields

        Returns:
            Document instance
        """
        return cls(
            id=data["id"],
            path=data["path"],
            title=data["title"],
            body=data["body"],
            layout_kind=LayoutKind(data.get("layout_kind", LayoutKind.PAGE.value)),
            published_at=_parse_dt(data.get("published_at")),
            updated_at=_parse_dt(data.get("updated_at")),
            tags=tuple(data.get("tags") or ()),
            slug=data.get("slug"),
            draft=bool(data.get("draft", False)),
            checksum=data.get("checksum", ""),
            excerpt=data.get("excerpt"),
            permalink=data.get("permalink"),
            extra=dict(data.get("extra") or {}),
        )


def chronological_key(doc: Document) -> tuple:
    """Sort key: newest first, ties by id ascending, undated last."""
    if doc.published_at is None:
        return (1, 0.0, doc.id)
    return (0, -utc_timestamp(doc.published_at), doc.id)


def sort_chronologically(docs) -> list[Document]:
    return sorted(docs, key=chronological_key)


def utc_timestamp(value: datetime) -> float:
    # Naive datetimes are read as UTC so mixed collections stay comparable.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _format_dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)
