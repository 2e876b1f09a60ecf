"""Pydantic schemas for API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from blogkit.domain.document import Document
from blogkit.pipeline.render import render_body, render_excerpt


class DocumentSummary(BaseModel):
    """Listing entry for one document."""

    id: str
    title: str
    permalink: str
    layout_kind: str
    published_at: datetime | None = None
    updated_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    excerpt: str = Field(..., description="Excerpt source text")
    excerpt_html: str

    @classmethod
    def from_document(cls, doc: Document) -> "DocumentSummary":
        return cls(
            id=doc.id,
            title=doc.title,
            permalink=doc.permalink or "",
            layout_kind=doc.layout_kind.value,
            published_at=doc.published_at,
            updated_at=doc.updated_at,
            tags=list(doc.tags),
            excerpt=doc.excerpt if doc.excerpt is not None else doc.body,
            excerpt_html=render_excerpt(doc),
        )


class Link(BaseModel):
    title: str
    permalink: str


class DocumentDetail(DocumentSummary):
    """Full document with rendered body and neighbour links."""

    body: str
    body_html: str
    extra: dict = Field(default_factory=dict)
    newer: Link | None = None
    older: Link | None = None

    @classmethod
    def from_document(
        cls,
        doc: Document,
        marker: str = "<!-- more -->",
        newer: Document | None = None,
        older: Document | None = None,
    ) -> "DocumentDetail":
        summary = DocumentSummary.from_document(doc)
        return cls(
            **summary.model_dump(),
            body=doc.body,
            body_html=render_body(doc, marker),
            extra=dict(doc.extra),
            newer=Link(title=newer.title, permalink=newer.permalink) if newer else None,
            older=Link(title=older.title, permalink=older.permalink) if older else None,
        )


class PageResponse(BaseModel):
    """One page of the chronological feed."""

    items: list[DocumentSummary]
    page: int
    size: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool


class TagSummaryResponse(BaseModel):
    key: str
    name: str
    count: int


class TagDetailResponse(BaseModel):
    tag: str
    items: list[DocumentSummary]


class RebuildResponse(BaseModel):
    status: str
    documents: int
    tags: int
    built_at: datetime


class ErrorResponse(BaseModel):
    """Error payload."""

    error: str
    detail: str
