"""FastAPI routes over the current snapshot."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from blogkit.api.dependencies import SnapshotHolder, get_config, get_feed, get_holder
from blogkit.api.schemas import (
    DocumentDetail,
    DocumentSummary,
    ErrorResponse,
    PageResponse,
    RebuildResponse,
    TagDetailResponse,
    TagSummaryResponse,
)
from blogkit.config import AppConfig
from blogkit.domain.document import Document, LayoutKind
from blogkit.pipeline.feed import FeedGenerator

router = APIRouter()


def _detail(doc: Document, feed: FeedGenerator, config: AppConfig) -> DocumentDetail:
    neighbours = feed.adjacent(doc.id)
    return DocumentDetail.from_document(
        doc,
        marker=config.excerpt.marker,
        newer=neighbours.newer,
        older=neighbours.older,
    )


@router.get("/posts", response_model=PageResponse, responses={400: {"model": ErrorResponse}})
async def list_posts(
    page: int = Query(default=1, description="1-based page number"),
    size: int | None = Query(default=None, description="Items per page"),
    feed: FeedGenerator = Depends(get_feed),
    config: AppConfig = Depends(get_config),
):
    """Paginated chronological feed of posts, newest first."""
    result = feed.page(page, size if size is not None else config.feed.page_size)
    return PageResponse(
        items=[DocumentSummary.from_document(doc) for doc in result.items],
        page=result.number,
        size=result.size,
        total_items=result.total_items,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
    )


@router.get("/pages", response_model=list[DocumentSummary])
async def list_pages(feed: FeedGenerator = Depends(get_feed)):
    """Standalone pages."""
    return [DocumentSummary.from_document(doc) for doc in feed.chronological(LayoutKind.PAGE)]


@router.get("/tags", response_model=list[TagSummaryResponse])
async def list_tags(feed: FeedGenerator = Depends(get_feed)):
    return [TagSummaryResponse(key=t.key, name=t.name, count=t.count) for t in feed.tags()]


@router.get("/tags/{tag}", response_model=TagDetailResponse)
async def get_tag(tag: str, feed: FeedGenerator = Depends(get_feed)):
    """Documents carrying ``tag``; unknown tags return an empty list."""
    entry = feed.snapshot.tag_index.get(tag)
    return TagDetailResponse(
        tag=entry.name if entry else tag,
        items=[DocumentSummary.from_document(doc) for doc in feed.by_tag(tag)],
    )


@router.get("/permalink", response_model=DocumentDetail)
async def resolve_permalink(
    path: str = Query(..., min_length=1),
    feed: FeedGenerator = Depends(get_feed),
    config: AppConfig = Depends(get_config),
):
    doc = feed.by_permalink(path)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"No document at {path}")
    return _detail(doc, feed, config)


@router.get("/documents/{doc_id:path}", response_model=DocumentDetail)
async def get_document(
    doc_id: str,
    feed: FeedGenerator = Depends(get_feed),
    config: AppConfig = Depends(get_config),
):
    doc = feed.get(doc_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {doc_id}")
    return _detail(doc, feed, config)


@router.post("/rebuild", response_model=RebuildResponse, responses={500: {"model": ErrorResponse}})
def rebuild(holder: SnapshotHolder = Depends(get_holder)):
    """Rebuild from the content tree and swap the served snapshot.

    A failed build leaves the previous snapshot in place.
    """
    snapshot = holder.reload()
    return RebuildResponse(
        status="rebuilt",
        documents=len(snapshot),
        tags=len(snapshot.tag_index),
        built_at=snapshot.built_at,
    )
