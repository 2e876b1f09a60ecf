"""Collection builder: parsed sources to finished Documents."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Iterable

from blogkit.domain.document import Document, LayoutKind, sort_chronologically
from blogkit.errors import DuplicateId, MalformedDocument
from blogkit.pipeline.excerpt import DEFAULT_MARKER, extract_excerpt
from blogkit.pipeline.parse import parse_document
from blogkit.pipeline.permalink import PermalinkResolver
from blogkit.utils import sha1_text

logger = logging.getLogger(__name__)

_dash_re = re.compile(r"[\s-]+")


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """Raw source text read from a content root.

    Attributes:
        path: Path relative to the content root, posix separators
        text: Raw file contents
    """

    path: str
    text: str


def normalize_id(path: str, strip_extension: bool = True) -> str:
    """Normalize a source path into a document id.

    Lowercases, turns backslashes into ``/``, collapses repeated separators
    and whitespace, and drops the file extension.
    """
    parts = [p for p in path.strip().replace("\\", "/").split("/") if p not in ("", ".")]
    if parts and strip_extension:
        stem, dot, _ = parts[-1].rpartition(".")
        if dot and stem:
            parts[-1] = stem
    parts = [_dash_re.sub("-", p.strip().lower()).strip("-") for p in parts]
    return "/".join(p for p in parts if p)


class CollectionBuilder:
    """Builds the Document set of one ingestion pass.

    The builder owns every Document it creates. Any build error propagates
    before a collection is returned, so callers never see a partial set.
    """

    def __init__(
        self,
        marker: str = DEFAULT_MARKER,
        resolver: PermalinkResolver | None = None,
        include_drafts: bool = False,
    ):
        """Initialize builder.

        Args:
            marker: Excerpt marker line
            resolver: Permalink resolver (default resolver if omitted)
            include_drafts: Keep documents flagged ``draft: true``
        """
        self._marker = marker
        self._resolver = resolver or PermalinkResolver()
        self._include_drafts = include_drafts

    def build(self, sources: Iterable[SourceDocument]) -> list[Document]:
        """Parse, identify and link every source.

        Args:
            sources: Finite iterable of sources for this pass

        Returns:
            Documents in chronological order with excerpt and permalink set

        Raises:
            MalformedDocument: If a source cannot be parsed
            MultipleMarkers: If a body has an ambiguous excerpt marker
            DuplicateId: If two sources share an id
            PermalinkCollision: If two documents share a permalink
        """
        origins: dict[str, str] = {}
        documents: list[Document] = []
        explicit: dict[str, str] = {}
        drafts = 0

        for source in sources:
            doc, permalink = self._build_one(source)
            if doc.id in origins:
                raise DuplicateId(doc.id, origins[doc.id], source.path)
            origins[doc.id] = source.path

            if doc.draft and not self._include_drafts:
                drafts += 1
                continue
            if permalink:
                explicit[doc.id] = permalink
            documents.append(doc)

        permalinks = self._resolver.resolve_all(documents, explicit)
        finished = [doc.with_permalink(permalinks[doc.id]) for doc in documents]

        logger.info(
            "Built collection: %d documents (%d posts), %d drafts skipped",
            len(finished),
            sum(1 for d in finished if d.is_post),
            drafts,
        )
        return sort_chronologically(finished)

    def _build_one(self, source: SourceDocument) -> tuple[Document, str | None]:
        parsed = parse_document(source.text, source.path)
        meta = parsed.metadata

        if meta.doc_id:
            doc_id = normalize_id(meta.doc_id, strip_extension=False)
        else:
            doc_id = normalize_id(source.path)
        if not doc_id:
            raise MalformedDocument(source.path, "document id normalizes to an empty string")

        if meta.permalink and meta.layout_kind is LayoutKind.POST:
            logger.warning(
                "%s: 'permalink' is ignored for posts, use 'slug' instead", source.path
            )

        doc = Document(
            id=doc_id,
            path=source.path,
            title=meta.title,
            body=parsed.body,
            layout_kind=meta.layout_kind,
            published_at=meta.published_at,
            updated_at=meta.updated_at,
            tags=meta.tags,
            slug=meta.slug,
            draft=meta.draft,
            checksum=sha1_text(source.text),
            extra=meta.extra,
        )
        doc = doc.with_excerpt(extract_excerpt(parsed.body, self._marker, source.path))
        permalink = meta.permalink if meta.layout_kind is LayoutKind.PAGE else None
        return doc, permalink
