"""Permalink resolution."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from blogkit.domain.document import Document, LayoutKind
from blogkit.errors import PermalinkCollision
from blogkit.utils import slugify

_slashes_re = re.compile(r"/{2,}")


def normalize_path(value: str) -> str:
    """Leading slash, no repeated or trailing slashes (root stays ``/``)."""
    return "/" + _slashes_re.sub("/", value.strip().replace("\\", "/")).strip("/")


class PermalinkResolver:
    """Computes the canonical URL path of each document.

    Posts live under ``/{year}/{month}/{day}/{slug}``; pages use their
    explicit ``permalink`` metadata or their slugified title at the top
    level.
    """

    def slug_for(self, doc: Document) -> str:
        fallback = slugify(doc.id.rsplit("/", 1)[-1])
        if doc.slug:
            return slugify(doc.slug, fallback=fallback)
        return slugify(doc.title, fallback=fallback)

    def resolve(self, doc: Document, explicit: str | None = None) -> str:
        if doc.layout_kind is LayoutKind.POST:
            if doc.published_at is None:
                raise ValueError(f"post {doc.id!r} has no publication date")
            ts = doc.published_at
            return f"/{ts.year:04d}/{ts.month:02d}/{ts.day:02d}/{self.slug_for(doc)}"

        if explicit:
            return normalize_path(explicit)
        return f"/{self.slug_for(doc)}"

    def resolve_all(
        self,
        docs: Iterable[Document],
        explicit: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Resolve every document, rejecting any shared path.

        Args:
            docs: Documents of one build
            explicit: Page permalinks taken from metadata, keyed by doc id

        Returns:
            Mapping of document id to permalink

        Raises:
            PermalinkCollision: If two documents resolve to the same path
        """
        explicit = explicit or {}
        owners: dict[str, str] = {}
        resolved: dict[str, str] = {}
        for doc in sorted(docs, key=lambda d: d.id):
            permalink = self.resolve(doc, explicit.get(doc.id))
            if permalink in owners:
                raise PermalinkCollision(permalink, owners[permalink], doc.id)
            owners[permalink] = doc.id
            resolved[doc.id] = permalink
        return resolved
