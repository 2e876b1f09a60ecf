"""Tag index construction."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Iterable

from blogkit.domain.document import Document, sort_chronologically
from blogkit.domain.snapshot import TagEntry, TagIndex


def build_tag_index(documents: Iterable[Document]) -> TagIndex:
    """Build the tag index from a finished collection.

    Tags are grouped case-insensitively. Each bucket lists document ids in
    chronological order; the display name is the casing used most often,
    ties going to the lexicographically smallest spelling.
    """
    buckets: dict[str, list[str]] = defaultdict(list)
    spellings: dict[str, Counter] = defaultdict(Counter)

    for doc in sort_chronologically(documents):
        for tag in doc.tags:
            key = tag.casefold()
            buckets[key].append(doc.id)
            spellings[key][tag] += 1

    entries = {}
    for key, doc_ids in buckets.items():
        name = min(spellings[key].items(), key=lambda item: (-item[1], item[0]))[0]
        entries[key] = TagEntry(key=key, name=name, doc_ids=tuple(doc_ids))
    return TagIndex(entries)
