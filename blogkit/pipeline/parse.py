"""Document parser: front matter block plus body."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
import logging

import yaml

from blogkit.domain.document import LayoutKind
from blogkit.errors import MalformedDocument

logger = logging.getLogger(__name__)

OPEN_DELIMITER = "---"
CLOSE_DELIMITERS = ("---", "...")

PUBLISHED_KEYS = ("published_at", "publishedAt", "date")
UPDATED_KEYS = ("updated_at", "updatedAt", "updated", "last_modified_at")
KNOWN_KEYS = frozenset(
    ("title", "layout", "tags", "slug", "permalink", "id", "draft")
    + PUBLISHED_KEYS
    + UPDATED_KEYS
)

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
)


@dataclass(frozen=True)
class DocumentMetadata:
    """Typed view of a front matter block.

    Only the fields the pipeline relies on are typed and validated;
    everything else lands in ``extra`` untouched.
    """

    title: str
    layout_kind: LayoutKind
    published_at: datetime | None = None
    updated_at: datetime | None = None
    tags: tuple[str, ...] = ()
    slug: str | None = None
    permalink: str | None = None
    doc_id: str | None = None
    draft: bool = False
    extra: dict = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class ParsedDocument:
    metadata: DocumentMetadata
    body: str


def split_front_matter(text: str, source: str = "<string>") -> tuple[str, str]:
    """Split raw text into the front matter source and the body.

    Raises:
        MalformedDocument: If the block is absent or never closed
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != OPEN_DELIMITER:
        raise MalformedDocument(source, "missing metadata block")

    for index in range(1, len(lines)):
        if lines[index].strip() in CLOSE_DELIMITERS:
            front = "".join(lines[1:index])
            body = "".join(lines[index + 1 :]).lstrip("\r\n")
            return front, body

    raise MalformedDocument(source, "unterminated metadata block")


def parse_document(text: str, source: str = "<string>") -> ParsedDocument:
    """Parse a raw document into validated metadata and body.

    Args:
        text: Raw document text
        source: Source label used in error messages

    Returns:
        ParsedDocument with typed metadata and the body text

    Raises:
        MalformedDocument: On a missing/unterminated block or a badly typed field
    """
    front, body = split_front_matter(text, source)

    try:
        raw = yaml.safe_load(front)
    except yaml.YAMLError as exc:
        raise MalformedDocument(source, f"invalid YAML in metadata block: {exc}") from exc
    except ValueError as exc:
        # YAML timestamps such as 2022-13-45 fail inside the date constructor
        raise MalformedDocument(source, f"invalid value in metadata block: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MalformedDocument(source, "metadata block must be a mapping")

    metadata = parse_metadata(raw, source)
    return ParsedDocument(metadata=metadata, body=body)


def parse_metadata(raw: dict, source: str = "<string>") -> DocumentMetadata:
    """Validate the required subset of a front matter mapping."""
    raw = {str(key): value for key, value in raw.items()}

    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise MalformedDocument(source, "'title' is required and must be a non-empty string")

    published_at = _first_date(raw, PUBLISHED_KEYS, source)
    updated_at = _first_date(raw, UPDATED_KEYS, source)

    layout = _optional_str(raw, "layout", source)
    if layout is None:
        layout_kind = LayoutKind.POST if published_at else LayoutKind.PAGE
    else:
        try:
            layout_kind = LayoutKind(layout.strip().lower())
        except ValueError:
            raise MalformedDocument(
                source, f"'layout' must be 'post' or 'page', got {layout!r}"
            ) from None
    if layout_kind is LayoutKind.POST and published_at is None:
        raise MalformedDocument(source, "posts require a publication date")

    draft = raw.get("draft", False)
    if not isinstance(draft, bool):
        raise MalformedDocument(source, "'draft' must be a boolean")

    extra = {k: v for k, v in raw.items() if k not in KNOWN_KEYS}
    if extra:
        logger.debug("%s: passing through metadata fields %s", source, sorted(extra))

    return DocumentMetadata(
        title=title.strip(),
        layout_kind=layout_kind,
        published_at=published_at,
        updated_at=updated_at,
        tags=normalize_tags(raw.get("tags"), source),
        slug=_optional_str(raw, "slug", source),
        permalink=_optional_str(raw, "permalink", source),
        doc_id=_optional_str(raw, "id", source),
        draft=draft,
        extra=extra,
    )


def normalize_tags(value, source: str = "<string>") -> tuple[str, ...]:
    """Collapse a tag field into unique display names.

    Accepts a comma-separated string or a list of scalars. Duplicates are
    detected case-insensitively and the first casing seen is kept.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if isinstance(item, bool) or not isinstance(item, (str, int, float)):
                raise MalformedDocument(source, f"invalid tag {item!r}")
            items.append(str(item))
    else:
        raise MalformedDocument(source, "'tags' must be a string or a list of strings")

    seen: dict[str, str] = {}
    for item in items:
        name = " ".join(item.split())
        if name and name.casefold() not in seen:
            seen[name.casefold()] = name
    return tuple(seen[key] for key in sorted(seen))


def parse_datetime(value, source: str = "<string>", key: str = "date") -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
    raise MalformedDocument(source, f"{key!r} is not a valid date: {value!r}")


def _first_date(raw: dict, keys: tuple[str, ...], source: str) -> datetime | None:
    for key in keys:
        if raw.get(key) is not None:
            return parse_datetime(raw[key], source, key)
    return None


def _optional_str(raw: dict, key: str, source: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedDocument(source, f"{key!r} must be a string")
    return value.strip() or None
