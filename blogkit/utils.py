from __future__ import annotations

import hashlib
import re
import unicodedata


_slug_re = re.compile(r"[^\w\s-]")
_space_re = re.compile(r"[\s_-]+")


def slugify(text: str, fallback: str = "untitled") -> str:
    normalized = unicodedata.normalize("NFKC", text).strip().lower()
    normalized = _slug_re.sub("", normalized)
    normalized = _space_re.sub("-", normalized)
    normalized = normalized.strip("-")
    return normalized or fallback


def sha1_text(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()
