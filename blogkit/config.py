from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any
import json
import os
import re

import yaml

_env_re = re.compile(r"\$\{([^:}]+):?-?([^}]*)\}")


@dataclass(frozen=True)
class ContentConfig:
    content_roots: list[str] = field(default_factory=lambda: ["content"])
    file_extensions: list[str] = field(default_factory=lambda: [".md", ".markdown"])
    include_drafts: bool = False
    read_workers: int = 4


@dataclass(frozen=True)
class ExcerptConfig:
    marker: str = "<!-- more -->"


@dataclass(frozen=True)
class FeedConfig:
    page_size: int = 10
    max_items: int = 20
    site_title: str = "Blog"
    site_url: str = ""
    description: str = ""
    language: str = "en"


@dataclass(frozen=True)
class OutputConfig:
    output_dir: str = "public"
    documents_path: str = "documents.jsonl"
    manifest_path: str = "manifest.json"
    tags_path: str = "tags.json"
    feed_path: str = "feed.xml"


@dataclass(frozen=True)
class APIConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    content: ContentConfig = field(default_factory=ContentConfig)
    excerpt: ExcerptConfig = field(default_factory=ExcerptConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def expand_env(value: Any) -> Any:
    """Recursively expand ``${VAR:-default}`` in strings inside dicts/lists."""
    if isinstance(value, str):
        return _env_re.sub(lambda m: os.environ.get(m.group(1), m.group(2)), value)
    if isinstance(value, dict):
        return {k: expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env(v) for v in value]
    return value


def _coalesce(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _coalesce(merged[key], value)
        else:
            merged[key] = value
    return merged


def _from_dict(data: dict[str, Any]) -> AppConfig:
    return AppConfig(
        content=ContentConfig(**data.get("content", {})),
        excerpt=ExcerptConfig(**data.get("excerpt", {})),
        feed=FeedConfig(**data.get("feed", {})),
        output=OutputConfig(**data.get("output", {})),
        api=APIConfig(**data.get("api", {})),
        logging=LoggingConfig(**data.get("logging", {})),
    )


def _validate(config: AppConfig) -> AppConfig:
    if not config.content.content_roots:
        raise ValueError("content.content_roots must list at least one directory")
    if config.content.read_workers < 1:
        raise ValueError("content.read_workers must be >= 1")
    if config.feed.page_size < 1:
        raise ValueError("feed.page_size must be >= 1")
    if not config.excerpt.marker.strip():
        raise ValueError("excerpt.marker must not be blank")
    return config


def load_config(path: str | Path | None) -> AppConfig:
    if path is None:
        return AppConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".json"}:
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")

    # Shorthand: top-level content_roots / file_extensions
    if "content_roots" in data or "file_extensions" in data:
        content_data = data.get("content", {})
        for key in ("content_roots", "file_extensions"):
            if key in data:
                content_data[key] = data.pop(key)
        data["content"] = content_data

    merged = _coalesce(asdict(AppConfig()), expand_env(data))
    return _validate(_from_dict(merged))


def load_env_overrides(config: AppConfig) -> AppConfig:
    env_url = os.getenv("SITE_URL")
    if env_url and not config.feed.site_url:
        return replace(config, feed=replace(config.feed, site_url=env_url))
    return config


def resolve_path(value: str, base: Path | None = None) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    base = base or Path.cwd()
    return (base / path).resolve()
