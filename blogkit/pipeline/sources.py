"""Source discovery and reading."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from pathlib import Path

from tqdm import tqdm

from blogkit.config import ContentConfig
from blogkit.errors import MalformedDocument
from blogkit.pipeline.collection import SourceDocument

logger = logging.getLogger(__name__)


def discover_sources(config: ContentConfig, base_dir: Path | None = None) -> list[tuple[Path, str]]:
    """Collect source files under every content root.

    Args:
        config: Content configuration
        base_dir: Base directory for content root resolution

    Returns:
        (absolute path, path relative to its root) pairs sorted by
        relative path
    """
    base_dir = base_dir or Path.cwd()
    extensions = {ext.lower() for ext in config.file_extensions}

    found: list[tuple[Path, str]] = []
    for root in config.content_roots:
        root_path = (base_dir / root).resolve()
        if not root_path.is_dir():
            logger.warning("Content root not found: %s", root_path)
            continue
        for path in root_path.rglob("*"):
            rel = path.relative_to(root_path)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.is_file() and path.suffix.lower() in extensions:
                found.append((path, rel.as_posix()))

    return sorted(found, key=lambda item: (item[1], str(item[0])))


def read_sources(
    config: ContentConfig,
    base_dir: Path | None = None,
    show_progress: bool = False,
) -> list[SourceDocument]:
    """Read every source file, in parallel when ``read_workers`` > 1.

    Reads are order-independent; the result is sorted by relative path
    so the collection never depends on directory traversal order.
    """
    paths = discover_sources(config, base_dir)
    logger.info("Reading %d source files", len(paths))

    def _read(item: tuple[Path, str]) -> SourceDocument:
        path, rel = item
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocument(rel, f"not valid UTF-8: {exc}") from exc
        return SourceDocument(path=rel, text=text)

    with ThreadPoolExecutor(max_workers=config.read_workers) as pool:
        sources = list(
            tqdm(
                pool.map(_read, paths),
                total=len(paths),
                desc="Reading",
                disable=not show_progress,
            )
        )

    return sorted(sources, key=lambda s: s.path)
