"""FastAPI dependencies: config and the current snapshot."""

from __future__ import annotations

from functools import lru_cache
import logging
import os
import threading
from pathlib import Path
from typing import Callable

from fastapi import Depends

from blogkit.config import AppConfig, load_config, load_env_overrides
from blogkit.domain.snapshot import Snapshot
from blogkit.pipeline.feed import FeedGenerator
from blogkit.pipeline.pipeline import PublishPipeline

logger = logging.getLogger(__name__)


class SnapshotHolder:
    """Holds the snapshot currently served to readers.

    Readers take a reference to one immutable snapshot. ``reload`` builds
    a complete new snapshot and swaps the reference; if the build fails
    the previous snapshot stays in place.
    """

    def __init__(self, loader: Callable[[], Snapshot]):
        self._loader = loader
        self._lock = threading.Lock()
        self._snapshot: Snapshot | None = None

    @property
    def current(self) -> Snapshot:
        if self._snapshot is None:
            with self._lock:
                if self._snapshot is None:
                    self._snapshot = self._loader()
        return self._snapshot

    def reload(self) -> Snapshot:
        snapshot = self._loader()
        with self._lock:
            self._snapshot = snapshot
        logger.info("Snapshot swapped: %d documents", len(snapshot))
        return snapshot


@lru_cache
def get_config() -> AppConfig:
    """Get application configuration.

    Loads configuration from the file named by the BLOGKIT_CONFIG env var
    or falls back to defaults.

    Returns:
        AppConfig: Application configuration
    """
    config_path = os.getenv("BLOGKIT_CONFIG")
    config = load_config(config_path) if config_path else AppConfig()
    return load_env_overrides(config)


@lru_cache
def get_holder() -> SnapshotHolder:
    config = get_config()
    pipeline = PublishPipeline(config=config, base_dir=Path(os.getenv("BLOGKIT_BASE_DIR", ".")))
    return SnapshotHolder(pipeline.build)


def get_feed(holder: SnapshotHolder = Depends(get_holder)) -> FeedGenerator:
    return FeedGenerator(holder.current)
