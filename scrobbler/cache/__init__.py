from __future__ import annotations

import fcntl
import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)


class CacheMetrics:
    """Count cache reads and writes."""

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.writes = 0

    def log_stats(self, cache_name: str) -> None:
        """Log hit/miss counts if the cache was read at all."""
        total_reads = self.hits + self.misses
        if total_reads == 0:
            return
        log.info(
            "%s cache stats - Hits: %d, Misses: %d, Hit rate: %.1f%%, Writes: %d",
            cache_name,
            self.hits,
            self.misses,
            self.hits / total_reads * 100,
            self.writes,
        )


class JSONCache:
    """JSON file cache with atomic writes and advisory file locking."""

    def __init__(self, cache_file: str, enable_locking: bool = True):
        """Initialize cache with a file path.

        Args:
            cache_file: Path to the JSON file
            enable_locking: Take ``flock`` locks for multi-process safety
        """
        self.cache_file = Path(cache_file)
        self.enable_locking = enable_locking
        self._cache: dict[str, Any] = {}
        self.metrics = CacheMetrics()

    @contextmanager
    def _locked(self, f, exclusive: bool):
        if not self.enable_locking:
            yield f
            return
        fcntl.flock(f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
        try:
            yield f
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def _load(self) -> None:
        """Load the cache from disk, starting empty if missing or corrupt."""
        if not self.cache_file.exists():
            log.debug("No cache at %s, starting fresh", self.cache_file.name)
            self._cache = {}
            return

        try:
            with self.cache_file.open("r") as f, self._locked(f, exclusive=False):
                data = json.load(f)
        except json.JSONDecodeError as e:
            log.warning("Corrupted cache file %s, resetting: %s", self.cache_file.name, e)
            data = {}
        except OSError as e:
            log.error("Cannot read cache file %s: %s", self.cache_file.name, e)
            data = {}

        self._cache = data if isinstance(data, dict) else {}
        log.debug("Loaded %d entries from %s", len(self._cache), self.cache_file.name)

    def _save(self) -> None:
        """Write the cache through a temp file and rename it into place."""
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.cache_file.with_suffix(".tmp")
        try:
            with temp_file.open("w") as f, self._locked(f, exclusive=True):
                json.dump(self._cache, f, indent=2)
            temp_file.replace(self.cache_file)
        except OSError as e:
            log.error("Cannot write cache file %s: %s", self.cache_file.name, e)
            raise
        self.metrics.writes += 1
        log.debug("Saved %d entries to %s", len(self._cache), self.cache_file.name)

    def clear(self) -> None:
        log.info("Clearing cache %s", self.cache_file.name)
        self._cache = {}
        self._save()

    def size(self) -> int:
        return len(self._cache)

    def log_metrics(self, cache_name: str) -> None:
        self.metrics.log_stats(cache_name)
