from __future__ import annotations

import logging
from datetime import UTC, datetime

from . import JSONCache

log = logging.getLogger(__name__)


class SessionCache(JSONCache):
    """Persist session keys per API key so they survive restarts."""

    def __init__(self, cache_file: str, enable_locking: bool = True):
        super().__init__(cache_file, enable_locking=enable_locking)
        self._load()

    def get(self, api_key: str) -> str | None:
        entry = self._cache.get(api_key)
        if isinstance(entry, dict) and entry.get("session_key"):
            log.debug("Using cached session key for user '%s'", entry.get("username") or "?")
            self.metrics.hits += 1
            return entry["session_key"]

        self.metrics.misses += 1
        return None

    def set(self, api_key: str, session_key: str, username: str | None = None) -> None:
        self._cache[api_key] = {
            "session_key": session_key,
            "username": username,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        self._save()

    def forget(self, api_key: str) -> None:
        if self._cache.pop(api_key, None) is not None:
            self._save()
