from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cache.session import SessionCache
    from .config import Settings
    from .lastfm import Session, SubmissionClient


@dataclass
class RuntimeContext:
    """Shared dependencies for one run, built once from settings."""

    settings: Settings
    session: Session
    client: SubmissionClient
    session_cache: SessionCache
