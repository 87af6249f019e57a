import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .lastfm.request import LASTFM_API_URL

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

CACHE_DIR = Path(os.getenv("CACHE_DIR", str(PROJECT_ROOT / "cache")))

DEFAULT_API_URL = LASTFM_API_URL


def _str_to_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _str_to_float(val: str | None, default: float) -> float:
    try:
        return float(val) if val is not None else default
    except ValueError:
        return default


def _str_to_int(val: str | None, default: int) -> int:
    try:
        return int(val) if val is not None else default
    except ValueError:
        return default


def _optional(val: str | None) -> str | None:
    val = val.strip() if val else None
    return val or None


@dataclass(frozen=True)
class Settings:
    """Application configuration loaded from environment variables."""

    lastfm_api_key: str
    lastfm_api_secret: str
    lastfm_session_key: str | None = None
    lastfm_user: str | None = None
    lastfm_password: str | None = None
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0
    max_reauth_attempts: int = 1
    lastfm_force_ipv4: bool = False
    cache_session_file: str = str(CACHE_DIR / ".session_cache.json")
    log_level: str = "INFO"

    @property
    def can_authenticate(self) -> bool:
        """Whether credentials for re-authentication are available."""
        return bool(self.lastfm_user and self.lastfm_password)

    @staticmethod
    def from_env() -> "Settings":
        """Load settings from environment variables."""
        lastfm_api_key = os.getenv("LASTFM_API_KEY", "").strip()
        lastfm_api_secret = os.getenv("LASTFM_API_SECRET", "").strip()
        if not lastfm_api_key or not lastfm_api_secret:
            raise RuntimeError("LASTFM_API_KEY and LASTFM_API_SECRET must be set in environment or .env")

        lastfm_session_key = _optional(os.getenv("LASTFM_SESSION_KEY"))
        lastfm_user = _optional(os.getenv("LASTFM_USER"))
        lastfm_password = os.getenv("LASTFM_PASSWORD") or None

        api_url = os.getenv("LASTFM_API_URL", DEFAULT_API_URL).strip() or DEFAULT_API_URL

        request_timeout = _str_to_float(os.getenv("REQUEST_TIMEOUT"), 30.0)
        if request_timeout <= 0:
            request_timeout = 30.0

        max_reauth_attempts = _str_to_int(os.getenv("MAX_REAUTH_ATTEMPTS"), 1)
        if max_reauth_attempts < 0:
            max_reauth_attempts = 1

        lastfm_force_ipv4 = _str_to_bool(os.getenv("LASTFM_FORCE_IPV4"), False)

        cache_session_file = os.getenv("CACHE_SESSION_FILE", str(CACHE_DIR / ".session_cache.json"))

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            log_level = "INFO"

        return Settings(
            lastfm_api_key=lastfm_api_key,
            lastfm_api_secret=lastfm_api_secret,
            lastfm_session_key=lastfm_session_key,
            lastfm_user=lastfm_user,
            lastfm_password=lastfm_password,
            api_url=api_url,
            request_timeout=request_timeout,
            max_reauth_attempts=max_reauth_attempts,
            lastfm_force_ipv4=lastfm_force_ipv4,
            cache_session_file=cache_session_file,
            log_level=log_level,
        )


def configure_logging(level: str) -> None:
    """Configure logging with the specified level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(levelname)s: %(message)s",
    )
