from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

from .exceptions import InvalidEntryError
from .params import ParameterSet

NOW_PLAYING_METHOD = "track.updateNowPlaying"
SCROBBLE_METHOD = "track.scrobble"


class PlaybackSource(Enum):
    """Where the played track came from (legacy protocol source codes)."""

    USER = "P"
    NON_PERSONALIZED_BROADCAST = "R"
    PERSONALIZED_RECOMMENDATION = "E"
    LASTFM = "L"
    UNKNOWN = "U"


class ScrobbleMode(Enum):
    PLAYED = "played"
    LOVED = "loved"
    BANNED = "banned"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class ScrobbleEntry:
    """A single playback event to report.

    ``started_at`` must be the moment playback began; the service uses it to
    de-duplicate scrobbles. Naive datetimes are read as local time.
    """

    artist: str
    title: str
    started_at: datetime
    duration: timedelta = timedelta(0)
    album: str | None = None
    source: PlaybackSource = PlaybackSource.USER
    mode: ScrobbleMode = ScrobbleMode.PLAYED
    track_number: int | None = None
    mbid: str | None = None
    recommendation_key: str | None = None

    def __post_init__(self) -> None:
        for name in ("artist", "title"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidEntryError(f"{name} must be a string, got {type(value).__name__}")
            if not value.strip():
                raise InvalidEntryError(f"{name} must not be empty")
        if not isinstance(self.started_at, datetime):
            raise InvalidEntryError(f"started_at must be a datetime, got {type(self.started_at).__name__}")
        if not isinstance(self.duration, timedelta):
            raise InvalidEntryError(f"duration must be a timedelta, got {type(self.duration).__name__}")
        if self.duration < timedelta(0):
            raise InvalidEntryError(f"duration must not be negative, got {self.duration}")
        if self.track_number is not None and self.track_number < 1:
            raise InvalidEntryError(f"track number must be positive, got {self.track_number}")

    @classmethod
    def create(
        cls,
        artist: str,
        title: str,
        started_ts: int,
        duration_seconds: float = 0,
        **kwargs,
    ) -> ScrobbleEntry:
        """Build an entry from an epoch timestamp and a duration in seconds."""
        return cls(
            artist=artist,
            title=title,
            started_at=datetime.fromtimestamp(started_ts, UTC),
            duration=timedelta(seconds=duration_seconds),
            **kwargs,
        )

    @property
    def duration_seconds(self) -> int:
        return int(self.duration.total_seconds())

    @property
    def timestamp(self) -> int:
        """Start of playback as whole seconds since the epoch (UTC)."""
        return int(self.started_at.timestamp())

    def _base_parameters(self, method: str, api_key: str, session_key: str) -> ParameterSet:
        params = ParameterSet(
            {
                "method": method,
                "api_key": api_key,
                "sk": session_key,
                "artist": self.artist,
                "track": self.title,
                "duration": str(self.duration_seconds),
            }
        )
        # Optional fields are omitted, never sent empty.
        if self.album:
            params["album"] = self.album
        if self.track_number is not None:
            params["trackNumber"] = str(self.track_number)
        if self.mbid:
            params["mbid"] = self.mbid
        return params

    def now_playing_parameters(self, api_key: str, session_key: str) -> ParameterSet:
        """Unsigned parameters for ``track.updateNowPlaying``."""
        return self._base_parameters(NOW_PLAYING_METHOD, api_key, session_key)

    def scrobble_parameters(self, api_key: str, session_key: str) -> ParameterSet:
        """Unsigned parameters for ``track.scrobble``."""
        params = self._base_parameters(SCROBBLE_METHOD, api_key, session_key)
        params["timestamp"] = str(self.timestamp)
        if self.source not in (PlaybackSource.USER, PlaybackSource.UNKNOWN):
            params["chosenByUser"] = "0"
        return params

    def __str__(self) -> str:
        return f"{self.artist} - {self.title} ({self.started_at.isoformat()})"
