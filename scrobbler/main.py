import argparse
import logging
import time
from collections.abc import Sequence

from .cache.session import SessionCache
from .config import Settings
from .context import RuntimeContext
from .lastfm import (
    InvalidEntryError,
    MobileSessionAuthenticator,
    PlaybackSource,
    ScrobbleEntry,
    Session,
    SubmissionClient,
    Success,
    enable_ipv4_only,
    log_submission_statistics,
)

log = logging.getLogger(__name__)

SOURCES = {s.name.lower(): s for s in PlaybackSource}


def build_context(settings: Settings) -> RuntimeContext:
    """Wire session, session-key cache and client from settings."""
    session_cache = SessionCache(settings.cache_session_file)

    session_key = settings.lastfm_session_key or session_cache.get(settings.lastfm_api_key)

    authenticator = None
    if settings.can_authenticate:
        authenticator = MobileSessionAuthenticator(
            settings.lastfm_user,
            settings.lastfm_password,
            endpoint=settings.api_url,
            timeout=settings.request_timeout,
        )
    elif not session_key:
        log.warning("No session key and no LASTFM_USER/LASTFM_PASSWORD; submissions will fail")

    def remember(new_key: str) -> None:
        try:
            session_cache.set(settings.lastfm_api_key, new_key, settings.lastfm_user)
        except OSError as e:
            log.warning("Could not persist refreshed session key: %s", e)

    session = Session(
        settings.lastfm_api_key,
        settings.lastfm_api_secret,
        session_key=session_key,
        authenticator=authenticator,
        on_refresh=remember,
    )
    client = SubmissionClient(
        session,
        endpoint=settings.api_url,
        timeout=settings.request_timeout,
        max_reauth_attempts=settings.max_reauth_attempts,
    )
    return RuntimeContext(settings=settings, session=session, client=client, session_cache=session_cache)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scrobble-submit", description="Report playback to Last.fm")
    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("nowplaying", "send a now-playing notification"),
        ("scrobble", "submit a played track"),
    ):
        p = commands.add_parser(name, help=help_text)
        p.add_argument("--artist", required=True)
        p.add_argument("--track", required=True)
        p.add_argument("--album")
        p.add_argument("--duration", type=int, default=0, help="track length in seconds")
        p.add_argument("--track-number", type=int)
        p.add_argument("--mbid")
        p.add_argument(
            "--timestamp",
            type=int,
            help="playback start as epoch seconds (default: now minus duration)",
        )
        p.add_argument("--source", choices=sorted(SOURCES), default="user")

    return parser


def entry_from_args(args: argparse.Namespace) -> ScrobbleEntry:
    started = args.timestamp if args.timestamp is not None else int(time.time()) - max(0, args.duration)
    return ScrobbleEntry.create(
        args.artist,
        args.track,
        started,
        args.duration,
        album=args.album,
        track_number=args.track_number,
        mbid=args.mbid,
        source=SOURCES[args.source],
    )


def run(settings: Settings, argv: Sequence[str] | None = None) -> int:
    """Run one submission from command line arguments.

    Returns:
        Process exit status (0 on success)
    """
    args = build_parser().parse_args(argv)

    try:
        entry = entry_from_args(args)
    except InvalidEntryError as e:
        log.error("Invalid entry: %s", e.message)
        return 2

    if settings.lastfm_force_ipv4:
        enable_ipv4_only()

    ctx = build_context(settings)
    log.info("Submitting %s as API key %s", entry, ctx.session.masked_api_key())

    if args.command == "nowplaying":
        outcome = ctx.client.report_now_playing(entry)
    else:
        outcome = ctx.client.scrobble(entry)

    log_submission_statistics()
    ctx.session_cache.log_metrics("Session")

    if isinstance(outcome, Success):
        log.info("Done: %s", outcome.describe())
        return 0

    log.error("Submission failed: %s", outcome.describe())
    return 1
