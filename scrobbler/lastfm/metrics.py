import logging
import time
from threading import Lock
from typing import Any

from .outcome import FatalError, Success, SubmissionOutcome, TransportError

log = logging.getLogger(__name__)


class _SubmissionStats:
    """Track submission session statistics across threads."""

    def __init__(self) -> None:
        self._lock = Lock()
        self.submitted: int = 0
        self.succeeded: int = 0
        self.transport_errors: int = 0
        self.reauthentications: int = 0
        self.fatal: dict[str, int] = {}
        self.session_start: float | None = None

    def reset(self) -> None:
        """Reset all counters and start a new session."""
        with self._lock:
            self.submitted = 0
            self.succeeded = 0
            self.transport_errors = 0
            self.reauthentications = 0
            self.fatal = {}
            self.session_start = time.time()

    def record_outcome(self, outcome: SubmissionOutcome) -> None:
        """Count one finished submission by its final outcome."""
        with self._lock:
            if self.session_start is None:
                self.session_start = time.time()
            self.submitted += 1
            if isinstance(outcome, Success):
                self.succeeded += 1
            elif isinstance(outcome, TransportError):
                self.transport_errors += 1
            elif isinstance(outcome, FatalError):
                kind = outcome.kind.value
                self.fatal[kind] = self.fatal.get(kind, 0) + 1

    def record_reauthentication(self) -> None:
        with self._lock:
            self.reauthentications += 1

    def get_session_duration(self) -> float:
        if self.session_start is None:
            return 0.0
        return time.time() - self.session_start

    def get_statistics(self) -> dict[str, Any]:
        """Get all statistics as a dictionary."""
        with self._lock:
            failed = sum(self.fatal.values()) + self.transport_errors
            return {
                "submitted": self.submitted,
                "succeeded": self.succeeded,
                "failed": failed,
                "fatal": dict(self.fatal),
                "transport_errors": self.transport_errors,
                "reauthentications": self.reauthentications,
                "success_rate": (100.0 * self.succeeded / self.submitted if self.submitted > 0 else 0),
                "session_duration": self.get_session_duration(),
            }

    def log_statistics(self) -> None:
        """Log session statistics."""
        stats = self.get_statistics()
        if stats["submitted"] == 0:
            return

        log.info("=== Submission Statistics ===")
        log.info("Submitted: %d", stats["submitted"])
        log.info("Succeeded: %d (%.1f%%)", stats["succeeded"], stats["success_rate"])
        for kind, count in sorted(stats["fatal"].items()):
            log.info("Failed (%s): %d", kind, count)
        if stats["transport_errors"]:
            log.info("Transport errors: %d", stats["transport_errors"])
        log.info("Re-authentications: %d", stats["reauthentications"])
        log.info("=============================")


_submission_stats = _SubmissionStats()


def record_outcome(outcome: SubmissionOutcome) -> None:
    _submission_stats.record_outcome(outcome)


def record_reauthentication() -> None:
    _submission_stats.record_reauthentication()


def log_submission_statistics() -> None:
    """Log session statistics."""
    _submission_stats.log_statistics()


def get_submission_statistics() -> dict[str, Any]:
    """Get all statistics as a dictionary."""
    return _submission_stats.get_statistics()


def reset_submission_statistics() -> None:
    """Reset all counters and start a new session."""
    _submission_stats.reset()
