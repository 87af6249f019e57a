from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from .exceptions import AuthenticationError
from .metrics import record_outcome
from .outcome import FatalError, FatalKind, RetryableSessionError, SubmissionOutcome
from .params import ParameterSet
from .request import LASTFM_API_URL, SubmissionRequest
from .scrobble import ScrobbleEntry
from .session import Session
from .signing import signed

log = logging.getLogger(__name__)

ParameterBuilder = Callable[[ScrobbleEntry, str, str], ParameterSet]


class SubmissionClient:
    """Report now-playing notifications and scrobbles for one session.

    A rejected session key triggers re-authentication and a freshly signed
    resend of the same entry, at most ``max_reauth_attempts`` times. Every
    other outcome is returned to the caller as is.
    """

    def __init__(
        self,
        session: Session,
        endpoint: str = LASTFM_API_URL,
        timeout: float = 30.0,
        max_reauth_attempts: int = 1,
        request: SubmissionRequest | None = None,
    ):
        self.session = session
        self.endpoint = endpoint
        self.max_reauth_attempts = max(0, max_reauth_attempts)
        self._request = request or SubmissionRequest(timeout=timeout)

    def report_now_playing(self, entry: ScrobbleEntry) -> SubmissionOutcome:
        """Send a transient now-playing notification for ``entry``."""
        return self._submit(entry, ScrobbleEntry.now_playing_parameters)

    def scrobble(self, entry: ScrobbleEntry) -> SubmissionOutcome:
        """Submit ``entry`` as a played track."""
        return self._submit(entry, ScrobbleEntry.scrobble_parameters)

    def scrobble_many(self, entries: Sequence[ScrobbleEntry], max_workers: int = 2) -> list[SubmissionOutcome]:
        """Scrobble entries concurrently, one request each.

        Returns:
            Outcomes in the same order as ``entries``
        """
        if not entries:
            return []
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            return list(executor.map(self.scrobble, entries))

    def _refresh(self, stale_key: str | None) -> FatalError | None:
        try:
            self.session.refresh(stale_key)
        except AuthenticationError as e:
            log.error("Re-authentication failed: %s", e.message)
            return FatalError(FatalKind.AUTHENTICATION_FAILURE, e.message)
        return None

    def _submit(self, entry: ScrobbleEntry, build: ParameterBuilder) -> SubmissionOutcome:
        outcome = self._run(entry, build)
        record_outcome(outcome)
        if isinstance(outcome, FatalError):
            log.warning("Submission of %s failed: %s", entry, outcome.describe())
        else:
            log.debug("Submission of %s: %s", entry, outcome.describe())
        return outcome

    def _run(self, entry: ScrobbleEntry, build: ParameterBuilder) -> SubmissionOutcome:
        if not self.session.authenticated:
            failure = self._refresh(None)
            if failure is not None:
                return failure

        reauths = 0
        while True:
            session_key = self.session.session_key or ""
            params = signed(
                build(entry, self.session.api_key, session_key),
                self.session.api_secret,
            )
            outcome = self._request.execute(self.endpoint, params)

            if not isinstance(outcome, RetryableSessionError):
                return outcome

            if reauths >= self.max_reauth_attempts:
                return FatalError(
                    FatalKind.AUTHENTICATION_FAILURE,
                    f"session key still rejected after {reauths} re-authentication(s)",
                )

            reauths += 1
            log.info("Session key rejected, re-authenticating (%d/%d)", reauths, self.max_reauth_attempts)
            failure = self._refresh(session_key)
            if failure is not None:
                return failure
