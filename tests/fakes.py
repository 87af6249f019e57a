import time
from threading import Lock

from scrobbler.lastfm import ParameterSet, classify
from scrobbler.lastfm.exceptions import AuthenticationError


class ScriptedRequest:
    """Stands in for SubmissionRequest: records signed parameters, replays bodies.

    ``respond`` is either a list of response bodies consumed in order or a
    callable receiving the parameters and returning a body.
    """

    def __init__(self, respond):
        self._respond = respond
        self._lock = Lock()
        self.sent: list[ParameterSet] = []
        self.endpoints: list[str] = []

    def execute(self, endpoint, params):
        with self._lock:
            self.sent.append(params)
            self.endpoints.append(endpoint)
            if callable(self._respond):
                respond = self._respond
            else:
                body = self._respond.pop(0)
                return classify(body)
        return classify(respond(params))


class CountingAuthenticator:
    """Hands out S2, S3, ... and counts calls."""

    def __init__(self, fail_with: str | None = None, delay: float = 0):
        self.calls = 0
        self.fail_with = fail_with
        self.delay = delay

    def __call__(self, session):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.fail_with:
            raise AuthenticationError(self.fail_with)
        return f"S{self.calls + 1}"
