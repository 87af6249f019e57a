import logging
import socket

import requests

from .encoding import to_wire_form
from .outcome import SubmissionOutcome, TransportError, classify
from .params import ParameterSet

log = logging.getLogger(__name__)

LASTFM_API_URL = "https://ws.audioscrobbler.com/2.0/"
USER_AGENT = "scrobbler-submit/0.1"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

_system_getaddrinfo = socket.getaddrinfo
_ipv4_only = False


def _getaddrinfo_ipv4(host, port, family=0, type=0, proto=0, flags=0):
    return _system_getaddrinfo(host, port, socket.AF_INET, type, proto, flags)


def enable_ipv4_only() -> None:
    """Resolve hosts over IPv4 only (works around flaky Last.fm IPv6 routes)."""
    global _ipv4_only
    if not _ipv4_only:
        socket.getaddrinfo = _getaddrinfo_ipv4
        _ipv4_only = True
        log.debug("IPv4-only resolution enabled")


def disable_ipv4_only() -> None:
    """Restore the system resolver."""
    global _ipv4_only
    if _ipv4_only:
        socket.getaddrinfo = _system_getaddrinfo
        _ipv4_only = False


def post_form(endpoint: str, params: ParameterSet, timeout: float) -> tuple[int, str]:
    """POST form-encoded parameters and return the status code and body text.

    Raises:
        requests.RequestException: On any network-level failure
    """
    body = to_wire_form(params).encode("utf-8")
    resp = requests.post(
        endpoint,
        data=body,
        headers={
            "Content-Type": FORM_CONTENT_TYPE,
            "Accept-Charset": "utf-8",
            "User-Agent": USER_AGENT,
        },
        timeout=timeout,
    )
    resp.encoding = resp.encoding or "utf-8"
    return resp.status_code, resp.text


class SubmissionRequest:
    """Sends one signed parameter set and classifies the response."""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout

    def execute(self, endpoint: str, params: ParameterSet) -> SubmissionOutcome:
        method = params.get("method", "?")
        try:
            status, text = post_form(endpoint, params, self.timeout)
        except requests.exceptions.RequestException as e:
            log.warning("Request %s to %s failed: %s", method, endpoint, e)
            return TransportError(e)

        outcome = classify(text)
        log.debug("Request %s answered HTTP %d: %s", method, status, outcome.describe())
        return outcome
