from .client import SubmissionClient
from .encoding import deserialize, serialize, to_wire_form
from .exceptions import AuthenticationError, InvalidEntryError, ScrobblerError
from .metrics import (
    get_submission_statistics,
    log_submission_statistics,
    reset_submission_statistics,
)
from .outcome import (
    FatalError,
    FatalKind,
    RetryableSessionError,
    SubmissionOutcome,
    Success,
    TransportError,
    classify,
)
from .params import ParameterSet
from .request import LASTFM_API_URL, SubmissionRequest, disable_ipv4_only, enable_ipv4_only
from .scrobble import PlaybackSource, ScrobbleEntry, ScrobbleMode
from .session import MobileSessionAuthenticator, Session
from .signing import sign, signed

__all__ = [
    "LASTFM_API_URL",
    "AuthenticationError",
    "FatalError",
    "FatalKind",
    "InvalidEntryError",
    "MobileSessionAuthenticator",
    "ParameterSet",
    "PlaybackSource",
    "RetryableSessionError",
    "ScrobbleEntry",
    "ScrobbleMode",
    "ScrobblerError",
    "Session",
    "SubmissionClient",
    "SubmissionOutcome",
    "SubmissionRequest",
    "Success",
    "TransportError",
    "classify",
    "deserialize",
    "disable_ipv4_only",
    "enable_ipv4_only",
    "get_submission_statistics",
    "log_submission_statistics",
    "reset_submission_statistics",
    "serialize",
    "sign",
    "signed",
    "to_wire_form",
]
