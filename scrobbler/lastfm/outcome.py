"""Submission outcomes and classification of raw service responses.

A remote rejection is an ordinary result, not an exception: every response
body maps onto exactly one of the outcome types defined here.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)

FAILED_MARKER = 'lfm status="failed"'
OK_MARKER = 'lfm status="ok"'

# Web service error codes with a meaning beyond "rejected".
INVALID_SESSION_KEY = 9
SUSPENDED_API_KEY = 26


class FatalKind(Enum):
    BANNED = "banned"
    AUTHENTICATION_FAILURE = "authentication_failure"
    CLOCK_SKEW = "clock_skew"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class Success:
    body: str = ""

    def describe(self) -> str:
        return "ok"


@dataclass(frozen=True, slots=True)
class RetryableSessionError:
    """The session key was invalidated, the request itself was fine."""

    body: str = ""

    def describe(self) -> str:
        return "session key rejected"


@dataclass(frozen=True, slots=True)
class FatalError:
    kind: FatalKind
    message: str = ""

    def describe(self) -> str:
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value


@dataclass(frozen=True, slots=True)
class TransportError:
    """The request never produced a response (refused, timed out, TLS failure)."""

    cause: Exception

    def describe(self) -> str:
        return f"transport error: {self.cause}"


SubmissionOutcome = Success | RetryableSessionError | FatalError | TransportError


def _classify_failed_document(body: str) -> SubmissionOutcome:
    try:
        root = ET.fromstring(body.strip())
    except ET.ParseError:
        log.debug("Failed response is not well-formed XML")
        return FatalError(FatalKind.REJECTED, body[body.find(" ") + 1 :].strip())

    error = root.find("error")
    if error is None:
        return FatalError(FatalKind.REJECTED, "failed response without error element")

    message = (error.text or "").strip()
    try:
        code = int(error.get("code", ""))
    except ValueError:
        code = None

    if code == INVALID_SESSION_KEY:
        return RetryableSessionError(body)
    if code == SUSPENDED_API_KEY:
        return FatalError(FatalKind.BANNED, message)
    if code is not None:
        message = f"[{code}] {message}" if message else f"error {code}"
    return FatalError(FatalKind.REJECTED, message)


def classify(body: str) -> SubmissionOutcome:
    """Map a raw response body onto a submission outcome.

    Plain-text status tokens are matched against the first line; XML status
    documents are recognised by their ``<lfm status=...>`` marker.
    """
    line = body.split("\n", 1)[0].rstrip("\r")

    if line.startswith("OK"):
        return Success(body)
    if line.startswith("BANNED"):
        return FatalError(FatalKind.BANNED)
    if line.startswith("BADAUTH"):
        return RetryableSessionError(body)
    if line.startswith("BADTIME"):
        return FatalError(FatalKind.CLOCK_SKEW)
    if line.startswith("FAILED"):
        return FatalError(FatalKind.REJECTED, line[len("FAILED") :].strip())
    if FAILED_MARKER in body:
        return _classify_failed_document(body)
    if OK_MARKER in body:
        return Success(body)
    return FatalError(FatalKind.REJECTED, "unrecognized response")
