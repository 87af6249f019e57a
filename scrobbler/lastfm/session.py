from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable
from threading import Lock

import requests

from .exceptions import AuthenticationError
from .metrics import record_reauthentication
from .outcome import FAILED_MARKER
from .params import ParameterSet
from .request import LASTFM_API_URL, post_form
from .signing import signed

log = logging.getLogger(__name__)

Authenticator = Callable[["Session"], str]


class Session:
    """Credentials shared by every request issued through one client.

    The session key can be invalidated server-side at any time. ``refresh`` is
    single-flight: concurrent callers that saw the same stale key share one
    re-authentication.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        session_key: str | None = None,
        authenticator: Authenticator | None = None,
        on_refresh: Callable[[str], None] | None = None,
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self._session_key = session_key
        self._authenticator = authenticator
        self._on_refresh = on_refresh
        self._refresh_lock = Lock()
        self.refresh_count = 0

    @property
    def session_key(self) -> str | None:
        return self._session_key

    @property
    def authenticated(self) -> bool:
        return bool(self._session_key)

    def masked_api_key(self) -> str:
        """Return the API key masked for display, e.g. ``abc***xyz``."""
        if not self.api_key:
            return "Not configured"
        if len(self.api_key) <= 6:
            return "****hidden****"
        return f"{self.api_key[:3]}***{self.api_key[-3:]}"

    def refresh(self, stale_key: str | None = None) -> str:
        """Obtain a new session key and return it.

        Args:
            stale_key: The key the caller saw rejected, or None if it saw no
                key at all. If the current key differs, another caller has
                already refreshed and the current key is returned as is.

        Raises:
            AuthenticationError: If no authenticator is configured or it fails
        """
        with self._refresh_lock:
            current = self._session_key
            if current and current != stale_key:
                log.debug("Session key already refreshed by another request")
                return current

            if self._authenticator is None:
                raise AuthenticationError("session key rejected and no authenticator is configured")

            log.info("Re-authenticating session for API key %s", self.masked_api_key())
            new_key = self._authenticator(self)
            if not new_key:
                raise AuthenticationError("authenticator returned an empty session key")

            self._session_key = new_key
            self.refresh_count += 1
            record_reauthentication()

            # Hook runs under the lock so persisted keys keep refresh order.
            if self._on_refresh is not None:
                try:
                    self._on_refresh(new_key)
                except Exception as e:
                    log.warning("Session refresh hook failed: %s", e)

        return new_key


class MobileSessionAuthenticator:
    """Obtain session keys through ``auth.getMobileSession``.

    Used as a :class:`Session` authenticator; the password never leaves the
    signed HTTPS request.
    """

    METHOD = "auth.getMobileSession"

    def __init__(
        self,
        username: str,
        password: str,
        endpoint: str = LASTFM_API_URL,
        timeout: float = 30.0,
    ):
        self.username = username
        self._password = password
        self.endpoint = endpoint
        self.timeout = timeout

    def __call__(self, session: Session) -> str:
        params = ParameterSet(
            {
                "method": self.METHOD,
                "api_key": session.api_key,
                "username": self.username,
                "password": self._password,
            }
        )

        try:
            status, text = post_form(self.endpoint, signed(params, session.api_secret), self.timeout)
        except requests.exceptions.RequestException as e:
            raise AuthenticationError(f"could not reach authentication service: {e}") from e

        log.debug("%s answered HTTP %d", self.METHOD, status)
        return parse_session_key(text)


def parse_session_key(text: str) -> str:
    """Extract ``<session><key>`` from an authentication response.

    Raises:
        AuthenticationError: If the response is a failure or carries no key
    """
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as e:
        raise AuthenticationError("authentication response is not valid XML") from e

    if FAILED_MARKER in text or root.get("status") == "failed":
        error = root.find("error")
        reason = (error.text or "").strip() if error is not None else "unknown error"
        raise AuthenticationError(f"authentication rejected: {reason}")

    key = root.findtext("session/key")
    if not key or not key.strip():
        raise AuthenticationError("authentication response carries no session key")
    return key.strip()
