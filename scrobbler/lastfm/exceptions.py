class ScrobblerError(Exception):
    """Base exception for scrobble submission errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(ScrobblerError):
    """Raised when a fresh session key cannot be obtained."""


class InvalidEntryError(ScrobblerError, ValueError):
    """Raised when a scrobble entry is constructed with invalid fields."""
