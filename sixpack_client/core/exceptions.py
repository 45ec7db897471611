"""
Exception hierarchy for the Sixpack client.

Programmer errors (:class:`ValidationError`, :class:`ConfigurationError`)
are raised before any network activity. Network-side failures
(:class:`TransportError` and its subclasses, :class:`DecodeError`) are
never raised by the facade; they travel back inside the call outcome next
to a usable fallback alternative.
"""

from typing import Optional


class SixpackError(Exception):
    """Base exception for all client errors."""
    pass


class ValidationError(SixpackError, ValueError):
    """Invalid experiment, alternative, force or option input."""
    pass


class ConfigurationError(SixpackError, ValueError):
    """Invalid client configuration, e.g. an unusable base URL."""
    pass


class IdentityGenerationError(SixpackError):
    """The secure randomness source could not produce a client id."""
    pass


class TransportError(SixpackError):
    """Connection, DNS or timeout failure talking to the service."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.message = message
        self.url = url
        super().__init__(message if url is None else f"{message} ({url})")


class ServerError(TransportError):
    """The service answered with a 5xx status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        super().__init__(f"Sixpack server error: HTTP {status_code}", url)


class DecodeError(SixpackError):
    """The response body was not a valid response envelope."""

    def __init__(self, message: str, body: Optional[str] = None):
        self.message = message
        self.body = body
        super().__init__(message)
