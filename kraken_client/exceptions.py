"""
Exception classes for the Kraken API client.

Every failure surfaces as a subclass of ``KrakenAPIError`` so callers can
handle all API failures in a single place, or catch specific subclasses for
finer control. Nothing is retried by the client itself.

Typical usage:
    >>> from kraken_client import KrakenClient, RemoteError, TransportError
    >>> client = KrakenClient(key="...", secret="...")
    >>> try:
    ...     balance = client.api("Balance")
    ... except RemoteError as exc:
    ...     print(f"Exchange rejected the call: {exc.code}")
    ... except TransportError:
    ...     print("Network problem, try again later")
"""
from typing import Any, List, Optional


class KrakenAPIError(Exception):
    """Base exception for all client errors."""
    pass


class InvalidMethodError(KrakenAPIError):
    """The method name is not part of the public or private catalog.

    This is a programming error and is raised synchronously, before any
    request is made, even when a callback is supplied.
    """

    def __init__(self, method: str):
        super().__init__(f"{method} is not a valid API method.")
        self.method = method


class ConfigurationError(KrakenAPIError):
    """Credentials are missing or the secret is not valid base64."""
    pass


class TransportError(KrakenAPIError):
    """The request did not complete (connection failure, timeout).

    The underlying exception is chained as ``__cause__``.
    """
    pass


class ProtocolError(KrakenAPIError):
    """The response body could not be understood."""

    def __init__(self, body: str, message: Optional[str] = None):
        super().__init__(message or f"Could not understand response from server: {body}")
        self.body = body


class RemoteError(KrakenAPIError):
    """The exchange reported an error with a recognizable code.

    ``code`` is the error identifier with its leading ``E`` removed, e.g.
    ``"General:Invalid arguments"``. ``errors`` holds the full error list.
    """

    def __init__(self, code: str, errors: Optional[List[Any]] = None):
        super().__init__(f"Kraken API returned error: {code}")
        self.code = code
        self.errors = list(errors) if errors is not None else [f"E{code}"]


class UnknownRemoteError(KrakenAPIError):
    """The exchange reported errors, none of which carry a known code."""

    def __init__(self, errors: List[Any]):
        super().__init__(f"Kraken API returned an unknown error: {errors!r}")
        self.errors = list(errors)
