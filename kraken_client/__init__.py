"""
Kraken Python API Client

Overview
--------
Client library for the Kraken exchange REST API. It signs private calls,
manages nonces, sends requests over httpx and turns responses into either a
result value or a typed exception.

Exports
-------
- ``KrakenClient``: main entry point for API access
- ``ClientConfig`` / ``ClientOptions``: immutable configuration models
- ``compute_signature``: the ``API-Sign`` algorithm, usable on its own
- Transports: ``HttpxTransport``, ``AsyncHttpxTransport`` and their interfaces
- Exception hierarchy rooted at ``KrakenAPIError``
"""
from .client import KrakenClient
from .models import ClientConfig, ClientOptions, PreparedRequest
from .methods import PUBLIC_METHODS, PRIVATE_METHODS
from .nonce import NonceCounter
from .signing import compute_signature, encode_params
from .transport import Transport, AsyncTransport, HttpxTransport, AsyncHttpxTransport
from .exceptions import (
    KrakenAPIError,
    InvalidMethodError,
    ConfigurationError,
    TransportError,
    ProtocolError,
    RemoteError,
    UnknownRemoteError,
)

# Package semantic version. Keep in sync with packaging config in setup.py
__version__ = "1.0.0"
# Public API surface intended for ``from kraken_client import *`` consumers.
__all__ = [
    "KrakenClient",
    "ClientConfig",
    "ClientOptions",
    "PreparedRequest",
    "PUBLIC_METHODS",
    "PRIVATE_METHODS",
    "NonceCounter",
    "compute_signature",
    "encode_params",
    "Transport",
    "AsyncTransport",
    "HttpxTransport",
    "AsyncHttpxTransport",
    "KrakenAPIError",
    "InvalidMethodError",
    "ConfigurationError",
    "TransportError",
    "ProtocolError",
    "RemoteError",
    "UnknownRemoteError",
]
