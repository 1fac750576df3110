"""
Kraken REST API Client

Overview
--------
This module implements the main client for the Kraken REST API, including:
- Dispatch of catalogued method names to the public or private endpoints
- Nonce allocation and request signing for private methods
- Synchronous and async submission through an injectable transport
- Normalization of responses into a result value or a typed exception

Design Notes
------------
- Network: Uses httpx through ``HttpxTransport``/``AsyncHttpxTransport`` by
  default; any ``Transport`` implementation can be injected.
- Results: Without a callback a call returns its result or raises. With a
  callback the outcome is passed as ``callback(error, value)`` and the call
  returns ``None``. An unknown method name always raises immediately.
"""
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from .exceptions import (
    ConfigurationError,
    KrakenAPIError,
    ProtocolError,
    RemoteError,
    TransportError,
    UnknownRemoteError,
)
from .methods import PUBLIC, method_kind
from .models import DEFAULT_URL, ClientConfig, ClientOptions, ParamValue, PreparedRequest
from .nonce import NonceCounter
from .signing import compute_signature, decode_secret, encode_params
from .transport import AsyncHttpxTransport, AsyncTransport, HttpxTransport, Transport

logger = logging.getLogger(__name__)

USER_AGENT = "Kraken Python API Client"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Params = Optional[Mapping[str, ParamValue]]
Callback = Callable[[Optional[KrakenAPIError], Any], None]


class KrakenClient:
    """
    Kraken API Client

    Example:
        >>> from kraken_client import KrakenClient
        >>> client = KrakenClient(key="your_key", secret="your_base64_secret")
        >>> server_time = client.api("Time")
        >>> balance = client.api("Balance")
        >>> ticker = client.api("Ticker", {"pair": "XXBTZUSD"})
    """

    def __init__(
        self,
        key: Optional[str] = None,
        secret: Optional[str] = None,
        options: Union[ClientOptions, Mapping[str, Any], str, None] = None,
        *,
        url: Optional[str] = None,
        transport: Optional[Transport] = None,
        async_transport: Optional[AsyncTransport] = None,
        config: Optional[ClientConfig] = None,
    ):
        """
        Initialize Kraken client.

        Args:
            key: API key
            secret: Base64-encoded API secret
            options: ``{"version", "otp", "timeout"}`` (timeout in ms), or a
                bare string used as the two-factor password
            url: Base URL for the API (default https://api.kraken.com)
            transport: Synchronous transport (httpx-backed if None)
            async_transport: Asynchronous transport (created on first async call if None)
            config: Complete configuration; cannot be combined with key,
                secret, options or url
        """
        if config is not None:
            if any(arg is not None for arg in (key, secret, options, url)):
                raise TypeError("config cannot be combined with key, secret, options or url")
            self.config = config
        else:
            self.config = ClientConfig.from_options(key, secret, options, url=url or DEFAULT_URL)

        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpxTransport()

        self._owns_async_transport = async_transport is None
        self._async_transport = async_transport

        self._nonce = NonceCounter()
        self._signing_key: Optional[bytes] = None

    @classmethod
    def from_env(cls, **kwargs: Any) -> "KrakenClient":
        """Create a client configured from ``KRAKEN_API_*`` environment variables.

        Only ``transport`` and ``async_transport`` may be passed; credentials
        and options come from the environment.
        """
        return cls(config=ClientConfig.from_env(), **kwargs)

    @property
    def nonce_counter(self) -> NonceCounter:
        return self._nonce

    # Request preparation

    def _get_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": USER_AGENT,
            "Content-Type": FORM_CONTENT_TYPE,
        }

    def _path(self, kind: str, method: str) -> str:
        return f"/{self.config.version}/{kind}/{method}"

    def _get_signing_key(self) -> bytes:
        if self._signing_key is None:
            self._signing_key = decode_secret(self.config.secret)
        return self._signing_key

    def prepare_public(self, method: str, params: Params = None) -> PreparedRequest:
        """Build the request for a public method without sending it."""
        params = dict(params or {})
        path = self._path("public", method)

        return PreparedRequest(
            url=self.config.url + path,
            path=path,
            headers=self._get_headers(),
            body=encode_params(params).encode("ascii"),
            params=params,
        )

    def prepare_private(self, method: str, params: Params = None) -> PreparedRequest:
        """Build and sign the request for a private method without sending it.

        A ``nonce`` already present in ``params`` is used as-is and the
        client's counter is not advanced. The caller's mapping is not modified.
        """
        if not self.config.key:
            raise ConfigurationError("An API key is required for private methods")
        signing_key = self._get_signing_key()

        params = dict(params or {})
        path = self._path("private", method)

        if not params.get("nonce"):
            params["nonce"] = self._nonce.next()
        else:
            last = self._nonce.last
            if isinstance(params["nonce"], int) and last is not None and params["nonce"] <= last:
                logger.warning(
                    f"Caller-supplied nonce for {method} does not exceed the last issued "
                    f"nonce ({last}); the exchange will likely reject it"
                )
        nonce = params["nonce"]

        if self.config.otp is not None:
            params["otp"] = self.config.otp

        headers = self._get_headers()
        headers["API-Key"] = self.config.key
        headers["API-Sign"] = compute_signature(path, params, nonce, signing_key)

        return PreparedRequest(
            url=self.config.url + path,
            path=path,
            headers=headers,
            body=encode_params(params).encode("ascii"),
            params=params,
            nonce=nonce,
        )

    # Response handling

    def _handle_response(self, body: str) -> Any:
        """Normalize a raw response body and raise rich exceptions on errors."""
        try:
            data = json.loads(body)
        except ValueError as e:
            raise ProtocolError(body) from e

        if not isinstance(data, dict):
            raise ProtocolError(body, f"Unexpected response from server: {body}")

        errors = data.get("error")
        if isinstance(errors, list) and errors:
            for entry in errors:
                if isinstance(entry, str) and entry.startswith("E"):
                    logger.debug(f"Kraken API error: {entry}")
                    raise RemoteError(entry[1:], errors)
            raise UnknownRemoteError(errors)

        result = data.get("result")
        return result if result is not None else data

    # Synchronous API

    def _send(self, prepared: PreparedRequest) -> Any:
        logger.debug(f"POST {prepared.url}")
        try:
            body = self.transport.post(
                prepared.url, prepared.headers, prepared.body, self.config.timeout_seconds
            )
        except KrakenAPIError:
            raise
        except Exception as e:
            raise TransportError(f"Error in server response: {e!r}") from e
        return self._handle_response(body)

    def _deliver(self, call: Callable[[], Any], callback: Optional[Callback]) -> Any:
        if callback is None:
            return call()

        try:
            value = call()
        except KrakenAPIError as e:
            callback(e, None)
            return None
        callback(None, value)
        return None

    def api(self, method: str, params: Params = None, callback: Optional[Callback] = None) -> Any:
        """Call a public or private API method.

        Args:
            method: Method name from the public or private catalog
            params: Arguments to pass to the API call
            callback: Optional ``callback(error, value)``; when given the call
                returns None and never raises API errors

        Returns:
            The response's ``result`` field, or the whole response if absent

        Raises:
            InvalidMethodError: immediately, for unknown method names
        """
        if method_kind(method) == PUBLIC:
            return self.public_method(method, params, callback)
        return self.private_method(method, params, callback)

    def public_method(self, method: str, params: Params = None, callback: Optional[Callback] = None) -> Any:
        """Call a public API method by name."""
        return self._deliver(lambda: self._send(self.prepare_public(method, params)), callback)

    def private_method(self, method: str, params: Params = None, callback: Optional[Callback] = None) -> Any:
        """Call a private API method by name, signing the request."""
        return self._deliver(lambda: self._send(self.prepare_private(method, params)), callback)

    # Async API

    def _get_async_transport(self) -> AsyncTransport:
        if self._async_transport is None:
            self._async_transport = AsyncHttpxTransport()
        return self._async_transport

    async def _send_async(self, prepared: PreparedRequest) -> Any:
        logger.debug(f"POST {prepared.url}")
        try:
            body = await self._get_async_transport().post(
                prepared.url, prepared.headers, prepared.body, self.config.timeout_seconds
            )
        except KrakenAPIError:
            raise
        except Exception as e:
            raise TransportError(f"Error in server response: {e!r}") from e
        return self._handle_response(body)

    async def _deliver_async(
        self,
        call: Callable[[], Awaitable[Any]],
        callback: Optional[Callback],
    ) -> Any:
        if callback is None:
            return await call()

        try:
            value = await call()
        except KrakenAPIError as e:
            callback(e, None)
            return None
        callback(None, value)
        return None

    def api_async(self, method: str, params: Params = None, callback: Optional[Callback] = None) -> Awaitable[Any]:
        """Async version of ``api``.

        The method name is validated before the awaitable is returned, so an
        unknown name raises ``InvalidMethodError`` at call time.
        """
        if method_kind(method) == PUBLIC:
            return self.public_method_async(method, params, callback)
        return self.private_method_async(method, params, callback)

    async def public_method_async(
        self, method: str, params: Params = None, callback: Optional[Callback] = None
    ) -> Any:
        """Async version of ``public_method``."""
        return await self._deliver_async(
            lambda: self._send_async(self.prepare_public(method, params)), callback
        )

    async def private_method_async(
        self, method: str, params: Params = None, callback: Optional[Callback] = None
    ) -> Any:
        """Async version of ``private_method``."""
        return await self._deliver_async(
            lambda: self._send_async(self.prepare_private(method, params)), callback
        )

    # Context manager support

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def close(self):
        """Close the synchronous transport if this client created it.

        Use ``aclose`` when the async API was used.
        """
        if self._owns_transport:
            self.transport.close()

    async def aclose(self):
        """Close both transports created by this client."""
        if self._owns_async_transport and self._async_transport is not None:
            await self._async_transport.aclose()
        self.close()
