"""
HTTP transport for the Kraken API client.

The client hands a fully prepared POST (URL, headers, encoded body, timeout)
to a transport and receives the raw response text back. HTTP status codes are
ignored: the exchange reports failures in the JSON body. Transports raise
``TransportError`` when no response could be obtained.

Design Notes
------------
- Network: Uses httpx for both the synchronous and asynchronous transports.
- Resiliency: Retries are opt-in (``max_retries=0`` by default) and cover
  connection-establishment failures only, where the request never reached the
  server. A private call that may have been delivered is never replayed.
"""
import asyncio
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)

# Failures that guarantee the request was not sent
RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


def backoff_delay(
    attempt: int,
    base_delay: float = 0.5,
    max_delay: float = 10.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
) -> float:
    """Exponential backoff delay for the given zero-based attempt."""
    delay = min(base_delay * (backoff_factor ** attempt), max_delay)
    if jitter:
        delay = delay * (0.5 + random.random() * 0.5)
    return delay


class Transport(ABC):
    """Synchronous transport interface."""

    @abstractmethod
    def post(self, url: str, headers: Dict[str, str], body: bytes, timeout: float) -> str:
        """Send a POST and return the raw response body."""
        ...

    def close(self) -> None:
        pass


class AsyncTransport(ABC):
    """Asynchronous transport interface."""

    @abstractmethod
    async def post(self, url: str, headers: Dict[str, str], body: bytes, timeout: float) -> str:
        """Send a POST and return the raw response body."""
        ...

    async def aclose(self) -> None:
        pass


class HttpxTransport(Transport):
    """Transport backed by ``httpx.Client``.

    Args:
        client: Existing client to use. When omitted, one is created and
            closed together with the transport.
        max_retries: Extra attempts after a connection failure.
        base_delay: Initial backoff delay in seconds.
        max_delay: Upper bound for a single backoff delay.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        max_retries: int = 0,
        base_delay: float = 0.5,
        max_delay: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client()
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

    def post(self, url: str, headers: Dict[str, str], body: bytes, timeout: float) -> str:
        for attempt in range(self.max_retries + 1):
            try:
                response = self._client.post(url, headers=headers, content=body, timeout=timeout)
                return response.text
            except RETRYABLE_ERRORS as e:
                if attempt == self.max_retries:
                    raise TransportError(f"Error in server response: {e!r}") from e

                delay = backoff_delay(attempt, self.base_delay, self.max_delay)
                logger.warning(
                    f"Connection to {url} failed (attempt {attempt + 1}/{self.max_retries + 1}), "
                    f"retrying in {delay:.2f}s: {e}"
                )
                time.sleep(delay)
            except httpx.HTTPError as e:
                raise TransportError(f"Error in server response: {e!r}") from e

        raise TransportError(f"No response from {url}")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncHttpxTransport(AsyncTransport):
    """Transport backed by ``httpx.AsyncClient``; see ``HttpxTransport``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        max_retries: int = 0,
        base_delay: float = 0.5,
        max_delay: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

    async def post(self, url: str, headers: Dict[str, str], body: bytes, timeout: float) -> str:
        for attempt in range(self.max_retries + 1):
            try:
                response = await self._client.post(url, headers=headers, content=body, timeout=timeout)
                return response.text
            except RETRYABLE_ERRORS as e:
                if attempt == self.max_retries:
                    raise TransportError(f"Error in server response: {e!r}") from e

                delay = backoff_delay(attempt, self.base_delay, self.max_delay)
                logger.warning(
                    f"Connection to {url} failed (attempt {attempt + 1}/{self.max_retries + 1}), "
                    f"retrying in {delay:.2f}s: {e}"
                )
                await asyncio.sleep(delay)
            except httpx.HTTPError as e:
                raise TransportError(f"Error in server response: {e!r}") from e

        raise TransportError(f"No response from {url}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
