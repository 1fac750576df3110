import asyncio
from urllib.parse import parse_qs

import pytest

from kraken_client import KrakenClient
from kraken_client.exceptions import InvalidMethodError, ProtocolError, RemoteError, TransportError
from kraken_client.signing import compute_signature, decode_secret
from kraken_client.transport import AsyncHttpxTransport

from conftest import API_KEY, API_SECRET, AsyncRecordingTransport, RecordingTransport


def _client(responses=None):
    async_transport = AsyncRecordingTransport(responses)
    client = KrakenClient(
        API_KEY, API_SECRET, transport=RecordingTransport(), async_transport=async_transport
    )
    return client, async_transport


@pytest.mark.asyncio
async def test_async_public_call():
    client, transport = _client(['{"error":[],"result":{"unixtime":1700000000}}'])

    result = await client.api_async("Time")

    assert result == {"unixtime": 1700000000}
    assert transport.requests[0]["url"] == "https://api.kraken.com/0/public/Time"
    assert "API-Sign" not in transport.requests[0]["headers"]


@pytest.mark.asyncio
async def test_async_private_call_is_signed():
    client, transport = _client()

    await client.api_async("TradeBalance", {"asset": "ZUSD"})

    request = transport.requests[0]
    form = parse_qs(request["body"].decode())
    nonce = int(form["nonce"][0])
    assert request["headers"]["API-Sign"] == compute_signature(
        "/0/private/TradeBalance", {"asset": "ZUSD", "nonce": nonce}, nonce, decode_secret(API_SECRET)
    )


def test_async_unknown_method_raises_at_call_time():
    client, transport = _client()
    with pytest.raises(InvalidMethodError):
        client.api_async("Nope")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_async_errors_are_raised():
    client, _ = _client(['{"error":["EOrder:Insufficient funds"]}'])
    with pytest.raises(RemoteError) as exc_info:
        await client.api_async("AddOrder", {"pair": "XBTUSD"})
    assert exc_info.value.code == "Order:Insufficient funds"


@pytest.mark.asyncio
async def test_async_callback_gets_outcome_once():
    client, _ = _client(["<html>bad gateway</html>"])
    calls = []

    result = await client.api_async("Depth", {"pair": "XBTUSD"}, callback=lambda e, v: calls.append((e, v)))

    assert result is None
    assert len(calls) == 1
    assert isinstance(calls[0][0], ProtocolError)
    assert calls[0][1] is None


@pytest.mark.asyncio
async def test_concurrent_async_calls_get_distinct_nonces():
    client, transport = _client()

    await asyncio.gather(*(client.api_async("Balance") for _ in range(20)))

    nonces = [int(parse_qs(r["body"].decode())["nonce"][0]) for r in transport.requests]
    assert len(set(nonces)) == 20


@pytest.mark.asyncio
async def test_async_transport_created_lazily_and_closed():
    client = KrakenClient(transport=RecordingTransport())
    assert client._async_transport is None

    async with client:
        transport = client._get_async_transport()
        assert isinstance(transport, AsyncHttpxTransport)

    assert transport._client.is_closed


@pytest.mark.asyncio
async def test_injected_async_transport_is_left_open():
    client, transport = _client()
    await client.aclose()
    assert transport.closed is False


class _FailingAsyncTransport(AsyncRecordingTransport):
    async def post(self, url, headers, body, timeout):
        raise TimeoutError("read timed out")


@pytest.mark.asyncio
async def test_async_raw_transport_failure_is_wrapped():
    client = KrakenClient(API_KEY, API_SECRET, transport=RecordingTransport(), async_transport=_FailingAsyncTransport())
    with pytest.raises(TransportError) as exc_info:
        await client.api_async("Balance")
    assert isinstance(exc_info.value.__cause__, TimeoutError)


@pytest.mark.asyncio
async def test_async_raw_transport_failure_reaches_callback():
    client = KrakenClient(API_KEY, API_SECRET, transport=RecordingTransport(), async_transport=_FailingAsyncTransport())
    calls = []

    assert await client.api_async("Balance", callback=lambda e, v: calls.append((e, v))) is None
    assert len(calls) == 1
    assert isinstance(calls[0][0], TransportError)
