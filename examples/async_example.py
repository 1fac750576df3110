#!/usr/bin/env python3
"""
Example: async functionality with the Kraken Python API client

Demonstrates:
- Async/await API calls
- Concurrent private calls sharing one nonce counter
- Opt-in connection retries on the transport

Prerequisites:
- Install: `pip install -e .` from the repo root
- Set KRAKEN_API_KEY and KRAKEN_API_SECRET for the private calls
"""
import asyncio
import logging
import os

from kraken_client import AsyncHttpxTransport, KrakenClient, KrakenAPIError


async def demo_public_calls(client: KrakenClient):
    print("Public calls")
    server_time, pairs = await asyncio.gather(
        client.api_async("Time"),
        client.api_async("AssetPairs", {"pair": "XXBTZUSD,XETHZUSD"}),
    )
    print(f"Server time: {server_time['unixtime']}")
    print(f"Pairs: {', '.join(pairs)}")


async def demo_private_calls(client: KrakenClient):
    print("\nPrivate calls")
    try:
        balance, orders = await asyncio.gather(
            client.api_async("Balance"),
            client.api_async("OpenOrders", {"trades": True}),
        )
        print(f"Assets held: {len(balance)}")
        print(f"Open orders: {len(orders.get('open', {}))}")
    except KrakenAPIError as exc:
        print(f"Private call failed: {exc}")


async def main():
    logging.basicConfig(level=logging.INFO)

    # Injected transports are owned by the caller
    transport = AsyncHttpxTransport(max_retries=2)
    async with KrakenClient.from_env(async_transport=transport) as client:
        await demo_public_calls(client)
        if os.getenv("KRAKEN_API_KEY"):
            await demo_private_calls(client)
    await transport.aclose()


if __name__ == "__main__":
    asyncio.run(main())
