"""
Basic usage examples for the Kraken Python API client.

Prerequisites:
- Install: `pip install -e .` from the repo root
- Private calls need KRAKEN_API_KEY and KRAKEN_API_SECRET in the environment
"""
import os

from kraken_client import KrakenClient, KrakenAPIError, RemoteError


def main():
    # Public calls need no credentials
    client = KrakenClient.from_env()

    print("=" * 60)
    print("Kraken Python API Client - Basic Usage Examples")
    print("=" * 60)

    # Example 1: Server time
    print("\n1. Getting server time...")
    server_time = client.api("Time")
    print(f"Server time: {server_time['rfc1123']}")

    # Example 2: Ticker
    print("\n2. Getting ticker for XBT/USD...")
    ticker = client.api("Ticker", {"pair": "XXBTZUSD"})
    for pair, data in ticker.items():
        print(f"  - {pair}: last trade {data['c'][0]}")

    # Example 3: Errors carry the exchange's code
    print("\n3. Requesting an unknown pair...")
    try:
        client.api("Ticker", {"pair": "NOTAPAIR"})
    except RemoteError as exc:
        print(f"Rejected with code: {exc.code}")

    # Example 4: Private call
    if os.getenv("KRAKEN_API_KEY"):
        print("\n4. Getting account balance...")
        try:
            balance = client.api("Balance")
            for asset, amount in balance.items():
                print(f"  - {asset}: {amount}")
        except KrakenAPIError as exc:
            print(f"Balance request failed: {exc}")

    # Example 5: Callback style
    print("\n5. Callback style...")

    def on_assets(error, value):
        if error:
            print(f"Failed: {error}")
        else:
            print(f"Found {len(value)} assets")

    client.api("Assets", callback=on_assets)

    client.close()


if __name__ == "__main__":
    main()
