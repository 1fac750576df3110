"""Catalog of the API methods the client knows how to dispatch."""
from .exceptions import InvalidMethodError

PUBLIC = "public"
PRIVATE = "private"

PUBLIC_METHODS = frozenset([
    "Time",
    "Assets",
    "AssetPairs",
    "Ticker",
    "Depth",
    "Trades",
    "Spread",
    "OHLC",
])

PRIVATE_METHODS = frozenset([
    "Balance",
    "TradeBalance",
    "OpenOrders",
    "ClosedOrders",
    "QueryOrders",
    "TradesHistory",
    "QueryTrades",
    "OpenPositions",
    "Ledgers",
    "QueryLedgers",
    "TradeVolume",
    "AddOrder",
    "CancelOrder",
    "DepositMethods",
    "DepositAddresses",
    "DepositStatus",
    "WithdrawInfo",
    "Withdraw",
    "WithdrawStatus",
    "WithdrawCancel",
])


def method_kind(method: str) -> str:
    """Return ``"public"`` or ``"private"`` for a catalogued method.

    Raises:
        InvalidMethodError: if the method is in neither set.
    """
    if method in PUBLIC_METHODS:
        return PUBLIC
    if method in PRIVATE_METHODS:
        return PRIVATE
    raise InvalidMethodError(method)
