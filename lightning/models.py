"""Order and trade records handled by the matching engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

BUY = "buy"
SELL = "sell"

LIMIT = "limit"
MARKET = "market"
CANCEL = "cancel"

TIME_IN_FORCE_GTC = "GTC"  # rests until filled or cancelled
TIME_IN_FORCE_IOC = "IOC"  # the part that cannot fill at once is cancelled
TIME_IN_FORCE_FOK = "FOK"  # cancelled unless it can fill completely at once


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _decimal_str(value: Decimal) -> str:
    """Render a decimal without exponent and without trailing zeros."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


@dataclass
class Order:
    """An order as held in the book; its amount shrinks as it fills."""

    id: str
    user_id: int
    pair: str
    price: Decimal
    amount: Decimal
    side: str
    type: str
    time_in_force: str = ""

    def __post_init__(self) -> None:
        self.price = _to_decimal(self.price)
        self.amount = _to_decimal(self.amount)

    def to_dict(self) -> dict[str, Any]:
        """Return the order keyed by its wire field names."""
        return {
            "i": self.id,
            "u": self.user_id,
            "P": self.pair,
            "p": _decimal_str(self.price),
            "a": _decimal_str(self.amount),
            "s": self.side,
            "t": self.type,
            "f": self.time_in_force,
        }


@dataclass
class Trade:
    """A fill between a maker and a taker, or a cancellation record."""

    id: str
    pair: str
    maker_id: str
    taker_id: str
    maker_user: int
    taker_user: int
    price: str
    amount: str
    taker_order_side: str
    taker_order_type: str
    taker_time_in_force: str
    ts: int

    def to_dict(self) -> dict[str, Any]:
        """Return the trade keyed by its wire field names."""
        return {
            "i": self.id,
            "P": self.pair,
            "mi": self.maker_id,
            "ti": self.taker_id,
            "mu": self.maker_user,
            "tu": self.taker_user,
            "p": self.price,
            "a": self.amount,
            "s": self.taker_order_side,
            "t": self.taker_order_type,
            "f": self.taker_time_in_force,
            "ts": self.ts,
        }