"""Request handling for the order entry service."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from .models import Order
from .pool import MatchPool
from .status import Status

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class OrderRequest:
    """An incoming order with price and amount still in text form."""

    id: str
    user_id: int
    pair: str
    price: str
    amount: str
    side: str
    type: str
    time_in_force: str = ""


@dataclass(frozen=True)
class ReplyResult:
    """Outcome reported back to the caller."""

    code: int
    msg: str


SUCCESS = ReplyResult(code=0, msg="success")


def _parse_decimal(text: str, message: str) -> Decimal:
    if not _NUMBER.fullmatch(text):
        raise ValueError(message)
    return Decimal(text)


class MatchServer:
    """Accepts orders and cancellations and hands them to the match pool."""

    def __init__(self, status: Status, pool: MatchPool) -> None:
        self.status = status
        self.pool = pool

    def add_order(self, request: OrderRequest) -> ReplyResult:
        """Queue the requested order.

        Raises ValueError for a malformed price or amount, and the pool's
        errors for an unknown pair, a full queue or a stopped service.
        """
        price = _parse_decimal(request.price, "price error")
        amount = _parse_decimal(request.amount, "amount error")
        order = Order(
            id=request.id,
            user_id=request.user_id,
            pair=request.pair,
            price=price,
            amount=amount,
            side=request.side,
            type=request.type,
            time_in_force=request.time_in_force,
        )
        self.pool.add_order(order)
        return SUCCESS

    def cancel_order(self, pair: str, id: str) -> ReplyResult:
        """Queue the cancellation of order id on pair."""
        self.pool.cancel_order(pair, id)
        return SUCCESS