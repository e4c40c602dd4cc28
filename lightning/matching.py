"""Matching primitives: building trades and sweeping one side of the book."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, List

from .models import CANCEL, Order, Trade, _decimal_str
from .skiplist import SkipList
from .utils import gen_trade_id, now_unix_milli

Crosses = Callable[[Decimal], bool]

_ZERO = Decimal(0)


def _text(value: Any) -> str:
    if isinstance(value, Decimal):
        return _decimal_str(value)
    return str(value)


def make_trade(
    taker: Order, maker_id: str, maker_user: int, price: Any, amount: Any
) -> Trade:
    """Build a fill between the taker order and a resting maker."""
    return Trade(
        id=gen_trade_id(),
        pair=taker.pair,
        maker_id=maker_id,
        taker_id=taker.id,
        maker_user=maker_user,
        taker_user=taker.user_id,
        price=_text(price),
        amount=_text(amount),
        taker_order_side=taker.side,
        taker_order_type=taker.type,
        taker_time_in_force=taker.time_in_force,
        ts=now_unix_milli(),
    )


def cancel_trade(order: Order) -> Trade:
    """Build the record that reports the order's remaining amount as cancelled."""
    return Trade(
        id=gen_trade_id(),
        pair=order.pair,
        maker_id=order.id,
        taker_id=order.id,
        maker_user=order.user_id,
        taker_user=order.user_id,
        price=_decimal_str(order.price),
        amount=_decimal_str(order.amount),
        taker_order_side=order.side,
        taker_order_type=CANCEL,
        taker_time_in_force=order.time_in_force,
        ts=now_unix_milli(),
    )


def fillable(book: SkipList, order: Order, crosses: Crosses) -> bool:
    """Tell whether the crossing levels of book hold enough to fill order whole.

    The book is left untouched.
    """
    remaining = order.amount
    for node in book:
        if remaining <= _ZERO or not crosses(node.score):
            break
        remaining -= node.value.amount
    return remaining <= _ZERO


def sweep(book: SkipList, order: Order, crosses: Crosses) -> List[Trade]:
    """Match order against the best crossing makers of book, best first.

    Filled makers are removed from the book and a partly filled maker keeps
    what is left. The order's amount is reduced by what was filled. Returns
    the fills in the order they happened.
    """
    trades: List[Trade] = []
    while order.amount > _ZERO:
        first = book.first()
        if first is None or not crosses(first.score):
            break
        maker = first.value
        if maker.amount >= order.amount:
            trades.append(
                make_trade(order, maker.id, maker.user_id, first.score, order.amount)
            )
            left = maker.amount - order.amount
            order.amount = order.amount - order.amount
            if left > _ZERO:
                maker.amount = left
            else:
                book.delete(first.score, maker.id)
        else:
            trades.append(
                make_trade(order, maker.id, maker.user_id, first.score, maker.amount)
            )
            order.amount = order.amount - maker.amount
            book.delete(first.score, maker.id)
    return trades