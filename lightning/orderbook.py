"""Order book for one trading pair, fed through a queue and matched in order."""

from __future__ import annotations

import logging
import queue
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from .errors import (
    ClosedError,
    MatchError,
    MqError,
    OrderIdError,
    OrderSideError,
    OrderTimeInForceError,
    OrderTimeoutError,
    OrderTypeError,
)
from .matching import cancel_trade, fillable, sweep
from .models import (
    BUY,
    LIMIT,
    MARKET,
    SELL,
    TIME_IN_FORCE_FOK,
    TIME_IN_FORCE_GTC,
    TIME_IN_FORCE_IOC,
    Order,
    Trade,
)
from .mq import MessageQueue
from .skiplist import SkipList, SkipListDesc
from .status import Status

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1_000_000
DEFAULT_PUT_TIMEOUT = 1.0
_POLL_INTERVAL = 0.05

_ADD = "add"
_CANCEL = "cancel"


class Orderbook:
    """Bids best-first from high to low, asks best-first from low to high.

    Orders and cancellations are queued by ``add`` and ``cancel`` and applied
    one at a time by ``begin``; ``process_add`` and ``process_cancel`` apply
    them directly.
    """

    def __init__(
        self,
        status: Status,
        pair: str,
        mq: Optional[MessageQueue],
        *,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        put_timeout: float = DEFAULT_PUT_TIMEOUT,
    ) -> None:
        if mq is None:
            raise MqError()
        self.pair = pair
        self._status = status
        self._mq = mq
        self._bid = SkipListDesc()
        self._ask = SkipList()
        self._bid_index: Dict[str, Decimal] = {}
        self._ask_index: Dict[str, Decimal] = {}
        self._queue: "queue.Queue[Tuple[str, object]]" = queue.Queue(maxsize=queue_size)
        self._put_timeout = put_timeout

    def _enqueue(self, item: Tuple[str, object]) -> None:
        self._status.add(1)
        try:
            if self._status.is_stopped():
                raise ClosedError()
            try:
                self._queue.put(item, timeout=self._put_timeout)
            except queue.Full:
                raise OrderTimeoutError() from None
        finally:
            self._status.done()

    def add(self, order: Order) -> None:
        """Queue a copy of order for matching."""
        self._enqueue((_ADD, replace(order)))

    def cancel(self, order_id: str) -> None:
        """Queue the cancellation of a resting order."""
        self._enqueue((_CANCEL, order_id))

    def begin(self) -> None:
        """Apply queued requests until the status is stopped.

        The caller registers this worker with ``status.add(1)`` beforehand;
        it is marked done when the loop ends.
        """
        try:
            while not self._status.is_stopped():
                try:
                    kind, payload = self._queue.get(timeout=_POLL_INTERVAL)
                except queue.Empty:
                    continue
                try:
                    if kind == _ADD:
                        self.process_add(payload)  # type: ignore[arg-type]
                    else:
                        self.process_cancel(payload)  # type: ignore[arg-type]
                except MatchError as exc:
                    logger.warning("%s %s rejected: %s", self.pair, kind, exc)
        finally:
            self._status.done()

    def process_add(self, order: Order) -> None:
        """Match a copy of order against the book now, resting or cancelling the rest."""
        order = replace(order)
        price = order.price
        if order.side == BUY:
            opposite, own, index = self._ask, self._bid, self._bid_index
            crosses: Callable[[Decimal], bool] = lambda score: score <= price
        elif order.side == SELL:
            opposite, own, index = self._bid, self._ask, self._ask_index
            crosses = lambda score: score >= price
        else:
            raise OrderSideError()

        if order.type == MARKET:
            self._fill_or_cancel(opposite, order, lambda score: True)
        elif order.type == LIMIT:
            if order.time_in_force == TIME_IN_FORCE_GTC:
                trades = sweep(opposite, order, crosses)
                if order.amount > 0:
                    own.insert(order.price, order)
                    index[order.id] = order.price
                if trades:
                    self.push_trades(*trades)
            elif order.time_in_force == TIME_IN_FORCE_IOC:
                self._fill_or_cancel(opposite, order, crosses)
            elif order.time_in_force == TIME_IN_FORCE_FOK:
                if not fillable(opposite, order, crosses):
                    self.push_trades(cancel_trade(order))
                    return
                self._fill_or_cancel(opposite, order, crosses)
            else:
                raise OrderTimeInForceError()
        else:
            raise OrderTypeError()

    def _fill_or_cancel(
        self, book: SkipList, order: Order, crosses: Callable[[Decimal], bool]
    ) -> None:
        trades: List[Trade] = sweep(book, order, crosses)
        if order.amount > 0:
            trades.append(cancel_trade(order))
        if trades:
            self.push_trades(*trades)

    def process_cancel(self, order_id: str) -> None:
        """Remove a resting order now and push its cancellation record."""
        if order_id in self._bid_index:
            book, index = self._bid, self._bid_index
        elif order_id in self._ask_index:
            book, index = self._ask, self._ask_index
        else:
            raise OrderIdError()
        score = index[order_id]
        node = book.find(score, order_id)
        if node is None:
            raise OrderIdError()
        book.delete(score, order_id)
        self.push_trades(cancel_trade(node.value))
        del index[order_id]

    def bids(self) -> List[Order]:
        """Resting buy orders, best price first."""
        return [node.value for node in self._bid]

    def asks(self) -> List[Order]:
        """Resting sell orders, best price first."""
        return [node.value for node in self._ask]

    def push_trades(self, *args: Trade) -> None:
        """Publish trades to the message queue."""
        self._mq.push_trade(*args)