"""A set of order books, one per trading pair, each matched on its own worker."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Optional, Tuple

from .errors import PairError
from .models import Order
from .mq import MessageQueue
from .orderbook import Orderbook
from .status import Status


class MatchPool:
    """Routes orders and cancellations to the order book of their pair."""

    def __init__(
        self, status: Status, pairs: Iterable[str], mq: Optional[MessageQueue]
    ) -> None:
        self._books: Dict[str, Orderbook] = {}
        for pair in pairs:
            book = Orderbook(status, pair, mq)
            status.add(1)
            threading.Thread(
                target=book.begin, name=f"match-{pair}", daemon=True
            ).start()
            self._books[pair] = book

    @property
    def pairs(self) -> Tuple[str, ...]:
        """The pairs this pool matches."""
        return tuple(self._books)

    def orderbook(self, pair: str) -> Orderbook:
        """Return the order book of pair; raise PairError if it is not matched here."""
        try:
            return self._books[pair]
        except KeyError:
            raise PairError() from None

    def add_order(self, order: Order) -> None:
        """Queue order on the book of its pair."""
        self.orderbook(order.pair).add(order)

    def cancel_order(self, pair: str, id: str) -> None:
        """Queue the cancellation of order id on the book of pair."""
        self.orderbook(pair).cancel(id)