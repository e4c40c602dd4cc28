"""Outbound queue for trades produced by the matching engine.

The engine only matches resting orders; downstream consumers persist trades
and orders, move balances and build candles from what is pushed here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .models import Trade

logger = logging.getLogger(__name__)


class MessageQueue(ABC):
    """Destination for trades. Cancelled orders arrive as trades of type cancel."""

    @abstractmethod
    def push_trade(self, *args: Trade) -> None:
        """Publish one or more trades."""


class LogMQ(MessageQueue):
    """Queue that writes every pushed batch of trades to the log."""

    def push_trade(self, *args: Trade) -> None:
        logger.info("trades: %r", list(args))


def new_mq() -> MessageQueue:
    """Return the default message queue."""
    return LogMQ()