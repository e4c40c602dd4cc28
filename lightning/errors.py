"""Errors raised by the matching engine."""

from __future__ import annotations

from typing import Optional


class MatchError(Exception):
    """Base class for matching-engine errors."""

    default_message = "match error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class MqError(MatchError, ValueError):
    default_message = "mq cannot nil"


class OrderTimeoutError(MatchError, TimeoutError):
    default_message = "timeout"


class ClosedError(MatchError):
    default_message = "match server closed"


class OrderSideError(MatchError, ValueError):
    default_message = "order side error (buy/sell)"


class OrderTypeError(MatchError, ValueError):
    default_message = "order type error (limit/market)"


class OrderTimeInForceError(MatchError, ValueError):
    default_message = "order timeInForce error (GTC/IOC/FOK)"


class OrderIdError(MatchError, LookupError):
    default_message = "order id error"


class PairError(MatchError, LookupError):
    default_message = "pair error"