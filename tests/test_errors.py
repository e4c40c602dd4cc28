import pytest

from lightning.errors import (
    ClosedError,
    MatchError,
    MqError,
    OrderIdError,
    OrderSideError,
    OrderTimeInForceError,
    OrderTimeoutError,
    OrderTypeError,
    PairError,
)


@pytest.mark.parametrize(
    "cls, message",
    [
        (MqError, "mq cannot nil"),
        (OrderTimeoutError, "timeout"),
        (ClosedError, "match server closed"),
        (OrderSideError, "order side error (buy/sell)"),
        (OrderTypeError, "order type error (limit/market)"),
        (OrderTimeInForceError, "order timeInForce error (GTC/IOC/FOK)"),
        (OrderIdError, "order id error"),
        (PairError, "pair error"),
    ],
)
def test_default_messages(cls, message):
    assert str(cls()) == message


def test_custom_message_overrides_default():
    assert str(PairError("unknown pair XYZ")) == "unknown pair XYZ"


@pytest.mark.parametrize(
    "cls, builtin, message",
    [
        (OrderTimeoutError, TimeoutError, "timeout"),
        (OrderSideError, ValueError, "order side error (buy/sell)"),
        (OrderIdError, LookupError, "order id error"),
        (PairError, LookupError, "pair error"),
    ],
)
def test_errors_caught_as_match_error_and_builtin(cls, builtin, message):
    error = cls()
    assert issubclass(cls, builtin)
    assert issubclass(cls, MatchError)
    assert error.args == (message,)
    assert str(error) == message