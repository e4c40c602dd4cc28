import threading
import time
from decimal import Decimal

import pytest

from lightning.errors import ClosedError, MqError, PairError
from lightning.models import BUY, CANCEL, LIMIT, SELL, TIME_IN_FORCE_GTC, Order
from lightning.mq import MessageQueue
from lightning.pool import MatchPool
from lightning.status import Status

PAIRS = ["BTC-USDT", "ETH-USDT"]


class RecordingMQ(MessageQueue):
    def __init__(self):
        self._lock = threading.Lock()
        self._trades = []

    def push_trade(self, *args):
        with self._lock:
            self._trades.extend(args)

    def trades(self):
        with self._lock:
            return list(self._trades)


def wait_until(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def make_order(order_id, side, price, amount, pair="BTC-USDT"):
    return Order(
        id=order_id,
        user_id=2,
        pair=pair,
        price=Decimal(price),
        amount=Decimal(amount),
        side=side,
        type=LIMIT,
        time_in_force=TIME_IN_FORCE_GTC,
    )


@pytest.fixture
def setup():
    status = Status()
    mq = RecordingMQ()
    pool = MatchPool(status, PAIRS, mq)
    yield status, mq, pool
    status.stop()
    status.wait(3)


def test_pairs_listed(setup):
    _, _, pool = setup
    assert pool.pairs == tuple(PAIRS)


def test_add_order_matches_resting_order(setup):
    _, mq, pool = setup
    pool.add_order(make_order("1", BUY, "21000", "2"))
    pool.add_order(make_order("2", SELL, "21000", "1"))
    assert wait_until(lambda: len(mq.trades()) >= 1)
    trade = mq.trades()[0]
    assert trade.maker_id == "1"
    assert trade.taker_id == "2"
    assert trade.price == "21000"
    assert trade.amount == "1"
    book = pool.orderbook("BTC-USDT")
    assert wait_until(lambda: [o.amount for o in book.bids()] == [Decimal(1)])
    assert book.asks() == []


def test_add_order_unknown_pair(setup):
    _, _, pool = setup
    with pytest.raises(PairError):
        pool.add_order(make_order("1", BUY, "21000", "2", pair="DOGE-USDT"))


def test_cancel_order_unknown_pair(setup):
    _, _, pool = setup
    with pytest.raises(PairError):
        pool.cancel_order("DOGE-USDT", "1")


def test_cancel_order_removes_resting_order(setup):
    _, mq, pool = setup
    book = pool.orderbook("BTC-USDT")
    pool.add_order(make_order("1", BUY, "21000", "2"))
    assert wait_until(lambda: len(book.bids()) == 1)
    pool.cancel_order("BTC-USDT", "1")
    assert wait_until(lambda: len(mq.trades()) == 1)
    record = mq.trades()[0]
    assert record.taker_order_type == CANCEL
    assert record.maker_id == record.taker_id == "1"
    assert record.amount == "2"
    assert book.bids() == []


def test_orders_routed_by_pair(setup):
    _, _, pool = setup
    eth = pool.orderbook("ETH-USDT")
    btc = pool.orderbook("BTC-USDT")
    pool.add_order(make_order("7", SELL, "1500", "3", pair="ETH-USDT"))
    assert wait_until(lambda: len(eth.asks()) == 1)
    assert eth.asks()[0].id == "7"
    assert btc.asks() == []
    assert eth.pair == "ETH-USDT"


def test_orderbook_unknown_pair(setup):
    _, _, pool = setup
    with pytest.raises(PairError):
        pool.orderbook("XRP-USDT")


def test_missing_mq_raises():
    status = Status()
    with pytest.raises(MqError):
        MatchPool(status, PAIRS, None)
    assert status.pending == 0


def test_stopped_pool_rejects_orders(setup):
    status, _, pool = setup
    status.stop()
    assert status.wait(3) is True
    with pytest.raises(ClosedError):
        pool.add_order(make_order("1", BUY, "21000", "2"))
    with pytest.raises(ClosedError):
        pool.cancel_order("BTC-USDT", "1")