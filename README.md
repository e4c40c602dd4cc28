# lightning

An in-memory matching engine for spot trading pairs. Each pair has its own
order book (`lightning.orderbook.Orderbook`). Bids are kept highest price
first and asks lowest price first. Orders at the same price keep their
arrival order. Both sides are held in skip lists
(`lightning.skiplist.SkipList` and `SkipListDesc`).

The engine only matches. Every fill, and every cancelled remainder, is
reported as a `lightning.models.Trade` to a message queue that you supply.
Settlement, persistence and candles belong to the services that read that
queue.

## Order kinds

Orders are `lightning.models.Order` records. Prices and amounts are
`decimal.Decimal`.

| side          | type     | time in force | behaviour                                                     |
|---------------|----------|---------------|---------------------------------------------------------------|
| `buy`/`sell`  | `limit`  | `GTC`         | matches what it can, and the rest rests on the book           |
| `buy`/`sell`  | `limit`  | `IOC`         | matches what it can, and the rest is cancelled                |
| `buy`/`sell`  | `limit`  | `FOK`         | fills completely at once, or is cancelled without trading     |
| `buy`/`sell`  | `market` | ignored       | sweeps the opposite side, and any unfilled rest is cancelled  |

Fills take place at the resting maker's price. A cancellation is sent as a
`Trade` whose taker order type is `cancel`. The maker and taker in that
trade are the cancelled order itself. `Order.to_dict()` and
`Trade.to_dict()` give the records keyed by short wire field names.

## Receiving trades

Subclass `lightning.mq.MessageQueue` and implement `push_trade`. The
built-in `lightning.mq.LogMQ` only writes each batch to the `logging`
module at INFO level, which is useful while developing. `new_mq()` returns
a `LogMQ`.

```python
from lightning.mq import MessageQueue


class ListQueue(MessageQueue):
    def __init__(self):
        self.trades = []

    def push_trade(self, *trades):
        self.trades.extend(trades)
```

## Running an engine

`lightning.app.wire_app(pairs, mq=None)` builds the whole application as
an `App`. It holds a shared `Status`, one order book per pair, each running
its matching loop on a daemon thread, the `MatchPool` that routes requests
by pair, and the `MatchServer` front end. When no queue is given, a
`LogMQ` is used.

```python
from lightning.app import wire_app
from lightning.server import OrderRequest

with wire_app(["BTC-USDT", "ETH-USDT"], ListQueue()) as app:
    app.server.add_order(OrderRequest(
        id="1", user_id=2, pair="BTC-USDT", price="21000", amount="2",
        side="buy", type="limit", time_in_force="GTC",
    ))
    app.server.cancel_order("BTC-USDT", "1")
```

`MatchServer.add_order` takes an `OrderRequest` whose price and amount are
text. `MatchServer.cancel_order(pair, id)` takes a pair and an order id.
When a request is accepted, both return a `ReplyResult` with code `0` and
message `"success"`. A rejected request raises an error instead. A price
or amount that does not parse raises `ValueError` ("price error" or
"amount error"). An unknown pair raises `PairError`. A full queue raises
`OrderTimeoutError`, and a stopped service raises `ClosedError`.

Requests are queued and then applied in arrival order by the book's loop,
so an accepted reply means "queued", not "filled". Fills arrive on your
queue. An order with a bad side, type or time in force, or a cancellation
of an unknown id, is rejected in the loop. This is logged as a warning and
is not returned to the caller.

To match synchronously without threads, call `Orderbook.process_add(order)`
and `Orderbook.process_cancel(order_id)` directly. These raise the errors
above at once. `Orderbook.bids()` and `Orderbook.asks()` list the resting
orders best first. `MatchPool.orderbook(pair)` returns the book of a pair.

`App.close()` stops the matching loops and waits for them to finish.
Leaving the `with` block has the same effect.

For a graceful shutdown on SIGINT, SIGTERM or SIGQUIT, call
`app.signal_handle.begin()` from the main thread. When a signal arrives,
it stops the shared `Status`, waits for the work in flight, and then exits
with status 0.

## Errors

Every error the engine raises itself derives from
`lightning.errors.MatchError`: `MqError`, `OrderTimeoutError`,
`ClosedError`, `OrderSideError`, `OrderTypeError`,
`OrderTimeInForceError`, `OrderIdError` and `PairError`.

## What is not included

The package has no network listener and no command-line program.
`MatchServer` is a plain Python object, so exposing it over RPC or HTTP is
up to you. Order books live only in memory. Nothing is persisted, and
resting orders are lost when the process ends.