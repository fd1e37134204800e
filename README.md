# mktfeed

Normalised market data models for exchange feeds, with order book upkeep and
transformers that turn exchange messages into market events. The package has
no dependencies outside the standard library.

## Modules

- `mktfeed.model`: the shared models `Side`, `InstrumentKind`, `SubKind`,
  `Instrument`, `Exchange` and `MarketEvent`, and the errors `SocketError`,
  `UnsupportedError` and `UnidentifiableError`.
- `mktfeed.subscription`: `Subscription`, `SubscriptionMap` and
  `SubscriptionMeta`.
- `mktfeed.levels`: `Level`, `OrderBookSide`, `mid_price` and
  `volume_weighted_mid_price`.
- `mktfeed.book`: `OrderBookL1`, `OrderBook` and `book_events`.
- `mktfeed.kinds`: `Candle`, `Liquidation` and `PublicTrade`.
- `mktfeed.transformer`: `OrderBookUpdater`, `InstrumentOrderBook`,
  `MultiBookTransformer` and `StatelessTransformer`.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Instruments and exchanges

An `Instrument` is a frozen `base`, `quote` and `kind` (an `InstrumentKind`).
`Instrument.from_tuple(("btc", "usdt", "spot"))` builds one from a tuple.
An `Exchange` has a `name` and two flags, `spot` and `futures`. The flags are
read back through `supports_spot()` and `supports_futures()`.

```python
from mktfeed.model import Exchange, InstrumentKind, SubKind

okx = Exchange("okx", spot=True, futures=True)
```

## Subscriptions

```python
from mktfeed.subscription import Subscription

sub = Subscription.from_parts(okx, "btc", "usdt", InstrumentKind.SPOT, SubKind.PUBLIC_TRADES)
sub.validate()        # returns sub, or raises UnsupportedError
str(sub)              # "okx_public_trades(btc_usdt, spot)"
```

`validate()` returns the subscription when the exchange supports its
instrument kind. Otherwise it raises `UnsupportedError`.

`to_dict()` produces a flat mapping with the keys `exchange`, `base`, `quote`,
`instrument_type` and `kind`. `Subscription.from_dict(data, exchanges)` reads
that mapping back and looks the exchange up by name in `exchanges`. It also
accepts `type` in place of `kind`. It raises `ValueError` when a field is
missing or the exchange name is unknown.

`SubscriptionMap` is a read-only mapping from subscription ids to values such
as instruments. `find(subscription_id)` raises `UnidentifiableError` when the
id is not known. `SubscriptionMeta` pairs an instrument map with a list of
subscription payloads.

## Order books

```python
from mktfeed.model import Side
from mktfeed.levels import Level, OrderBookSide

bids = OrderBookSide(Side.BUY, [Level(100.0, 1.0), (90.0, 2.0)])
bids.upsert_single(Level(110.0, 1.0))   # insert a new level
bids.upsert_single((90.0, 0.0))         # an amount of zero removes the level
bids.sort()                             # bids are sorted highest first
```

Levels compare by price and then by amount. `Level.eq_price(price)` matches
prices that lie within machine epsilon of each other. Wherever a level is
expected, a `(price, amount)` tuple is accepted too.

`OrderBookSide.upsert_single` works as follows:

- an existing price with an amount of zero removes that level
- an existing price with a positive amount replaces that level
- a new price with a positive amount is appended
- a new price with an amount of zero is logged at debug level and ignored

`upsert(levels)` applies `upsert_single` to each level in turn. `sort()` puts
asks in ascending order and bids in descending order.

`OrderBookL1` holds a `best_bid` and a `best_ask` and has `mid_price()` and
`volume_weighted_mid_price()` (the micro-price). `OrderBook` has `bids`,
`asks` and `last_update_time`, and offers the same two methods. They use the
first level on each side. When one side is empty they return the other side's
first price, and when both sides are empty they return `None`.
`OrderBook.snapshot()` sorts both sides in place and returns an independent
copy. `book_events(exchange, instrument, book)` wraps a book in a one-element
list holding a `MarketEvent`, whose `received_time` is the current UTC time.

## Other event models

`Candle` (OHLCV with `close_time` and `trade_count`), `Liquidation` and
`PublicTrade` are plain dataclasses. Numeric fields are converted to `float`,
and side strings are converted to `Side`. A negative `trade_count` raises
`ValueError`.

## Transformers

A message is identified by its `subscription_id` attribute. Messages without
one produce an empty list. An id that is not in the transformer's map raises
`UnidentifiableError`.

- `await StatelessTransformer.create(exchange, to_events, ws_sink, instrument_map)`
  builds a stateless transformer. `transform(message)` looks up the
  instrument and returns `list(to_events(exchange, instrument, message))`.
- `await MultiBookTransformer.create(exchange, updater_type, ws_sink, instrument_map)`
  awaits `updater_type.init(ws_sink, instrument)` for every instrument
  concurrently. `transform(update)` passes the update to that book's
  updater. If the updater returns a snapshot, the snapshot is emitted through
  `book_events`. Errors raised by the updater propagate to the caller.

To support an exchange's order book feed, subclass `OrderBookUpdater` and
implement the async classmethod `init`, which returns an
`InstrumentOrderBook`, and the method `update`.

## What is not included

The package has no exchange connectors and no command-line program. It does
not open websocket or HTTP connections, and it contains no `OrderBookUpdater`
for any particular exchange. You supply the exchanges, the message types, the
updaters and the `to_events` functions, and you feed the transformers
yourself.