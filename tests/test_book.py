from datetime import datetime, timezone

import pytest

from mktfeed.book import OrderBook, OrderBookL1, book_events
from mktfeed.levels import Level, OrderBookSide
from mktfeed.model import Exchange, Instrument, InstrumentKind, Side


def _book(bids, asks):
    return OrderBook(
        bids=OrderBookSide(Side.BUY, [Level(p, a) for p, a in bids]),
        asks=OrderBookSide(Side.SELL, [Level(p, a) for p, a in asks]),
    )


@pytest.mark.parametrize(
    "bid, ask, expected",
    [
        ((100, 999999), (200, 1), 150.0),
        ((50, 1), (250, 999999), 150.0),
        ((10, 999999), (250, 999999), 130.0),
    ],
)
def test_l1_mid_price(bid, ask, expected):
    book = OrderBookL1(best_bid=Level(*bid), best_ask=Level(*ask))
    assert book.mid_price() == expected


@pytest.mark.parametrize(
    "bid, ask, expected",
    [
        ((100, 100), (200, 100), 150.0),
        ((100, 600), (200, 1000), 137.5),
        ((1000, 999999), (1000, 999999), 1000.0),
    ],
)
def test_l1_volume_weighted_mid_price(bid, ask, expected):
    book = OrderBookL1(best_bid=Level(*bid), best_ask=Level(*ask))
    assert book.volume_weighted_mid_price() == expected


BOOK_CASES = [
    ([], [], None),
    ([(100.0, 100.0), (50.0, 100.0)], [], 100.0),
    ([], [(50.0, 100.0), (100.0, 100.0)], 50.0),
    ([(100.0, 100.0), (50.0, 100.0)], [(200.0, 100.0), (300.0, 100.0)], 150.0),
]


@pytest.mark.parametrize("bids, asks, expected", BOOK_CASES)
def test_book_mid_price(bids, asks, expected):
    assert _book(bids, asks).mid_price() == expected


@pytest.mark.parametrize(
    "bids, asks, expected",
    BOOK_CASES
    + [([(100.0, 3000.0), (50.0, 100.0)], [(200.0, 1000.0), (300.0, 100.0)], 175.0)],
)
def test_book_volume_weighted_mid_price(bids, asks, expected):
    assert _book(bids, asks).volume_weighted_mid_price() == expected


def test_snapshot_sorts_sides_and_copies():
    book = _book([(90, 1), (110, 1), (100, 1)], [(130, 1), (120, 1), (125, 1)])
    snap = book.snapshot()
    assert [l.price for l in snap.bids.levels] == [110.0, 100.0, 90.0]
    assert [l.price for l in snap.asks.levels] == [120.0, 125.0, 130.0]
    assert book.bids.levels == snap.bids.levels
    book.bids.upsert_single(Level(200, 1))
    assert len(snap.bids.levels) == 3
    assert snap.mid_price() == 115.0


def test_default_last_update_time_is_epoch():
    book = OrderBook()
    assert book.last_update_time == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert book.mid_price() is None


def test_book_events_wraps_book():
    ts = datetime(2023, 5, 1, 12, 0, tzinfo=timezone.utc)
    book = _book([(100, 1)], [(101, 1)])
    book.last_update_time = ts
    instrument = Instrument("btc", "usdt", InstrumentKind.SPOT)
    events = book_events(Exchange("okx", spot=True), instrument, book)
    assert len(events) == 1
    event = events[0]
    assert event.exchange == "okx"
    assert event.exchange_time == ts
    assert event.instrument == instrument
    assert event.kind is book
    assert event.received_time >= ts