from datetime import datetime, timezone

import pytest

from mktfeed.model import (
    Exchange,
    Instrument,
    InstrumentKind,
    MarketEvent,
    Side,
    SocketError,
    SubKind,
    UnidentifiableError,
    UnsupportedError,
)


def test_instrument_from_tuple():
    instrument = Instrument.from_tuple(("base", "quote", InstrumentKind.SPOT))
    assert instrument == Instrument("base", "quote", InstrumentKind.SPOT)


def test_instrument_from_tuple_accepts_kind_text():
    instrument = Instrument.from_tuple(("btc", "usdt", "future_perpetual"))
    assert instrument.kind is InstrumentKind.FUTURE_PERPETUAL


def test_instrument_from_tuple_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Instrument.from_tuple(("btc", "usdt"))


def test_instrument_from_tuple_rejects_unknown_kind():
    with pytest.raises(ValueError):
        Instrument.from_tuple(("btc", "usdt", "option"))


def test_instrument_is_hashable_and_equal_by_value():
    one = Instrument("btc", "usdt", InstrumentKind.SPOT)
    two = Instrument.from_tuple(("btc", "usdt", "spot"))
    assert {one: 1}[two] == 1


def test_instrument_text_contains_parts():
    text = str(Instrument("btc", "usdt", InstrumentKind.SPOT))
    assert "btc" in text and "usdt" in text and "spot" in text


def test_enum_text_forms():
    assert str(InstrumentKind.FUTURE_PERPETUAL) == "future_perpetual"
    assert str(SubKind.ORDER_BOOKS_L2) == "order_books_l2"
    assert SubKind("public_trades") is SubKind.PUBLIC_TRADES


def test_side_values():
    assert Side("buy") is Side.BUY
    assert Side("sell") is Side.SELL


@pytest.mark.parametrize(
    "exchange, spot, futures",
    [
        (Exchange("coinbase", spot=True), True, False),
        (Exchange("okx", spot=True, futures=True), True, True),
        (Exchange("binance_futures_usd", futures=True), False, True),
    ],
)
def test_exchange_support(exchange, spot, futures):
    assert exchange.supports_spot() is spot
    assert exchange.supports_futures() is futures


def test_exchange_text_is_name():
    assert str(Exchange("okx")) == "okx"


def test_unsupported_error_carries_details():
    error = UnsupportedError("coinbase", "future_perpetual")
    assert isinstance(error, SocketError)
    assert error.entity == "coinbase"
    assert error.item == "future_perpetual"


def test_unidentifiable_error_carries_id():
    error = UnidentifiableError("not present")
    assert isinstance(error, SocketError)
    assert error.subscription_id == "not present"


def test_market_event_holds_fields():
    now = datetime.now(timezone.utc)
    instrument = Instrument("btc", "usdt", InstrumentKind.SPOT)
    event = MarketEvent(now, now, "okx", instrument, kind=42)
    assert event.instrument == instrument
    assert event.kind == 42
    assert event.exchange_time == event.received_time == now