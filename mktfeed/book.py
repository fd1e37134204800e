"""Normalised order book snapshots and the market events built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from mktfeed.levels import Level, OrderBookSide, mid_price, volume_weighted_mid_price
from mktfeed.model import Exchange, Instrument, MarketEvent, Side

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class OrderBookL1:
    """The latest best bid and best ask of an order book."""

    best_bid: Level
    best_ask: Level
    last_update_time: datetime = _EPOCH

    def mid_price(self) -> float:
        """Average of the best bid and ask prices."""
        return mid_price(self.best_bid.price, self.best_ask.price)

    def volume_weighted_mid_price(self) -> float:
        """Best bid and ask prices weighted by their amounts (micro-price)."""
        return volume_weighted_mid_price(self.best_bid, self.best_ask)


@dataclass
class OrderBook:
    """A full order book with a bid side and an ask side."""

    bids: OrderBookSide = field(default_factory=lambda: OrderBookSide(Side.BUY))
    asks: OrderBookSide = field(default_factory=lambda: OrderBookSide(Side.SELL))
    last_update_time: datetime = _EPOCH

    def snapshot(self) -> "OrderBook":
        """Sort both sides in place and return an independent copy."""
        self.bids.sort()
        self.asks.sort()
        return OrderBook(
            bids=OrderBookSide(self.bids.side, list(self.bids.levels)),
            asks=OrderBookSide(self.asks.side, list(self.asks.levels)),
            last_update_time=self.last_update_time,
        )

    def _best(self) -> tuple[Optional[Level], Optional[Level]]:
        best_bid = self.bids.levels[0] if self.bids.levels else None
        best_ask = self.asks.levels[0] if self.asks.levels else None
        return best_bid, best_ask

    def mid_price(self) -> Optional[float]:
        """Mid price of the first level on each side.

        With only one side populated its first price is returned; with
        neither, None.
        """
        best_bid, best_ask = self._best()
        if best_bid is not None and best_ask is not None:
            return mid_price(best_bid.price, best_ask.price)
        if best_bid is not None:
            return best_bid.price
        if best_ask is not None:
            return best_ask.price
        return None

    def volume_weighted_mid_price(self) -> Optional[float]:
        """Micro-price of the first level on each side, with the same fallbacks as mid_price."""
        best_bid, best_ask = self._best()
        if best_bid is not None and best_ask is not None:
            return volume_weighted_mid_price(best_bid, best_ask)
        if best_bid is not None:
            return best_bid.price
        if best_ask is not None:
            return best_ask.price
        return None


def book_events(
    exchange: Exchange | str, instrument: Instrument, book: OrderBook
) -> list[MarketEvent[OrderBook]]:
    """Wrap an order book snapshot in a single market event."""
    return [
        MarketEvent(
            exchange_time=book.last_update_time,
            received_time=datetime.now(timezone.utc),
            exchange=str(exchange),
            instrument=instrument,
            kind=book,
        )
    ]