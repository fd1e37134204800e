"""Transformers that turn exchange messages into normalised market events."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Optional, Protocol, TypeVar

from mktfeed.book import OrderBook, book_events
from mktfeed.model import Exchange, Instrument, MarketEvent
from mktfeed.subscription import SubscriptionMap

U = TypeVar("U", bound="OrderBookUpdater")


class _Identifiable(Protocol):
    subscription_id: Optional[str]


def _subscription_id(message: Any) -> Optional[str]:
    return getattr(message, "subscription_id", None)


@dataclass
class InstrumentOrderBook(Generic[U]):
    """An order book for one instrument with the updater that maintains it."""

    instrument: Instrument
    updater: U
    book: OrderBook


class OrderBookUpdater(ABC):
    """Defines how exchange specific updates are applied to an order book."""

    @classmethod
    @abstractmethod
    async def init(cls, ws_sink: Any, instrument: Instrument) -> InstrumentOrderBook:
        """Build the starting order book for an instrument.

        ``ws_sink`` may be used to send messages back to the exchange.
        """

    @abstractmethod
    def update(self, book: OrderBook, update: Any) -> Optional[OrderBook]:
        """Apply an update to the book, returning a snapshot to publish or None."""


class MultiBookTransformer:
    """Maintains one order book per subscription and emits book snapshots."""

    def __init__(
        self,
        exchange: Exchange,
        book_map: SubscriptionMap[InstrumentOrderBook],
    ) -> None:
        self.exchange = exchange
        self.book_map = book_map

    @classmethod
    async def create(
        cls,
        exchange: Exchange,
        updater_type: type[OrderBookUpdater],
        ws_sink: Any,
        instrument_map: Mapping[str, Instrument],
    ) -> "MultiBookTransformer":
        """Initialise an order book for every subscription concurrently."""
        sub_ids = list(instrument_map)
        books = await asyncio.gather(
            *(updater_type.init(ws_sink, instrument_map[sub_id]) for sub_id in sub_ids)
        )
        return cls(exchange, SubscriptionMap(zip(sub_ids, books)))

    def transform(self, update: _Identifiable) -> list[MarketEvent[OrderBook]]:
        """Apply an update to its book and return any resulting events.

        Updates without a subscription id yield nothing; an unknown id raises
        UnidentifiableError; errors from the updater propagate.
        """
        subscription_id = _subscription_id(update)
        if subscription_id is None:
            return []
        entry = self.book_map.find(subscription_id)
        snapshot = entry.updater.update(entry.book, update)
        if snapshot is None:
            return []
        return book_events(self.exchange, entry.instrument, snapshot)


EventFactory = Callable[[Exchange, Instrument, Any], Iterable[MarketEvent]]


class StatelessTransformer:
    """Converts each message on its own, looking up only its instrument."""

    def __init__(
        self,
        exchange: Exchange,
        to_events: EventFactory,
        instrument_map: SubscriptionMap[Instrument],
    ) -> None:
        self.exchange = exchange
        self.to_events = to_events
        self.instrument_map = instrument_map

    @classmethod
    async def create(
        cls,
        exchange: Exchange,
        to_events: EventFactory,
        ws_sink: Any,
        instrument_map: Mapping[str, Instrument],
    ) -> "StatelessTransformer":
        """Build a transformer; the sink is not needed by stateless streams."""
        if not isinstance(instrument_map, SubscriptionMap):
            instrument_map = SubscriptionMap(instrument_map)
        return cls(exchange, to_events, instrument_map)

    def transform(self, message: _Identifiable) -> list[MarketEvent]:
        """Convert a message into market events for its instrument.

        Messages without a subscription id yield nothing; an unknown id raises
        UnidentifiableError.
        """
        subscription_id = _subscription_id(message)
        if subscription_id is None:
            return []
        instrument = self.instrument_map.find(subscription_id)
        return list(self.to_events(self.exchange, instrument, message))