"""Core market data models shared across the package."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class _StrEnum(str, Enum):
    """String valued enum whose text form is its value."""

    def __str__(self) -> str:
        return self.value


class Side(_StrEnum):
    """Side of a trade or of an order book."""

    BUY = "buy"
    SELL = "sell"


class InstrumentKind(_StrEnum):
    """Kind of tradable instrument."""

    SPOT = "spot"
    FUTURE_PERPETUAL = "future_perpetual"


class SubKind(_StrEnum):
    """Kind of market data a subscription yields."""

    PUBLIC_TRADES = "public_trades"
    ORDER_BOOKS_L1 = "order_books_l1"
    ORDER_BOOKS_L2 = "order_books_l2"
    ORDER_BOOKS_L3 = "order_books_l3"
    CANDLES = "candles"
    LIQUIDATIONS = "liquidations"


@dataclass(frozen=True)
class Instrument:
    """A tradable pair of symbols of a given kind."""

    base: str
    quote: str
    kind: InstrumentKind

    def __post_init__(self) -> None:
        if not isinstance(self.kind, InstrumentKind):
            object.__setattr__(self, "kind", InstrumentKind(self.kind))

    @classmethod
    def from_tuple(cls, value: tuple) -> "Instrument":
        """Build an instrument from a ``(base, quote, kind)`` tuple."""
        try:
            base, quote, kind = value
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"expected (base, quote, kind), got {value!r}"
            ) from exc
        return cls(str(base), str(quote), InstrumentKind(kind))

    def __str__(self) -> str:
        return f"({self.base}_{self.quote}, {self.kind})"


@dataclass(frozen=True)
class Exchange:
    """An exchange identifier together with the instrument kinds it supports."""

    name: str
    spot: bool = False
    futures: bool = False

    def supports_spot(self) -> bool:
        return self.spot

    def supports_futures(self) -> bool:
        return self.futures

    def __str__(self) -> str:
        return self.name


@dataclass
class MarketEvent(Generic[T]):
    """A normalised market event produced from exchange data."""

    exchange_time: datetime
    received_time: datetime
    exchange: str
    instrument: Instrument
    kind: T


class SocketError(Exception):
    """Base error for problems with exchange streams."""


class UnsupportedError(SocketError):
    """An exchange does not support the requested item."""

    def __init__(self, entity: str, item: str) -> None:
        super().__init__(f"{entity} does not support: {item}")
        self.entity = entity
        self.item = item


class UnidentifiableError(SocketError):
    """A subscription id could not be matched to a known subscription."""

    def __init__(self, subscription_id: str) -> None:
        super().__init__(f"unable to identify subscription id: {subscription_id}")
        self.subscription_id = subscription_id