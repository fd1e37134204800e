"""Subscriptions to exchange market data and lookup of their instruments."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from mktfeed.model import (
    Exchange,
    Instrument,
    InstrumentKind,
    SubKind,
    UnidentifiableError,
    UnsupportedError,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Subscription:
    """A subscription to one kind of data for one instrument on one exchange."""

    exchange: Exchange
    instrument: Instrument
    kind: SubKind

    def __post_init__(self) -> None:
        if isinstance(self.instrument, tuple):
            object.__setattr__(self, "instrument", Instrument.from_tuple(self.instrument))
        if not isinstance(self.kind, SubKind):
            object.__setattr__(self, "kind", SubKind(self.kind))

    @classmethod
    def from_parts(
        cls,
        exchange: Exchange,
        base: str,
        quote: str,
        instrument_kind: InstrumentKind,
        kind: SubKind,
    ) -> "Subscription":
        """Build a subscription from its individual parts."""
        return cls(exchange, Instrument.from_tuple((base, quote, instrument_kind)), kind)

    def validate(self) -> "Subscription":
        """Return self if the exchange supports the instrument kind, else raise."""
        instrument_kind = self.instrument.kind
        if instrument_kind is InstrumentKind.SPOT and self.exchange.supports_spot():
            return self
        if (
            instrument_kind is InstrumentKind.FUTURE_PERPETUAL
            and self.exchange.supports_futures()
        ):
            return self
        raise UnsupportedError(self.exchange.name, str(instrument_kind))

    def to_dict(self) -> dict[str, str]:
        """Serialise into a flat mapping."""
        return {
            "exchange": self.exchange.name,
            "base": self.instrument.base,
            "quote": self.instrument.quote,
            "instrument_type": self.instrument.kind.value,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], exchanges: Mapping[str, Exchange]
    ) -> "Subscription":
        """Deserialise from a flat mapping, resolving the exchange by name.

        The subscription kind may be given under ``kind`` or ``type``.
        """
        try:
            exchange_name = data["exchange"]
            base = data["base"]
            quote = data["quote"]
            instrument_type = data["instrument_type"]
        except KeyError as exc:
            raise ValueError(f"missing field: {exc.args[0]}") from exc
        if "kind" in data:
            kind = data["kind"]
        elif "type" in data:
            kind = data["type"]
        else:
            raise ValueError("missing field: kind")
        try:
            exchange = exchanges[exchange_name]
        except KeyError as exc:
            raise ValueError(f"unknown exchange: {exchange_name}") from exc
        return cls(
            exchange,
            Instrument.from_tuple((base, quote, instrument_type)),
            SubKind(kind),
        )

    def __str__(self) -> str:
        return f"{self.exchange}_{self.kind}{self.instrument}"


class SubscriptionMap(Mapping[str, T], Generic[T]):
    """Maps subscription ids to an associated value, such as an instrument."""

    def __init__(
        self, items: Mapping[str, T] | Iterable[tuple[str, T]] = ()
    ) -> None:
        self._items: dict[str, T] = dict(items)

    def find(self, subscription_id: str) -> T:
        """Return the value for the id, raising UnidentifiableError if absent."""
        try:
            return self._items[subscription_id]
        except KeyError:
            raise UnidentifiableError(subscription_id) from None

    def __getitem__(self, key: str) -> T:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"SubscriptionMap({self._items!r})"


@dataclass
class SubscriptionMeta:
    """Instrument lookup plus the exchange specific payloads to send."""

    instrument_map: SubscriptionMap[Instrument]
    subscriptions: list[str] = field(default_factory=list)