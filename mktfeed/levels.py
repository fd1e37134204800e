"""Order book price levels and the sides of an order book that hold them."""

from __future__ import annotations

import logging
import math
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

from mktfeed.model import Side

logger = logging.getLogger(__name__)

LevelLike = Union["Level", tuple]


@dataclass(frozen=True, order=True)
class Level:
    """A price level: a price and the amount available at it.

    Levels order by price first, then by amount.
    """

    price: float = 0.0
    amount: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", float(self.price))
        object.__setattr__(self, "amount", float(self.amount))

    @classmethod
    def from_pair(cls, pair: tuple) -> "Level":
        """Build a level from a ``(price, amount)`` pair."""
        try:
            price, amount = pair
        except (TypeError, ValueError) as exc:
            raise ValueError(f"expected (price, amount), got {pair!r}") from exc
        return cls(price, amount)

    def eq_price(self, price: float) -> bool:
        """Return True if the price matches this level's price within machine epsilon."""
        return abs(price - self.price) < sys.float_info.epsilon


def _as_level(value: LevelLike) -> Level:
    if isinstance(value, Level):
        return value
    return Level.from_pair(value)


@dataclass
class OrderBookSide:
    """The levels on one side of an order book."""

    side: Side
    levels: list[Level] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.side, Side):
            self.side = Side(self.side)
        self.levels = [_as_level(level) for level in self.levels]

    def upsert(self, levels: Iterable[LevelLike]) -> None:
        """Upsert each of the given levels in turn."""
        for level in levels:
            self.upsert_single(level)

    def upsert_single(self, new_level: LevelLike) -> None:
        """Insert, replace or remove a single level.

        An existing level at the same price is removed when the new amount is
        zero and replaced otherwise. A new price is appended when its amount is
        positive; a removal of an unknown price is logged and ignored.
        """
        new_level = _as_level(new_level)
        index = next(
            (i for i, level in enumerate(self.levels) if level.eq_price(new_level.price)),
            None,
        )
        if index is not None:
            if new_level.amount == 0.0:
                del self.levels[index]
            else:
                self.levels[index] = new_level
        elif new_level.amount > 0.0:
            self.levels.append(new_level)
        else:
            logger.debug("Level to remove not found: %r (side=%s)", new_level, self.side)

    def sort(self) -> None:
        """Sort the levels ascending, or descending for bids."""
        self.levels.sort(reverse=self.side is Side.BUY)


def mid_price(best_bid_price: float, best_ask_price: float) -> float:
    """Average of the best bid and best ask prices."""
    return (best_bid_price + best_ask_price) / 2.0


def volume_weighted_mid_price(best_bid: Level, best_ask: Level) -> float:
    """Micro-price: bid and ask prices weighted by the opposite side's amount."""
    numerator = best_bid.price * best_ask.amount + best_ask.price * best_bid.amount
    total = best_bid.amount + best_ask.amount
    if total == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / total