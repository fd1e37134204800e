"""Normalised candle, liquidation and public trade models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from mktfeed.model import Side


@dataclass(order=True)
class Candle:
    """An OHLCV candle closing at ``close_time``."""

    close_time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float
    trade_count: int

    def __post_init__(self) -> None:
        self.open = float(self.open)
        self.high = float(self.high)
        self.low = float(self.low)
        self.close = float(self.close)
        self.volume = float(self.volume)
        if self.trade_count < 0:
            raise ValueError(f"trade_count must not be negative: {self.trade_count}")
        self.trade_count = int(self.trade_count)


@dataclass(order=True)
class Liquidation:
    """A forced liquidation of a position."""

    side: Side
    price: float
    quantity: float
    time: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.side, Side):
            self.side = Side(self.side)
        self.price = float(self.price)
        self.quantity = float(self.quantity)


@dataclass(order=True)
class PublicTrade:
    """A trade executed on an exchange and published to all."""

    id: str
    price: float
    amount: float
    side: Side

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.price = float(self.price)
        self.amount = float(self.amount)
        if not isinstance(self.side, Side):
            self.side = Side(self.side)