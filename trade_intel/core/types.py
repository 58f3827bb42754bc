"""
Core data types for bars, signals, positions, trades and equity points.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class Bar:
    """OHLCV candle."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class Signal:
    """Directional recommendation produced by a strategy."""
    signal_type: SignalType
    confidence: float
    reasoning: str
    target_price: Optional[float] = None
    stop_loss: Optional[float] = None
    symbol: str = ""
    strategy: str = ""
    metadata: dict = field(default_factory=dict)

    @classmethod
    def hold(cls, reasoning: str, confidence: float = 0.0, **kwargs) -> "Signal":
        return cls(signal_type=SignalType.HOLD, confidence=confidence, reasoning=reasoning, **kwargs)


@dataclass(frozen=True)
class Position:
    """Open simulated position (long only)."""
    entry_time: datetime
    entry_price: float
    quantity: int
    side: SignalType = SignalType.BUY


@dataclass(frozen=True)
class Trade:
    """Closed trade for analytics."""
    entry_time: datetime
    exit_time: datetime
    side: SignalType
    entry_price: float
    exit_price: float
    quantity: int
    pnl: float
    pnl_pct: float
    holding_period_days: int
    exit_reason: str = "signal"  # "signal" | "end_of_data"


@dataclass(frozen=True)
class EquityPoint:
    """Account equity after a processed bar."""
    timestamp: datetime
    equity: float
    drawdown: float
