"""
Error taxonomy. InsufficientDataError is recoverable (strategies turn it into
HOLD); the rest are surfaced to the caller.
"""

from __future__ import annotations
from datetime import datetime
from typing import Optional


class TradeIntelError(ValueError):
    """Base class for errors raised by the engine."""


class InsufficientDataError(TradeIntelError):
    def __init__(self, required: int, available: int, indicator: str = ""):
        self.required = required
        self.available = available
        self.indicator = indicator
        label = f" for {indicator}" if indicator else ""
        super().__init__(f"Not enough data points{label}: need {required}, have {available}")


class UnknownStrategyError(TradeIntelError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Strategy not found: {name}")


class NotBacktestableError(TradeIntelError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"'{name}' cannot be used in backtesting: it calls external services per bar. "
            "Choose a technical strategy (RSI, MACD, Bollinger Bands, etc.)."
        )


class EmptyHistoryError(TradeIntelError):
    def __init__(self, symbol: str = "", start: Optional[datetime] = None, end: Optional[datetime] = None):
        self.symbol = symbol
        self.start = start
        self.end = end
        span = f" between {start} and {end}" if start or end else ""
        super().__init__(f"No historical data found for {symbol or 'instrument'}{span}")


class StrategyValidationError(TradeIntelError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Strategy validation failed: {name}")
