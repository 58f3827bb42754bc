"""Core: config, types, errors, logging."""

from trade_intel.core.config import load_config, Config
from trade_intel.core.errors import (
    TradeIntelError,
    InsufficientDataError,
    UnknownStrategyError,
    NotBacktestableError,
    EmptyHistoryError,
    StrategyValidationError,
)
from trade_intel.core.types import Bar, Signal, SignalType, Position, Trade, EquityPoint
from trade_intel.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "TradeIntelError",
    "InsufficientDataError",
    "UnknownStrategyError",
    "NotBacktestableError",
    "EmptyHistoryError",
    "StrategyValidationError",
    "Bar",
    "Signal",
    "SignalType",
    "Position",
    "Trade",
    "EquityPoint",
    "setup_logging",
]
