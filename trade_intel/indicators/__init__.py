"""
Technical indicators: pure functions over ascending bar sequences.
Every function raises InsufficientDataError when the history is too short.
"""

from trade_intel.indicators.moving_averages import sma, ema, ema_series, is_uptrend, is_downtrend
from trade_intel.indicators.rsi import rsi
from trade_intel.indicators.macd import macd, MACDResult
from trade_intel.indicators.volatility import bollinger_bands, BollingerBands, atr, true_ranges
from trade_intel.indicators.stochastic import stochastic, StochasticResult
from trade_intel.indicators.volume import volume_ratio

__all__ = [
    "sma",
    "ema",
    "ema_series",
    "is_uptrend",
    "is_downtrend",
    "rsi",
    "macd",
    "MACDResult",
    "bollinger_bands",
    "BollingerBands",
    "atr",
    "true_ranges",
    "stochastic",
    "StochasticResult",
    "volume_ratio",
]
