"""
Moving averages: SMA, SMA-seeded EMA, and trend helpers built on them.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar
from trade_intel.indicators._series import check_period, closes, require


def sma(bars: Sequence[Bar], period: int) -> float:
    """Arithmetic mean of the last `period` closes."""
    check_period(period)
    require(bars, period, "SMA")
    return float(np.mean(closes(bars)[-period:]))


def _ema_values(values: np.ndarray, period: int) -> np.ndarray:
    out = np.full(len(values), np.nan)
    multiplier = 2.0 / (period + 1)
    value = float(np.mean(values[:period]))
    out[period - 1] = value
    for i in range(period, len(values)):
        value = (values[i] - value) * multiplier + value
        out[i] = value
    return out


def ema_series(bars: Sequence[Bar], period: int) -> np.ndarray:
    """
    EMA after every bar. Entry i equals ema(bars[:i + 1], period);
    entries before the SMA seed (i < period - 1) are NaN.
    """
    check_period(period)
    require(bars, period, "EMA")
    return _ema_values(closes(bars), period)


def ema(bars: Sequence[Bar], period: int) -> float:
    """
    Exponential moving average, seeded with the SMA of the first `period`
    closes and smoothed forward with multiplier 2 / (period + 1).
    """
    return float(ema_series(bars, period)[-1])


def is_uptrend(bars: Sequence[Bar], short_period: int, long_period: int) -> bool:
    """Short SMA above long SMA. False when history is shorter than long_period."""
    if len(bars) < long_period:
        return False
    return sma(bars, short_period) > sma(bars, long_period)


def is_downtrend(bars: Sequence[Bar], short_period: int, long_period: int) -> bool:
    if len(bars) < long_period:
        return False
    return sma(bars, short_period) < sma(bars, long_period)
