"""
Stochastic oscillator (%K, %D).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar
from trade_intel.indicators._series import check_period, closes, highs, lows, require


@dataclass(frozen=True)
class StochasticResult:
    k: float
    d: float


def stochastic(bars: Sequence[Bar], period: int = 14, d_period: int = 3) -> StochasticResult:
    """
    %K for each of the trailing `d_period` windows of `period` bars:
    (close - lowest low) / (highest high - lowest low) * 100, or 50 when the
    range is zero. %D is the mean of those %K values; with fewer than
    period + d_period - 1 bars fewer windows fit and %D averages what exists.
    """
    check_period(period, d_period)
    require(bars, period, "Stochastic")
    high, low, close = highs(bars), lows(bars), closes(bars)
    n = len(bars)
    start = max(0, n - (period + d_period - 1))

    k_values = []
    for end in range(start + period, n + 1):
        highest = float(np.max(high[end - period:end]))
        lowest = float(np.min(low[end - period:end]))
        price_range = highest - lowest
        k_values.append(50.0 if price_range == 0 else (float(close[end - 1]) - lowest) / price_range * 100.0)

    percent_k = k_values[-1]
    percent_d = float(np.mean(k_values[-d_period:]))
    return StochasticResult(k=percent_k, d=percent_d)
