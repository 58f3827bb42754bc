"""
Volatility indicators: Bollinger Bands and ATR.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar
from trade_intel.indicators._series import check_period, closes, highs, lows, require


@dataclass(frozen=True)
class BollingerBands:
    upper: float
    middle: float
    lower: float

    @property
    def width_pct(self) -> float:
        """Band width as a percentage of the middle band."""
        if self.middle == 0:
            return 0.0
        return (self.upper - self.lower) / self.middle * 100.0


def bollinger_bands(bars: Sequence[Bar], period: int = 20, std_dev_multiplier: float = 2.0) -> BollingerBands:
    """Middle = SMA(period); bands = middle +/- k * population std of the last `period` closes."""
    check_period(period)
    require(bars, period, "Bollinger Bands")
    window = closes(bars)[-period:]
    middle = float(np.mean(window))
    band = std_dev_multiplier * float(np.sqrt(np.mean((window - middle) ** 2)))
    return BollingerBands(upper=middle + band, middle=middle, lower=middle - band)


def true_ranges(bars: Sequence[Bar]) -> np.ndarray:
    """True range for every bar after the first: max(h - l, |h - prev_c|, |l - prev_c|)."""
    high = highs(bars)[1:]
    low = lows(bars)[1:]
    prev_close = closes(bars)[:-1]
    return np.maximum(high - low, np.maximum(np.abs(high - prev_close), np.abs(low - prev_close)))


def atr(bars: Sequence[Bar], period: int = 14) -> float:
    """Simple mean of the last `period` true ranges. Needs period + 1 bars."""
    check_period(period)
    require(bars, period + 1, "ATR")
    return float(np.mean(true_ranges(bars)[-period:]))
