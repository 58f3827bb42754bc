"""
MACD - Moving Average Convergence Divergence.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar
from trade_intel.indicators._series import check_period, closes, require
from trade_intel.indicators.moving_averages import _ema_values


@dataclass(frozen=True)
class MACDResult:
    macd: float  # fast EMA - slow EMA
    signal: float
    histogram: float  # macd - signal

    @property
    def is_bullish(self) -> bool:
        return self.macd > self.signal


def macd(bars: Sequence[Bar], fast: int = 12, slow: int = 26, signal: int = 9) -> MACDResult:
    """
    MACD over the trailing `signal + 1` bars.

    The MACD value at each of those bars is EMA(fast) - EMA(slow) of the prefix
    ending there. Both EMA series are computed once, so entry i of each series
    is the EMA of bars[:i + 1]. The signal line starts as the simple mean of
    the first `signal` MACD values and is EMA-smoothed (2 / (signal + 1)) over
    the rest.

    Needs slow + signal bars (fast + signal if fast is the longer period).
    """
    check_period(fast, slow, signal)
    require(bars, max(fast, slow) + signal, "MACD")
    values = closes(bars)
    fast_ema = _ema_values(values, fast)
    slow_ema = _ema_values(values, slow)

    n = len(values)
    # prefixes of length n - signal .. n, all of which reach the slow seed
    window = fast_ema[n - signal - 1:] - slow_ema[n - signal - 1:]
    macd_line = float(window[-1])

    multiplier = 2.0 / (signal + 1)
    signal_line = float(np.mean(window[:signal]))
    for value in window[signal:]:
        signal_line = (float(value) - signal_line) * multiplier + signal_line

    return MACDResult(macd=macd_line, signal=signal_line, histogram=macd_line - signal_line)
