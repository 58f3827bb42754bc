"""
RSI - Relative Strength Index with Wilder smoothing.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar
from trade_intel.indicators._series import check_period, closes, require


def rsi(bars: Sequence[Bar], period: int = 14) -> float:
    """
    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    The initial averages are simple means over the first `period` close-to-close
    changes; every later change is folded in with Wilder's smoothing
    (avg * (period - 1) + x) / period. Returns 100 when the average loss is 0.

    Needs period + 1 bars.
    """
    check_period(period)
    require(bars, period + 1, "RSI")
    changes = np.diff(closes(bars))
    gains = np.clip(changes, 0.0, None)
    losses = np.clip(-changes, 0.0, None)

    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return float(100.0 - 100.0 / (1.0 + rs))
