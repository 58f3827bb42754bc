"""Volume indicators."""

from __future__ import annotations
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar
from trade_intel.indicators._series import check_period, require, volumes


def volume_ratio(bars: Sequence[Bar], period: int = 20) -> float:
    """
    Current volume divided by the mean volume of the `period` bars before it.
    Zero average volume gives inf (or 0 when the current bar is also empty).
    """
    check_period(period)
    require(bars, period + 1, "volume ratio")
    vols = volumes(bars)
    average = float(np.mean(vols[-period - 1:-1]))
    current = float(vols[-1])
    if average == 0:
        return float("inf") if current > 0 else 0.0
    return current / average
