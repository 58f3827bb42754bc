"""Shared helpers: bar sequences to numpy arrays, length checks."""

from __future__ import annotations
from typing import Sequence

import numpy as np

from trade_intel.core.errors import InsufficientDataError
from trade_intel.core.types import Bar


def require(bars: Sequence[Bar], required: int, indicator: str) -> None:
    if len(bars) < required:
        raise InsufficientDataError(required, len(bars), indicator)


def closes(bars: Sequence[Bar]) -> np.ndarray:
    return np.fromiter((b.close for b in bars), dtype=float, count=len(bars))


def highs(bars: Sequence[Bar]) -> np.ndarray:
    return np.fromiter((b.high for b in bars), dtype=float, count=len(bars))


def lows(bars: Sequence[Bar]) -> np.ndarray:
    return np.fromiter((b.low for b in bars), dtype=float, count=len(bars))


def volumes(bars: Sequence[Bar]) -> np.ndarray:
    return np.fromiter((b.volume for b in bars), dtype=float, count=len(bars))


def check_period(*periods: int) -> None:
    for period in periods:
        if period <= 0:
            raise ValueError(f"Indicator period must be positive, got {period}")
