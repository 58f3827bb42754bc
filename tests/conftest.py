"""Shared fixtures: deterministic synthetic bar series."""

from datetime import datetime, timedelta

import pytest

from trade_intel.core.types import Bar


def build_bars(closes, volumes=None, spread=1.0, start=datetime(2024, 1, 1), highs=None, lows=None):
    """One daily bar per close; high/low default to close +/- spread."""
    bars = []
    for i, close in enumerate(closes):
        bars.append(Bar(
            timestamp=start + timedelta(days=i),
            open=close,
            high=highs[i] if highs is not None else close + spread,
            low=lows[i] if lows is not None else close - spread,
            close=close,
            volume=volumes[i] if volumes is not None else 1000.0,
        ))
    return bars


@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def rising_bars():
    # 50 closes 100.0 -> 149.5
    return build_bars([100.0 + i * 49.5 / 49 for i in range(50)])


@pytest.fixture
def falling_bars():
    return build_bars([200.0 - i for i in range(50)])


@pytest.fixture
def flat_bars():
    return build_bars([100.0] * 50, spread=0.0)
