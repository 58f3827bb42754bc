"""Unit tests for utils.timeframes."""

from datetime import datetime

import pytest
from trade_intel.utils.timeframes import lookback_start, timeframe_minutes


def test_timeframe_minutes():
    assert timeframe_minutes("5m") == 5
    assert timeframe_minutes("1h") == 60
    assert timeframe_minutes("1d") == 1440
    assert timeframe_minutes("1w") == 10080


def test_timeframe_invalid():
    with pytest.raises(ValueError):
        timeframe_minutes("1x")


def test_lookback_start():
    end = datetime(2024, 3, 31)
    assert lookback_start(end, "1d", 30) == datetime(2024, 3, 1)
    assert lookback_start(end, "4h", 6) == datetime(2024, 3, 30)
