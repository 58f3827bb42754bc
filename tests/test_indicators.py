"""Unit tests for the indicator library."""

import math

import pytest
from trade_intel.core.errors import InsufficientDataError
from trade_intel.indicators import (
    atr,
    bollinger_bands,
    ema,
    ema_series,
    is_downtrend,
    is_uptrend,
    macd,
    rsi,
    sma,
    stochastic,
    volume_ratio,
)


def test_sma(make_bars):
    bars = make_bars([float(i) for i in range(1, 11)])
    assert sma(bars, 5) == pytest.approx(8.0)
    assert sma(bars, 10) == pytest.approx(5.5)


def test_ema_seeded_with_sma(make_bars):
    # seed mean(1, 2, 3) = 2, multiplier 0.5: 4 -> 3, 5 -> 4
    bars = make_bars([1.0, 2.0, 3.0, 4.0, 5.0])
    assert ema(bars, 3) == pytest.approx(4.0)
    series = ema_series(bars, 3)
    assert math.isnan(series[0]) and math.isnan(series[1])
    assert list(series[2:]) == pytest.approx([2.0, 3.0, 4.0])


def test_rsi_rising_is_above_50(rising_bars):
    assert rsi(rising_bars, 14) > 50


def test_rsi_extremes(rising_bars, falling_bars):
    assert rsi(rising_bars) == 100.0
    assert rsi(falling_bars) == pytest.approx(0.0)


def test_rsi_in_range(make_bars):
    closes = [100 + 5 * math.sin(i / 3) for i in range(60)]
    value = rsi(make_bars(closes), 14)
    assert 0.0 <= value <= 100.0


def test_macd_histogram_is_difference(make_bars):
    closes = [100 + 5 * math.sin(i / 4) + i * 0.2 for i in range(80)]
    result = macd(make_bars(closes))
    assert result.histogram == pytest.approx(result.macd - result.signal)


def test_macd_positive_in_uptrend(rising_bars):
    result = macd(rising_bars)
    assert result.macd > 0


def test_bollinger_ordering(make_bars):
    closes = [100 + 3 * math.cos(i) for i in range(40)]
    bands = bollinger_bands(make_bars(closes))
    assert bands.upper >= bands.middle >= bands.lower


def test_bollinger_population_std(make_bars):
    bands = bollinger_bands(make_bars([1.0, 2.0, 3.0, 4.0, 5.0]), period=5)
    assert bands.middle == pytest.approx(3.0)
    assert bands.upper == pytest.approx(3.0 + 2 * math.sqrt(2))
    assert bands.lower == pytest.approx(3.0 - 2 * math.sqrt(2))


def test_bollinger_flat(flat_bars):
    bands = bollinger_bands(flat_bars)
    assert bands.upper == bands.middle == bands.lower == 100.0
    assert bands.width_pct == 0.0


def test_atr_constant_range(make_bars):
    bars = make_bars([100.0] * 20, spread=1.0)
    assert atr(bars, 14) == pytest.approx(2.0)


def test_stochastic_rising_and_falling(make_bars):
    up = stochastic(make_bars([100.0 + i for i in range(30)]))
    # lowest low = first close - 1, highest high = last close + 1
    assert up.k == pytest.approx(14 / 15 * 100)
    down = stochastic(make_bars([200.0 - i for i in range(30)]))
    assert down.k == pytest.approx(1 / 15 * 100)
    for result in (up, down):
        assert 0.0 <= result.k <= 100.0
        assert 0.0 <= result.d <= 100.0


def test_stochastic_zero_range(flat_bars):
    result = stochastic(flat_bars)
    assert result.k == 50.0
    assert result.d == 50.0


def test_volume_ratio_excludes_current(make_bars):
    bars = make_bars([100.0] * 21, volumes=[100.0] * 20 + [300.0])
    assert volume_ratio(bars, 20) == pytest.approx(3.0)


def test_volume_ratio_zero_average(make_bars):
    bars = make_bars([100.0] * 21, volumes=[0.0] * 20 + [50.0])
    assert volume_ratio(bars, 20) == float("inf")


def test_trend_helpers(rising_bars, falling_bars, make_bars):
    assert is_uptrend(rising_bars, 10, 20)
    assert is_downtrend(falling_bars, 10, 20)
    assert not is_uptrend(make_bars([1.0] * 5), 10, 20)


@pytest.mark.parametrize(
    "fn, args, required",
    [
        (sma, (10,), 10),
        (ema, (10,), 10),
        (rsi, (14,), 15),
        (macd, (12, 26, 9), 35),
        (bollinger_bands, (20,), 20),
        (atr, (14,), 15),
        (stochastic, (14, 3), 14),
        (volume_ratio, (20,), 21),
    ],
)
def test_insufficient_data(make_bars, fn, args, required):
    bars = make_bars([100.0 + i for i in range(required - 1)])
    with pytest.raises(InsufficientDataError) as exc:
        fn(bars, *args)
    assert exc.value.required == required
    assert exc.value.available == required - 1
    # exactly enough works
    fn(make_bars([100.0 + i for i in range(required)]), *args)


def test_non_positive_period(make_bars):
    with pytest.raises(ValueError):
        sma(make_bars([1.0, 2.0]), 0)
