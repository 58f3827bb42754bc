"""Unit tests for analytics.metrics."""

from datetime import datetime, timedelta

import pytest
from trade_intel.analytics.metrics import (
    compute_metrics,
    max_drawdown,
    profit_factor,
    sharpe_ratio,
    sortino_ratio,
    win_rate,
)
from trade_intel.core.types import EquityPoint, SignalType, Trade
from trade_intel.utils.rounding import round_half_up, whole_shares

START = datetime(2024, 1, 1)


def _trade(pnl, pnl_pct, day=0):
    return Trade(
        entry_time=START + timedelta(days=day),
        exit_time=START + timedelta(days=day + 2),
        side=SignalType.BUY,
        entry_price=100.0,
        exit_price=100.0 + pnl / 10,
        quantity=10,
        pnl=pnl,
        pnl_pct=pnl_pct,
        holding_period_days=2,
    )


def test_sharpe_ratio_empty():
    assert sharpe_ratio([]) == 0.0
    assert sharpe_ratio([5.0]) == 0.0


def test_sharpe_ratio_constant():
    assert sharpe_ratio([0.01] * 10) == 0.0  # zero std


def test_sharpe_ratio_sample_std():
    # mean 2.5, sample std 10.6066 -> 0.2357 * sqrt(252)
    assert sharpe_ratio([10.0, -5.0]) == 3.74


def test_sortino_ratio():
    # mean 2.5, downside rms 5 -> 0.5 * sqrt(252)
    assert sortino_ratio([10.0, -5.0]) == 7.94
    assert sortino_ratio([1.0, 2.0]) == 0.0
    assert sortino_ratio([]) == 0.0


def test_win_rate():
    assert win_rate([1, -1, 1, 1]) == 75.0
    assert win_rate([1, -1, 1]) == 66.67
    assert win_rate([]) == 0.0


def test_profit_factor():
    assert profit_factor([10, -5, 10, -5]) == 2.0
    assert profit_factor([10, 10]) == 0.0
    assert profit_factor([-5, -5]) == 0.0


def test_max_drawdown():
    curve = [EquityPoint(START, 100.0, 0.0), EquityPoint(START, 80.0, 20.0), EquityPoint(START, 90.0, 10.0)]
    assert max_drawdown(curve) == 20.0
    assert max_drawdown([]) == 0.0


def test_compute_metrics():
    trades = [_trade(100.0, 1.0), _trade(-50.0, -0.5, 3), _trade(200.0, 2.0, 6)]
    curve = [EquityPoint(START, 10000.0, 0.0), EquityPoint(START, 9950.0, 150.0)]
    m = compute_metrics(10000.0, 10250.0, trades, curve, START, START + timedelta(days=90))
    assert m.total_trades == 3
    assert m.winning_trades == 2
    assert m.losing_trades == 1
    assert m.total_return == 250.0
    assert m.total_return_pct == 2.5
    assert m.win_rate == 66.67
    assert m.avg_win == 150.0
    assert m.avg_loss == -50.0
    assert m.largest_win == 200.0
    assert m.largest_loss == -50.0
    assert m.profit_factor == 6.0
    assert m.max_drawdown == 150.0
    assert m.max_drawdown_pct == 1.5
    assert m.days_in_market == 90


def test_compute_metrics_no_trades():
    m = compute_metrics(1000.0, 1000.0, [], [], START, START)
    assert m.total_trades == 0
    assert m.win_rate == 0.0
    assert m.avg_win == 0.0 and m.avg_loss == 0.0
    assert m.largest_win == 0.0 and m.largest_loss == 0.0
    assert m.sharpe_ratio == 0.0 and m.sortino_ratio == 0.0
    assert m.total_return_pct == 0.0


def test_total_return_pct_rounds_ratio_first():
    assert compute_metrics(3.0, 4.0, [], []).total_return_pct == 33.33
    # 0.0001249 -> 0.0001 as a ratio, so 0.01% rather than 0.0125%
    assert compute_metrics(100000.0, 100012.49, [], []).total_return_pct == 0.01


def test_round_half_up():
    assert round_half_up(2.345, 2) == 2.35
    assert round_half_up(-2.345, 2) == -2.35
    assert round_half_up(1.005, 2) == 1.01
    assert round_half_up(0.12345, 4) == 0.1235


def test_whole_shares():
    assert whole_shares(100000.0, 0.95, 100.0) == 950
    assert whole_shares(100000.0, 0.95, 333.33) == 285
    assert whole_shares(50.0, 0.95, 100.0) == 0
    assert whole_shares(100.0, 0.95, 0.0) == 0
