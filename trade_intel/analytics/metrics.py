"""
Performance metrics for a backtest: return, Sharpe, Sortino, drawdown, win rate,
profit factor, averages and extremes.
Ratios use per-trade percentage returns annualized with sqrt(252).
All figures are rounded half-up (see utils.rounding).
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

import numpy as np

from trade_intel.core.types import EquityPoint, Trade
from trade_intel.utils.rounding import round_half_up

PERIODS_PER_YEAR = 252.0


@dataclass(frozen=True)
class PerformanceMetrics:
    """Aggregate performance metrics."""
    initial_capital: float
    final_capital: float
    total_return: float
    total_return_pct: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    avg_win: float
    avg_loss: float
    largest_win: float
    largest_loss: float
    profit_factor: float
    sharpe_ratio: float
    sortino_ratio: float
    max_drawdown: float
    max_drawdown_pct: float
    days_in_market: int


def sharpe_ratio(returns: Sequence[float], periods_per_year: float = PERIODS_PER_YEAR) -> float:
    """Annualized Sharpe of per-trade returns (sample std). 0 with < 2 returns or flat returns."""
    if len(returns) < 2:
        return 0.0
    arr = np.asarray(returns, dtype=float)
    std = arr.std(ddof=1)
    if std <= 1e-12:
        return 0.0
    return round_half_up(float(arr.mean() / std * np.sqrt(periods_per_year)), 2)


def sortino_ratio(returns: Sequence[float], periods_per_year: float = PERIODS_PER_YEAR) -> float:
    """Annualized Sortino: mean over root-mean-square of the negative returns."""
    if not returns:
        return 0.0
    arr = np.asarray(returns, dtype=float)
    downside = arr[arr < 0]
    if len(downside) == 0:
        return 0.0
    downside_dev = float(np.sqrt(np.mean(downside ** 2)))
    if downside_dev <= 1e-12:
        return 0.0
    return round_half_up(float(arr.mean() / downside_dev * np.sqrt(periods_per_year)), 2)


def max_drawdown(equity_curve: Sequence[EquityPoint]) -> float:
    """Largest absolute drawdown recorded on the curve."""
    if not equity_curve:
        return 0.0
    return float(max(p.drawdown for p in equity_curve))


def win_rate(pnls: Sequence[float]) -> float:
    """Percent of trades with positive PnL."""
    if not pnls:
        return 0.0
    return round_half_up(sum(1 for p in pnls if p > 0) / len(pnls) * 100.0, 2)


def profit_factor(pnls: Sequence[float]) -> float:
    """Gross profit / gross loss. Returns 0 if no losses."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return 0.0
    return round_half_up(wins / losses, 2)


def compute_metrics(
    initial_capital: float,
    final_capital: float,
    trades: Sequence[Trade],
    equity_curve: Sequence[EquityPoint],
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> PerformanceMetrics:
    """
    Compute full metrics for one backtest run.
    days_in_market is the calendar span start_date..end_date, not time spent in positions.
    """
    if initial_capital <= 0:
        raise ValueError("initial_capital must be positive")
    pnls = [t.pnl for t in trades]
    returns = [t.pnl_pct for t in trades]
    total_trades = len(trades)
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    winning_trades = len(wins)
    losing_trades = total_trades - winning_trades

    total_return = final_capital - initial_capital
    mdd = max_drawdown(equity_curve)
    days = (end_date - start_date).days if start_date is not None and end_date is not None else 0

    return PerformanceMetrics(
        initial_capital=initial_capital,
        final_capital=final_capital,
        total_return=total_return,
        # ratio kept to 4 dp, so the percentage carries 2
        total_return_pct=round_half_up(round_half_up(total_return / initial_capital, 4) * 100.0, 2),
        total_trades=total_trades,
        winning_trades=winning_trades,
        losing_trades=losing_trades,
        win_rate=win_rate(pnls),
        avg_win=round_half_up(sum(wins) / max(winning_trades, 1), 2),
        avg_loss=round_half_up(sum(losses) / max(losing_trades, 1), 2),
        largest_win=max(pnls) if pnls else 0.0,
        largest_loss=min(pnls) if pnls else 0.0,
        profit_factor=profit_factor(pnls),
        sharpe_ratio=sharpe_ratio(returns),
        sortino_ratio=sortino_ratio(returns),
        max_drawdown=mdd,
        max_drawdown_pct=round_half_up(mdd / initial_capital * 100.0, 2),
        days_in_market=days,
    )
