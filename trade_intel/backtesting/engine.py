"""
Backtest engine: replays one strategy bar by bar, long only, one position at a time.
No lookahead: the strategy sees bars up to and including the current one and
fills happen at that bar's close.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from trade_intel.analytics.metrics import PerformanceMetrics, compute_metrics
from trade_intel.core.errors import EmptyHistoryError, NotBacktestableError
from trade_intel.core.types import Bar, EquityPoint, Position, SignalType, Trade
from trade_intel.strategies.base import BaseStrategy
from trade_intel.utils.rounding import round_half_up, whole_shares

logger = logging.getLogger("trade_intel.backtest")

MIN_WARMUP_BARS = 20


@dataclass(frozen=True)
class BacktestResult:
    """Backtest output: identity, capital, trades, equity curve and metrics."""
    strategy_name: str
    symbol: str
    start_date: datetime
    end_date: datetime
    initial_capital: float
    final_capital: float
    trades: Tuple[Trade, ...]
    equity_curve: Tuple[EquityPoint, ...]
    metrics: PerformanceMetrics

    def trades_frame(self) -> pd.DataFrame:
        columns = [
            "entry_time", "exit_time", "side", "entry_price", "exit_price",
            "quantity", "pnl", "pnl_pct", "holding_period_days", "exit_reason",
        ]
        rows = [
            {**{c: getattr(t, c) for c in columns}, "side": t.side.value}
            for t in self.trades
        ]
        return pd.DataFrame(rows, columns=columns)

    def equity_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(p.timestamp, p.equity, p.drawdown) for p in self.equity_curve],
            columns=["timestamp", "equity", "drawdown"],
        )


class _RunState:
    """Mutable state of one run: cash, peak equity and the open position (FLAT when None)."""

    def __init__(self, cash: float):
        self.cash = cash
        self.peak = cash
        self.position: Optional[Position] = None
        self.trades: List[Trade] = []
        self.equity_curve: List[EquityPoint] = []

    def equity(self, price: float) -> float:
        if self.position is None:
            return self.cash
        return self.cash + self.position.quantity * price

    def open(self, bar: Bar, quantity: int) -> None:
        self.cash -= quantity * bar.close
        self.position = Position(entry_time=bar.timestamp, entry_price=bar.close, quantity=quantity)

    def close(self, bar: Bar, reason: str) -> Trade:
        pos = self.position
        pnl = (bar.close - pos.entry_price) * pos.quantity
        cost = pos.entry_price * pos.quantity
        trade = Trade(
            entry_time=pos.entry_time,
            exit_time=bar.timestamp,
            side=pos.side,
            entry_price=pos.entry_price,
            exit_price=bar.close,
            quantity=pos.quantity,
            pnl=pnl,
            pnl_pct=round_half_up(pnl / cost * 100.0, 2) if cost else 0.0,
            holding_period_days=(bar.timestamp - pos.entry_time).days,
            exit_reason=reason,
        )
        self.cash += pos.quantity * bar.close
        self.position = None
        self.trades.append(trade)
        return trade

    def mark(self, bar: Bar) -> None:
        equity = self.equity(bar.close)
        if equity > self.peak:
            self.peak = equity
        self.equity_curve.append(
            EquityPoint(timestamp=bar.timestamp, equity=equity, drawdown=max(0.0, self.peak - equity))
        )


class BacktestEngine:
    """
    Runs a strategy on an ascending bar history.
    FLAT + BUY opens floor(cash * position_fraction / close) shares; LONG + SELL closes.
    Any position still open after the last bar is closed at its close.
    """

    def __init__(
        self,
        strategy: BaseStrategy,
        initial_capital: float = 100000.0,
        warmup_bars: int = MIN_WARMUP_BARS,
        position_fraction: float = 0.95,
    ):
        self.strategy = strategy
        self.initial_capital = initial_capital
        if warmup_bars < MIN_WARMUP_BARS:
            logger.warning("warmup_bars=%d is below the minimum; using %d", warmup_bars, MIN_WARMUP_BARS)
        self.warmup_bars = max(MIN_WARMUP_BARS, warmup_bars)
        self.position_fraction = position_fraction

    def run(
        self,
        bars: Sequence[Bar],
        symbol: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> BacktestResult:
        if not self.strategy.is_backtestable():
            raise NotBacktestableError(self.strategy.name)
        if not bars:
            raise EmptyHistoryError(symbol, start_date, end_date)
        if self.initial_capital <= 0:
            raise ValueError("initial_capital must be positive")

        bars = list(bars)
        start_date = start_date or bars[0].timestamp
        end_date = end_date or bars[-1].timestamp
        logger.info(
            "Backtest %s on %s: %d bars, capital %.2f",
            self.strategy.name, symbol, len(bars), self.initial_capital,
        )

        state = _RunState(self.initial_capital)
        for i in range(len(bars)):
            if i + 1 < self.warmup_bars:
                continue
            bar = bars[i]
            signal = self.strategy.analyze(symbol, bars[: i + 1])

            if state.position is None and signal.signal_type == SignalType.BUY:
                quantity = whole_shares(state.cash, self.position_fraction, bar.close)
                if quantity >= 1:
                    state.open(bar, quantity)
                    logger.debug("BUY %d %s @ %.2f on %s", quantity, symbol, bar.close, bar.timestamp)
                else:
                    logger.debug("BUY signal on %s skipped: cash %.2f buys no shares", bar.timestamp, state.cash)
            elif state.position is not None and signal.signal_type == SignalType.SELL:
                trade = state.close(bar, "signal")
                logger.debug("SELL %d %s @ %.2f, pnl %.2f", trade.quantity, symbol, bar.close, trade.pnl)

            state.mark(bar)

        if state.position is not None:
            trade = state.close(bars[-1], "end_of_data")
            logger.debug("Closed open position at end of data, pnl %.2f", trade.pnl)

        metrics = compute_metrics(
            self.initial_capital, state.cash, state.trades, state.equity_curve, start_date, end_date,
        )
        logger.info(
            "Backtest done: %d trades, return %.2f%%, final capital %.2f",
            metrics.total_trades, metrics.total_return_pct, state.cash,
        )
        return BacktestResult(
            strategy_name=self.strategy.name,
            symbol=symbol,
            start_date=start_date,
            end_date=end_date,
            initial_capital=self.initial_capital,
            final_capital=state.cash,
            trades=tuple(state.trades),
            equity_curve=tuple(state.equity_curve),
            metrics=metrics,
        )
