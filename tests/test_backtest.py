"""Unit tests for backtesting.engine."""

import pytest
from trade_intel.backtesting.engine import BacktestEngine
from trade_intel.core.errors import EmptyHistoryError, NotBacktestableError
from trade_intel.core.types import Signal, SignalType
from trade_intel.strategies.base import BaseStrategy
from trade_intel.strategies.external import ExternalSignalStrategy
from trade_intel.strategies.rsi import RSIStrategy


class ScriptedStrategy(BaseStrategy):
    """Emits fixed signals by bar index (index of the last bar seen)."""

    strategy_name = "Scripted"

    def __init__(self, script):
        self.script = script
        self.seen = []

    @property
    def min_data_points(self):
        return 1

    def _evaluate(self, symbol, bars):
        index = len(bars) - 1
        self.seen.append(len(bars))
        return Signal(self.script.get(index, SignalType.HOLD), 0.9, f"bar {index}")


def test_single_winning_trade(make_bars):
    bars = make_bars([100.0] * 21 + [105.0] * 9)
    strategy = ScriptedStrategy({20: SignalType.BUY, 21: SignalType.SELL})
    result = BacktestEngine(strategy, initial_capital=100000.0).run(bars, "TEST")

    assert len(result.trades) == 1
    trade = result.trades[0]
    assert trade.quantity == 950
    assert trade.entry_price == 100.0
    assert trade.exit_price == 105.0
    assert trade.pnl == pytest.approx(4750.0)
    assert trade.pnl_pct == 5.0
    assert trade.holding_period_days == 1
    assert trade.exit_reason == "signal"
    assert result.final_capital == pytest.approx(104750.0)
    assert result.metrics.total_return_pct == 4.75
    assert result.metrics.winning_trades == 1
    assert result.start_date == bars[0].timestamp
    assert result.end_date == bars[-1].timestamp
    assert result.metrics.days_in_market == 29


def test_warmup_and_equity_curve(make_bars):
    bars = make_bars([100.0] * 30)
    strategy = ScriptedStrategy({})
    result = BacktestEngine(strategy, initial_capital=1000.0).run(bars, "TEST")
    assert strategy.seen[0] == 20
    assert len(result.equity_curve) == len(bars) - 19
    assert all(p.equity == 1000.0 and p.drawdown == 0.0 for p in result.equity_curve)
    assert result.trades == ()
    assert result.metrics.total_trades == 0


def test_warmup_never_below_twenty_bars(make_bars):
    bars = make_bars([100.0] * 30)
    strategy = ScriptedStrategy({})
    engine = BacktestEngine(strategy, initial_capital=1000.0, warmup_bars=5)
    assert engine.warmup_bars == 20
    result = engine.run(bars, "TEST")
    assert strategy.seen[0] == 20
    assert len(result.equity_curve) == len(bars) - 19


def test_longer_warmup_is_kept(make_bars):
    strategy = ScriptedStrategy({})
    result = BacktestEngine(strategy, initial_capital=1000.0, warmup_bars=25).run(make_bars([100.0] * 30), "TEST")
    assert strategy.seen[0] == 25
    assert len(result.equity_curve) == 6


def test_forced_close_at_end(make_bars):
    bars = make_bars([100.0] * 21 + [110.0] * 4)
    result = BacktestEngine(ScriptedStrategy({20: SignalType.BUY}), initial_capital=10000.0).run(bars, "TEST")
    assert len(result.trades) == 1
    trade = result.trades[0]
    assert trade.exit_reason == "end_of_data"
    assert trade.exit_time == bars[-1].timestamp
    assert trade.exit_price == 110.0
    assert trade.quantity == 95


def test_single_position_only(make_bars):
    bars = make_bars([100.0] * 30)
    script = {20: SignalType.BUY, 21: SignalType.BUY, 22: SignalType.SELL, 23: SignalType.SELL}
    result = BacktestEngine(ScriptedStrategy(script), initial_capital=10000.0).run(bars, "TEST")
    assert len(result.trades) == 1
    assert result.trades[0].entry_time == bars[20].timestamp
    assert result.trades[0].exit_time == bars[22].timestamp


def test_drawdown_tracking(make_bars):
    bars = make_bars([100.0] * 21 + [90.0, 95.0] + [95.0] * 3)
    script = {20: SignalType.BUY, 22: SignalType.SELL}
    result = BacktestEngine(ScriptedStrategy(script), initial_capital=100000.0).run(bars, "TEST")
    drawdowns = [p.drawdown for p in result.equity_curve]
    assert drawdowns[1] == 0.0  # bar 20, just bought
    assert drawdowns[2] == pytest.approx(9500.0)
    assert drawdowns[3] == pytest.approx(4750.0)
    assert result.metrics.max_drawdown == pytest.approx(9500.0)
    assert result.metrics.max_drawdown_pct == 9.5
    assert result.trades[0].pnl == pytest.approx(-4750.0)


def test_not_enough_cash_for_one_share(make_bars):
    bars = make_bars([100.0] * 25)
    result = BacktestEngine(ScriptedStrategy({20: SignalType.BUY}), initial_capital=50.0).run(bars, "TEST")
    assert result.trades == ()
    assert result.final_capital == 50.0


def test_rejects_non_backtestable(make_bars):
    strategy = ExternalSignalStrategy("AI", "", lambda s, b: Signal(SignalType.BUY, 1.0, ""))
    with pytest.raises(NotBacktestableError):
        BacktestEngine(strategy).run(make_bars([100.0] * 30), "TEST")


def test_rejects_empty_history():
    with pytest.raises(EmptyHistoryError):
        BacktestEngine(RSIStrategy()).run([], "TEST")


def test_rejects_non_positive_capital(make_bars):
    with pytest.raises(ValueError):
        BacktestEngine(RSIStrategy(), initial_capital=0).run(make_bars([100.0] * 30), "TEST")


def test_real_strategy_run(make_bars):
    closes = [100.0 - i for i in range(25)] + [75.0 + 2 * i for i in range(25)]
    result = BacktestEngine(RSIStrategy(), initial_capital=100000.0).run(make_bars(closes), "TEST")
    assert result.strategy_name == "RSI Strategy"
    assert result.metrics.winning_trades + result.metrics.losing_trades == result.metrics.total_trades
    assert 0.0 <= result.metrics.win_rate <= 100.0
    assert len(result.trades) >= 1


def test_result_frames(make_bars):
    bars = make_bars([100.0] * 21 + [105.0] * 9)
    result = BacktestEngine(ScriptedStrategy({20: SignalType.BUY, 21: SignalType.SELL})).run(bars, "TEST")
    trades = result.trades_frame()
    assert list(trades["side"]) == ["BUY"]
    assert trades.loc[0, "quantity"] == 950
    equity = result.equity_frame()
    assert list(equity.columns) == ["timestamp", "equity", "drawdown"]
    assert len(equity) == 11
