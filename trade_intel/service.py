"""
Entry points used by the CLI and by embedding applications: backtest a
strategy over stored history, run one strategy live, or poll several for a
consensus.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from trade_intel.analytics.consensus import ConsensusResult, tally_signals
from trade_intel.backtesting.engine import BacktestEngine, BacktestResult
from trade_intel.core.errors import EmptyHistoryError, NotBacktestableError, StrategyValidationError
from trade_intel.core.types import Bar, Signal
from trade_intel.data.source import BarSource
from trade_intel.strategies.registry import StrategyRegistry

logger = logging.getLogger("trade_intel.service")


class TradingService:
    def __init__(self, registry: StrategyRegistry, bar_source: Optional[BarSource] = None, warmup_bars: int = 20):
        self.registry = registry
        self.bar_source = bar_source
        self.warmup_bars = warmup_bars

    def run_backtest(
        self,
        strategy_name: str,
        symbol: str,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        initial_capital: float,
    ) -> BacktestResult:
        """Raises UnknownStrategyError, NotBacktestableError or EmptyHistoryError, in that order."""
        strategy = self.registry.get(strategy_name)
        if not strategy.is_backtestable():
            raise NotBacktestableError(strategy.name)
        if self.bar_source is None:
            raise EmptyHistoryError(symbol, start_date, end_date)
        bars = self.bar_source.get_bars(symbol, start_date, end_date)
        if not bars:
            raise EmptyHistoryError(symbol, start_date, end_date)
        logger.info("Running backtest: %s on %s (%d bars)", strategy.name, symbol, len(bars))
        engine = BacktestEngine(strategy, initial_capital=initial_capital, warmup_bars=self.warmup_bars)
        return engine.run(bars, symbol, start_date or bars[0].timestamp, end_date or bars[-1].timestamp)

    def execute_strategy(self, strategy_name: str, symbol: str, bars: Sequence[Bar]) -> Signal:
        strategy = self.registry.get(strategy_name)
        if not strategy.validate():
            raise StrategyValidationError(strategy.name)
        signal = strategy.analyze(symbol, bars)
        logger.info(
            "%s on %s: %s (confidence %.2f)",
            strategy.name, symbol, signal.signal_type.value, signal.confidence,
        )
        return signal

    def execute_consensus(self, strategy_names: Sequence[str], symbol: str, bars: Sequence[Bar]) -> ConsensusResult:
        signals = [(name, self.execute_strategy(name, symbol, bars)) for name in strategy_names]
        result = tally_signals(signals)
        logger.info(
            "Consensus on %s: %s (BUY %d, SELL %d, HOLD %d)",
            symbol, result.consensus.value, result.buy_votes, result.sell_votes, result.hold_votes,
        )
        return result

    def available_strategies(self) -> List[Tuple[str, str, str, bool]]:
        """(key, name, description, backtestable) for every registered strategy."""
        out = []
        for key in self.registry:
            strategy = self.registry.get(key)
            out.append((key, strategy.name, strategy.description, strategy.is_backtestable()))
        return out

    def recent_bars(self, symbol: str, end: Optional[datetime] = None, start: Optional[datetime] = None) -> List[Bar]:
        if self.bar_source is None:
            raise EmptyHistoryError(symbol, start, end)
        bars = self.bar_source.get_bars(symbol, start, end)
        if not bars:
            raise EmptyHistoryError(symbol, start, end)
        return bars
