"""
MACD crossover strategy.
Buy when the MACD line crosses above the signal line, sell when it crosses below.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.indicators import macd
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.macd")


@dataclass(frozen=True)
class MACDConfig:
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9


class MACDStrategy(BaseStrategy):
    strategy_name = "MACD Strategy"
    strategy_description = "Trend-following momentum strategy using MACD crossovers"
    calculation_label = "MACD"

    def __init__(self, config: MACDConfig = MACDConfig()):
        self.config = config

    @property
    def min_data_points(self) -> int:
        return self.config.slow_period + self.config.signal_period + 5

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        cfg = self.config
        current = macd(bars, cfg.fast_period, cfg.slow_period, cfg.signal_period)
        previous = macd(bars[:-1], cfg.fast_period, cfg.slow_period, cfg.signal_period)
        logger.debug(
            "MACD for %s: line=%.4f signal=%.4f histogram=%.4f",
            symbol, current.macd, current.signal, current.histogram,
        )
        meta = {"macd": current.macd, "signal": current.signal, "histogram": current.histogram}

        bullish_cross = previous.macd <= previous.signal and current.macd > current.signal
        bearish_cross = previous.macd >= previous.signal and current.macd < current.signal
        values = f"MACD: {current.macd:.4f}, Signal: {current.signal:.4f}, Histogram: {current.histogram:.4f}"

        if bullish_cross:
            return self._signal(
                symbol, SignalType.BUY, self._crossover_confidence(current.histogram, bullish=True),
                f"Bullish MACD crossover detected. {values}", metadata=meta,
            )
        if bearish_cross:
            return self._signal(
                symbol, SignalType.SELL, self._crossover_confidence(current.histogram, bullish=False),
                f"Bearish MACD crossover detected. {values}", metadata=meta,
            )
        # No crossover: report momentum only
        if current.histogram > 0 and current.macd > current.signal:
            return self._signal(
                symbol, SignalType.HOLD, 0.6,
                f"Bullish momentum continuing. Histogram: {current.histogram:.4f}", metadata=meta,
            )
        if current.histogram < 0 and current.macd < current.signal:
            return self._signal(
                symbol, SignalType.HOLD, 0.4,
                f"Bearish momentum continuing. Histogram: {current.histogram:.4f}", metadata=meta,
            )
        return self._signal(symbol, SignalType.HOLD, 0.5, "No clear MACD signal", metadata=meta)

    @staticmethod
    def _crossover_confidence(histogram: float, bullish: bool) -> float:
        """Histogram agreeing with the cross scales confidence; otherwise base 0.6."""
        if (bullish and histogram > 0) or (not bullish and histogram < 0):
            return min(0.9, 0.65 + abs(histogram) * 10)
        return 0.6
