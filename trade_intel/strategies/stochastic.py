"""
Stochastic oscillator strategy.
Oversold (%K < 25) = BUY, overbought (%K > 75) = SELL. A %K/%D crossover in
the same direction adds confidence but is not required.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.indicators import stochastic
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.stochastic")


@dataclass(frozen=True)
class StochasticConfig:
    k_period: int = 14
    d_period: int = 3
    oversold: float = 25.0
    overbought: float = 75.0


class StochasticStrategy(BaseStrategy):
    strategy_name = "Stochastic Oscillator Strategy"
    strategy_description = "Momentum indicator comparing closing price to price range over time"
    calculation_label = "Stochastic"

    def __init__(self, config: StochasticConfig = StochasticConfig()):
        self.config = config

    @property
    def min_data_points(self) -> int:
        return self.config.k_period + self.config.d_period + 5

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        cfg = self.config
        current = stochastic(bars, cfg.k_period, cfg.d_period)
        previous = stochastic(bars[:-1], cfg.k_period, cfg.d_period)
        logger.debug("Stochastic for %s: %%K=%.2f %%D=%.2f", symbol, current.k, current.d)
        meta = {"k": current.k, "d": current.d}

        bullish_cross = previous.k <= previous.d and current.k > current.d
        bearish_cross = previous.k >= previous.d and current.k < current.d

        if current.k < cfg.oversold:
            confidence = self._confidence(current.k, cfg.oversold, buy=True)
            if bullish_cross:
                confidence = min(0.95, confidence + 0.10)
            cross = " with bullish crossover" if bullish_cross else ""
            return self._signal(
                symbol, SignalType.BUY, confidence,
                f"Stochastic oversold (%K={current.k:.2f} < {cfg.oversold:.0f}){cross}. Reversal signal.",
                metadata=meta,
            )
        if current.k > cfg.overbought:
            confidence = self._confidence(current.k, cfg.overbought, buy=False)
            if bearish_cross:
                confidence = min(0.95, confidence + 0.10)
            cross = " with bearish crossover" if bearish_cross else ""
            return self._signal(
                symbol, SignalType.SELL, confidence,
                f"Stochastic overbought (%K={current.k:.2f} > {cfg.overbought:.0f}){cross}. Reversal signal.",
                metadata=meta,
            )
        return self._signal(
            symbol, SignalType.HOLD, 0.5,
            f"Stochastic neutral (%K={current.k:.2f}, %D={current.d:.2f}) - no clear signal.",
            metadata=meta,
        )

    @staticmethod
    def _confidence(k: float, threshold: float, buy: bool) -> float:
        if buy:
            return min(0.95, 0.7 + (threshold - k) / threshold * 0.25)
        return min(0.95, 0.7 + (k - threshold) / (100 - threshold) * 0.25)
