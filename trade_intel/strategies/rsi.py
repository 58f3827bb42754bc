"""
RSI mean-reversion strategy.
Buy when RSI < oversold (40), sell when RSI > overbought (60).
Thresholds are wider than the textbook 30/70 for large-cap names.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.indicators import rsi
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.rsi")


@dataclass(frozen=True)
class RSIConfig:
    period: int = 14
    oversold: float = 40.0
    overbought: float = 60.0


class RSIStrategy(BaseStrategy):
    """Momentum-based strategy using Relative Strength Index."""

    strategy_name = "RSI Strategy"
    strategy_description = "Momentum-based strategy using Relative Strength Index"
    calculation_label = "RSI"

    def __init__(self, config: RSIConfig = RSIConfig()):
        self.config = config

    @property
    def min_data_points(self) -> int:
        return self.config.period + 5

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        cfg = self.config
        value = rsi(bars, cfg.period)
        logger.debug("RSI for %s: %.2f", symbol, value)
        meta = {"rsi": value}

        if value < cfg.oversold:
            return self._signal(
                symbol, SignalType.BUY, self._confidence(value, cfg.oversold, buy=True),
                f"RSI {value:.2f} is below oversold threshold {cfg.oversold:.2f} - potential reversal upward",
                metadata=meta,
            )
        if value > cfg.overbought:
            return self._signal(
                symbol, SignalType.SELL, self._confidence(value, cfg.overbought, buy=False),
                f"RSI {value:.2f} is above overbought threshold {cfg.overbought:.2f} - potential reversal downward",
                metadata=meta,
            )
        return self._signal(
            symbol, SignalType.HOLD, 0.5,
            f"RSI {value:.2f} is in neutral zone ({cfg.oversold:.2f} - {cfg.overbought:.2f})",
            metadata=meta,
        )

    @staticmethod
    def _confidence(value: float, threshold: float, buy: bool) -> float:
        """Further past the threshold = more confident."""
        if buy:
            return min(0.95, 0.6 + (threshold - value) / threshold * 0.35)
        return min(0.95, 0.6 + (value - threshold) / (100 - threshold) * 0.35)
