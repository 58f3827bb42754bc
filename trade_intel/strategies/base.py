"""Abstract strategy: indicators in, one Signal out."""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Sequence

from trade_intel.core.types import Bar, Signal

logger = logging.getLogger("trade_intel.strategies")


class BaseStrategy(ABC):
    """
    Strategy analyzes the latest bar of an ascending history and returns a Signal.

    analyze() never raises: short histories give HOLD with "Insufficient data",
    calculation failures give HOLD with an error reasoning, both at confidence 0.
    Subclasses implement _evaluate() and may assume len(bars) >= min_data_points.
    """

    strategy_name: str = ""
    strategy_description: str = ""
    # Reasoning label for the error HOLD, e.g. "RSI" -> "Error in RSI calculation"
    calculation_label: str = ""
    enabled: bool = True

    @property
    def name(self) -> str:
        return self.strategy_name

    @property
    def description(self) -> str:
        return self.strategy_description

    @property
    def min_data_points(self) -> int:
        return 20

    def validate(self) -> bool:
        """Strategy can run: enabled and named."""
        return self.enabled and bool(self.name)

    def is_backtestable(self) -> bool:
        """False for strategies that call external services per bar."""
        return True

    def analyze(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        if bars is None or len(bars) < self.min_data_points:
            logger.warning(
                "Not enough data for %s on %s. Need at least %d data points, have %d",
                self.name, symbol, self.min_data_points, 0 if bars is None else len(bars),
            )
            return Signal.hold(
                f"Insufficient data: need {self.min_data_points} bars",
                symbol=symbol,
                strategy=self.name,
            )
        try:
            return self._evaluate(symbol, bars)
        except Exception as e:
            logger.error("Error running %s for %s: %s", self.name, symbol, e)
            return Signal.hold(
                f"Error in {self.calculation_label or self.name} calculation",
                symbol=symbol,
                strategy=self.name,
                metadata={"error": str(e)},
            )

    @abstractmethod
    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        """Compute the signal for the last bar. May raise; analyze() guards it."""
        pass

    def _signal(self, symbol: str, signal_type, confidence: float, reasoning: str, **kwargs) -> Signal:
        return Signal(
            signal_type=signal_type,
            confidence=confidence,
            reasoning=reasoning,
            symbol=symbol,
            strategy=self.name,
            **kwargs,
        )
