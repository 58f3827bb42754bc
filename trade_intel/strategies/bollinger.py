"""
Bollinger Bands mean reversion.
Buy near the lower band, sell near the upper band, and flag band squeezes
(low volatility, breakout pending) as HOLD.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.indicators import bollinger_bands
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.bollinger")


@dataclass(frozen=True)
class BollingerConfig:
    period: int = 20
    std_dev_multiplier: float = 2.0
    touch_threshold_pct: float = 2.0  # "touching" = within this % of a band
    squeeze_width_pct: float = 10.0


class BollingerBandsStrategy(BaseStrategy):
    strategy_name = "Bollinger Bands Strategy"
    strategy_description = "Mean reversion strategy using Bollinger Bands"
    calculation_label = "Bollinger Bands"

    def __init__(self, config: BollingerConfig = BollingerConfig()):
        self.config = config

    @property
    def min_data_points(self) -> int:
        return self.config.period + 5

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        cfg = self.config
        bands = bollinger_bands(bars, cfg.period, cfg.std_dev_multiplier)
        price = bars[-1].close
        width = bands.width_pct
        logger.debug(
            "Bollinger Bands for %s: upper=%.2f middle=%.2f lower=%.2f price=%.2f width=%.2f%%",
            symbol, bands.upper, bands.middle, bands.lower, price, width,
        )
        meta = {"upper": bands.upper, "middle": bands.middle, "lower": bands.lower, "width_pct": width}

        if bands.upper == bands.lower:
            return self._signal(
                symbol, SignalType.HOLD, 0.5,
                "Band squeeze detected (width: 0.00%). No volatility - wait for direction.",
                metadata=meta,
            )

        # bands at or below zero are never touched
        from_lower = (price - bands.lower) / bands.lower * 100 if bands.lower > 0 else None
        from_upper = (bands.upper - price) / bands.upper * 100 if bands.upper > 0 else None

        if from_lower is not None and from_lower <= cfg.touch_threshold_pct:
            return self._signal(
                symbol, SignalType.BUY, self._touch_confidence(price, bands.lower, bands.middle),
                f"Price {price:.2f} touching lower band {bands.lower:.2f} ({abs(from_lower):.2f}% away). "
                f"Mean reversion expected. Band width: {width:.2f}%",
                metadata=meta,
            )
        if from_upper is not None and from_upper <= cfg.touch_threshold_pct:
            return self._signal(
                symbol, SignalType.SELL, self._touch_confidence(price, bands.upper, bands.middle),
                f"Price {price:.2f} touching upper band {bands.upper:.2f} ({abs(from_upper):.2f}% away). "
                f"Mean reversion expected. Band width: {width:.2f}%",
                metadata=meta,
            )
        if width < cfg.squeeze_width_pct:
            return self._signal(
                symbol, SignalType.HOLD, 0.5,
                f"Band squeeze detected (width: {width:.2f}%). "
                "Low volatility - potential breakout coming. Wait for direction.",
                metadata=meta,
            )
        if price > bands.middle:
            above = (price - bands.middle) / bands.middle * 100
            return self._signal(
                symbol, SignalType.HOLD, 0.55,
                f"Price {price:.2f} is {above:.2f}% above middle band {bands.middle:.2f}. Moderate bullish momentum.",
                metadata=meta,
            )
        below = (bands.middle - price) / bands.middle * 100
        return self._signal(
            symbol, SignalType.HOLD, 0.45,
            f"Price {price:.2f} is {below:.2f}% below middle band {bands.middle:.2f}. Moderate bearish momentum.",
            metadata=meta,
        )

    @staticmethod
    def _touch_confidence(price: float, band: float, middle: float) -> float:
        """Closer to the band (relative to the band-to-middle distance) = more confident."""
        position_ratio = abs(price - band) / abs(band - middle)
        return max(0.0, min(0.95, 0.7 + (1 - position_ratio) * 0.2))
