"""
Support and resistance levels from recent swing highs/lows.

Swing points are bars whose low (high) is strictly below (above) the two
bars on either side, searched over the lookback window and bounded by the
available history. Levels within 2% of each other are merged into their
running mean. BUY when price bounces off the nearest support, SELL when it
approaches the nearest resistance.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.support_resistance")


@dataclass(frozen=True)
class SupportResistanceConfig:
    lookback_period: int = 20
    bounce_threshold_pct: float = 1.5
    min_touches: int = 1
    merge_pct: float = 2.0


def find_swing_lows(bars: Sequence[Bar], lookback: int) -> List[float]:
    n = len(bars)
    lows = []
    for offset in range(2, min(n - 2, lookback)):
        j = n - 1 - offset
        low = bars[j].low
        if all(low < bars[k].low for k in (j - 2, j - 1, j + 1, j + 2)):
            lows.append(low)
    return lows


def find_swing_highs(bars: Sequence[Bar], lookback: int) -> List[float]:
    n = len(bars)
    highs = []
    for offset in range(2, min(n - 2, lookback)):
        j = n - 1 - offset
        high = bars[j].high
        if all(high > bars[k].high for k in (j - 2, j - 1, j + 1, j + 2)):
            highs.append(high)
    return highs


def consolidate_levels(levels: Sequence[float], merge_pct: float = 2.0, min_touches: int = 1) -> List[float]:
    """Merge sorted levels closer than merge_pct into a running mean."""
    if not levels:
        return []
    ordered = sorted(levels)
    merged: List[float] = []
    current, count = ordered[0], 1
    for level in ordered[1:]:
        if abs(level - current) / current * 100 < merge_pct:
            current = (current * count + level) / (count + 1)
            count += 1
        else:
            if count >= min_touches:
                merged.append(current)
            current, count = level, 1
    if count >= min_touches:
        merged.append(current)
    return merged


class SupportResistanceStrategy(BaseStrategy):
    strategy_name = "Support & Resistance Strategy"
    strategy_description = "Trades based on key support and resistance levels from price action"
    calculation_label = "level"

    def __init__(self, config: SupportResistanceConfig = SupportResistanceConfig()):
        self.config = config

    @property
    def min_data_points(self) -> int:
        return self.config.lookback_period + 10

    def support_levels(self, bars: Sequence[Bar]) -> List[float]:
        cfg = self.config
        return consolidate_levels(find_swing_lows(bars, cfg.lookback_period), cfg.merge_pct, cfg.min_touches)

    def resistance_levels(self, bars: Sequence[Bar]) -> List[float]:
        cfg = self.config
        return consolidate_levels(find_swing_highs(bars, cfg.lookback_period), cfg.merge_pct, cfg.min_touches)

    def is_near(self, price: float, level: float) -> bool:
        return abs((price - level) / level) * 100 <= self.config.bounce_threshold_pct

    def count_touches(self, bars: Sequence[Bar], level: float) -> int:
        return sum(1 for b in bars if self.is_near(b.low, level) or self.is_near(b.high, level))

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        price = bars[-1].close
        supports = self.support_levels(bars)
        resistances = self.resistance_levels(bars)
        support = _nearest(price, [lvl for lvl in supports if lvl <= price])
        resistance = _nearest(price, [lvl for lvl in resistances if lvl >= price])
        logger.debug(
            "Support/Resistance for %s: price=%.2f supports=%d resistances=%d",
            symbol, price, len(supports), len(resistances),
        )
        meta = {"support": support, "resistance": resistance}

        if support is not None and self.is_near(price, support):
            if price > bars[-2].close:
                return self._signal(
                    symbol, SignalType.BUY, self._level_confidence(price, support, bars),
                    f"Price bouncing off support at {support:.2f} (current: {price:.2f}). "
                    f"Strong support level with {self.count_touches(bars, support)} historical touches.",
                    target_price=resistance * 0.99 if resistance is not None else None,
                    stop_loss=support * 0.98,
                    metadata=meta,
                )
            return self._signal(
                symbol, SignalType.HOLD, 0.6,
                f"Price testing support at {support:.2f} (current: {price:.2f}). Waiting for bounce confirmation.",
                metadata=meta,
            )

        if resistance is not None and self.is_near(price, resistance):
            return self._signal(
                symbol, SignalType.SELL, self._level_confidence(price, resistance, bars),
                f"Price approaching resistance at {resistance:.2f} (current: {price:.2f}). "
                f"Strong resistance level with {self.count_touches(bars, resistance)} historical touches.",
                target_price=support * 1.01 if support is not None else None,
                stop_loss=resistance * 1.02,
                metadata=meta,
            )

        support_info = f"Support: {support:.2f}" if support is not None else "No nearby support"
        resistance_info = f"Resistance: {resistance:.2f}" if resistance is not None else "No nearby resistance"
        return self._signal(
            symbol, SignalType.HOLD, 0.5,
            f"Price at {price:.2f} between levels. {support_info} | {resistance_info}. "
            "Waiting for price to reach key level.",
            metadata=meta,
        )

    def _level_confidence(self, price: float, level: float, bars: Sequence[Bar]) -> float:
        cfg = self.config
        touches = self.count_touches(bars[-cfg.lookback_period:], level)
        touch_bonus = min(0.20, touches * 0.05)
        proximity_bonus = 0.10 * (1 - abs(price - level) / level / cfg.bounce_threshold_pct)
        return min(0.90, 0.65 + touch_bonus + proximity_bonus)


def _nearest(price: float, levels: Sequence[float]) -> Optional[float]:
    if not levels:
        return None
    return min(levels, key=lambda lvl: abs(price - lvl))
