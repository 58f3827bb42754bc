"""
Volume breakout strategy.
A close-to-close move beyond the price threshold on volume above
multiplier x the recent average is a breakout in the direction of the move.
Breakout signals carry a 5% target and a 2% stop.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.volume_breakout")


@dataclass(frozen=True)
class VolumeBreakoutConfig:
    volume_period: int = 20
    volume_multiplier: float = 1.5
    price_change_pct: float = 1.0
    strong_breakout_pct: float = 2.5
    target_pct: float = 5.0
    stop_pct: float = 2.0


class VolumeBreakoutStrategy(BaseStrategy):
    strategy_name = "Volume Breakout Strategy"
    strategy_description = "Identifies significant price moves confirmed by high trading volume"
    calculation_label = "volume"

    def __init__(self, config: VolumeBreakoutConfig = VolumeBreakoutConfig()):
        self.config = config

    @property
    def min_data_points(self) -> int:
        return self.config.volume_period + 5

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        cfg = self.config
        current, previous = bars[-1], bars[-2]
        # average includes the current bar
        avg_volume = float(np.mean([b.volume for b in bars[-cfg.volume_period:]]))
        if avg_volume <= 0:
            return self._signal(symbol, SignalType.HOLD, 0.5, "No trading volume in the lookback window.")

        volume_ratio = current.volume / avg_volume
        price_change = (current.close - previous.close) / previous.close * 100.0
        high_volume = current.volume > avg_volume * cfg.volume_multiplier
        significant_move = abs(price_change) > cfg.price_change_pct
        strong = abs(price_change) > cfg.strong_breakout_pct
        logger.debug(
            "Volume breakout for %s: volume=%.0f avg=%.0f ratio=%.2fx change=%.2f%%",
            symbol, current.volume, avg_volume, volume_ratio, price_change,
        )
        meta = {"volume_ratio": volume_ratio, "price_change_pct": price_change, "avg_volume": avg_volume}
        volume_text = f"{volume_ratio:.1f}x average volume ({current.volume:,.0f} vs {avg_volume:,.0f} avg)"

        if high_volume and significant_move:
            confidence = self._confidence(abs(price_change), volume_ratio, strong)
            price = current.close
            if price_change > 0:
                return self._signal(
                    symbol, SignalType.BUY, confidence,
                    f"Bullish volume breakout: Price surged {price_change:.2f}% on {volume_text}. "
                    + ("STRONG breakout signal!" if strong else "Moderate breakout."),
                    target_price=price * (1 + cfg.target_pct / 100),
                    stop_loss=price * (1 - cfg.stop_pct / 100),
                    metadata=meta,
                )
            return self._signal(
                symbol, SignalType.SELL, confidence,
                f"Bearish volume breakout: Price dropped {abs(price_change):.2f}% on {volume_text}. "
                + ("STRONG breakdown signal!" if strong else "Moderate breakdown."),
                target_price=price * (1 - cfg.target_pct / 100),
                stop_loss=price * (1 + cfg.stop_pct / 100),
                metadata=meta,
            )
        if high_volume:
            return self._signal(
                symbol, SignalType.HOLD, 0.6,
                f"High volume ({volume_ratio:.1f}x avg) detected but price change ({price_change:.2f}%) "
                "below threshold. Watching for breakout.",
                metadata=meta,
            )
        if significant_move:
            return self._signal(
                symbol, SignalType.HOLD, 0.4,
                f"Price moved {price_change:.2f}% but on low volume ({volume_ratio:.1f}x avg). "
                "Breakout not confirmed.",
                metadata=meta,
            )
        return self._signal(
            symbol, SignalType.HOLD, 0.5,
            f"Normal trading: Volume {volume_ratio:.1f}x avg, Price {price_change:.2f}%. No breakout detected.",
            metadata=meta,
        )

    def _confidence(self, price_change: float, volume_ratio: float, strong: bool) -> float:
        mult = self.config.volume_multiplier
        price_bonus = min(0.15, price_change / 5.0 * 0.15)
        volume_bonus = min(0.10, (volume_ratio - mult) / mult * 0.10)
        strong_bonus = 0.05 if strong else 0.0
        return min(0.95, 0.70 + price_bonus + volume_bonus + strong_bonus)
