"""
Moving average crossover (trend state).
Short MA above long MA = uptrend (BUY / stay long); otherwise SELL (go flat).
Golden and death crosses on the current bar are called out in the reasoning.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.indicators import ema, sma
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.ma_crossover")


@dataclass(frozen=True)
class MACrossoverConfig:
    short_period: int = 10
    long_period: int = 20
    use_ema: bool = False


class MovingAverageCrossoverStrategy(BaseStrategy):
    strategy_description = "Moving average crossover strategy - 10/20 SMA (short-term trend)"
    calculation_label = "MA"

    def __init__(self, config: MACrossoverConfig = MACrossoverConfig()):
        self.config = config

    @property
    def name(self) -> str:
        return "EMA Crossover Strategy" if self.config.use_ema else "MA Crossover Strategy"

    @property
    def min_data_points(self) -> int:
        return self.config.long_period + 5

    def _average(self, bars: Sequence[Bar], period: int) -> float:
        return ema(bars, period) if self.config.use_ema else sma(bars, period)

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        cfg = self.config
        ma_type = "EMA" if cfg.use_ema else "SMA"
        short_ma = self._average(bars, cfg.short_period)
        long_ma = self._average(bars, cfg.long_period)
        prev_short = self._average(bars[:-1], cfg.short_period)
        prev_long = self._average(bars[:-1], cfg.long_period)
        logger.debug(
            "%s for %s: short(%d)=%.2f long(%d)=%.2f",
            ma_type, symbol, cfg.short_period, short_ma, cfg.long_period, long_ma,
        )
        meta = {"short_ma": short_ma, "long_ma": long_ma}
        short_label = f"{ma_type}({cfg.short_period})={short_ma:.2f}"
        long_label = f"{ma_type}({cfg.long_period})={long_ma:.2f}"
        confidence = self._confidence(short_ma, long_ma)

        if short_ma > long_ma:
            if prev_short <= prev_long:
                reasoning = f"Golden Cross! {short_label} crossed ABOVE {long_label} - entering uptrend."
            else:
                spread = (short_ma - long_ma) / long_ma * 100
                reasoning = f"Uptrend: {short_label} is {spread:.2f}% above {long_label}"
            return self._signal(symbol, SignalType.BUY, confidence, reasoning, metadata=meta)

        if prev_short >= prev_long and short_ma < long_ma:
            reasoning = f"Death Cross! {short_label} crossed BELOW {long_label} - exiting to flat."
        else:
            spread = (long_ma - short_ma) / long_ma * 100
            reasoning = f"Downtrend: {short_label} is {spread:.2f}% below {long_label}"
        return self._signal(symbol, SignalType.SELL, confidence, reasoning, metadata=meta)

    @staticmethod
    def _confidence(short_ma: float, long_ma: float) -> float:
        percent_difference = abs((short_ma - long_ma) / long_ma) * 100
        return min(0.95, 0.75 + min(0.15, percent_difference * 0.05))
