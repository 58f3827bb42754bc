"""
Majority vote over the signals of several strategies run on the same bars.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Tuple

from trade_intel.core.types import Signal, SignalType


@dataclass(frozen=True)
class ConsensusResult:
    buy_votes: int
    sell_votes: int
    hold_votes: int
    consensus: SignalType
    # (strategy key, signal) in the order the strategies were run
    signals: Tuple[Tuple[str, Signal], ...]

    @property
    def total_votes(self) -> int:
        return self.buy_votes + self.sell_votes + self.hold_votes


def majority(buy: int, sell: int, hold: int) -> SignalType:
    """Strictly greatest category wins; any tie is HOLD."""
    if buy > sell and buy > hold:
        return SignalType.BUY
    if sell > buy and sell > hold:
        return SignalType.SELL
    return SignalType.HOLD


def tally_signals(named_signals: Iterable[Tuple[str, Signal]]) -> ConsensusResult:
    signals = tuple(named_signals)
    votes = Counter(signal.signal_type for _, signal in signals)
    buy, sell, hold = votes[SignalType.BUY], votes[SignalType.SELL], votes[SignalType.HOLD]
    return ConsensusResult(
        buy_votes=buy,
        sell_votes=sell,
        hold_votes=hold,
        consensus=majority(buy, sell, hold),
        signals=signals,
    )
