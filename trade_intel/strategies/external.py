"""
Placeholder for externally produced signals (AI models, news sentiment).

These call out to other services on every analysis, so they are never
replayed by the backtester.
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Iterable, Optional, Sequence

from trade_intel.core.types import Bar, Signal, SignalType
from trade_intel.strategies.base import BaseStrategy

logger = logging.getLogger("trade_intel.strategies.external")

SignalProducer = Callable[[str, Sequence[Bar]], Signal]
TextProducer = Callable[[str, Sequence[Bar]], str]

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def _line_value(lines: Iterable[str], prefix: str) -> Optional[str]:
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix):].strip()
    return None


def _block(lines: Sequence[str], start: str, stops: Sequence[str]) -> Optional[str]:
    captured = None
    for line in lines:
        if captured is None:
            if line.startswith(start):
                first = line[len(start):].strip()
                captured = [first] if first else []
        elif any(line.startswith(s) for s in stops):
            break
        else:
            captured.append(line)
    if captured is None:
        return None
    return "\n".join(captured).strip()


def _first_number(text: Optional[str]) -> Optional[float]:
    if not text:
        return None
    m = _NUMBER.search(text.replace(",", ""))
    return float(m.group()) if m else None


def parse_signal_response(text: str, symbol: str = "", strategy: str = "") -> Signal:
    """
    Parse the structured reply of a signal producer:

        SIGNAL: BUY
        CONFIDENCE: 72
        REASONING: ...
        TARGET_PRICE: 1234.5
        STOP_LOSS: 1190

    Confidence is given in percent and capped at 100. Missing fields fall back
    to HOLD / 0.5 / the raw text.
    """
    text = text or ""
    lines = text.splitlines()

    signal_type = SignalType.HOLD
    raw_signal = _line_value(lines, "SIGNAL:")
    if raw_signal:
        upper = raw_signal.upper()
        if upper.startswith("BUY"):
            signal_type = SignalType.BUY
        elif upper.startswith("SELL"):
            signal_type = SignalType.SELL

    confidence = 0.5
    raw_confidence = _first_number(_line_value(lines, "CONFIDENCE:"))
    if raw_confidence is not None:
        confidence = min(raw_confidence, 100.0) / 100.0

    reasoning = _block(lines, "REASONING:", ("TARGET_PRICE:", "STOP_LOSS:")) or text.strip()

    return Signal(
        signal_type=signal_type,
        confidence=confidence,
        reasoning=reasoning,
        target_price=_first_number(_line_value(lines, "TARGET_PRICE:")),
        stop_loss=_first_number(_line_value(lines, "STOP_LOSS:")),
        symbol=symbol,
        strategy=strategy,
    )


class ExternalSignalStrategy(BaseStrategy):
    """Wraps a producer callable (symbol, bars) -> Signal."""

    calculation_label = "external signal"

    def __init__(self, name: str, description: str, producer: SignalProducer):
        self.strategy_name = name
        self.strategy_description = description
        self._producer = producer

    @classmethod
    def from_text_producer(cls, name: str, description: str, producer: TextProducer) -> "ExternalSignalStrategy":
        """Producer returns SIGNAL:/CONFIDENCE:/REASONING: text instead of a Signal."""

        def _produce(symbol: str, bars: Sequence[Bar]) -> Signal:
            return parse_signal_response(producer(symbol, bars), symbol=symbol, strategy=name)

        return cls(name, description, _produce)

    @property
    def min_data_points(self) -> int:
        return 1

    def is_backtestable(self) -> bool:
        return False

    def _evaluate(self, symbol: str, bars: Sequence[Bar]) -> Signal:
        signal = self._producer(symbol, bars)
        logger.debug("%s for %s: %s (%.2f)", self.name, symbol, signal.signal_type.value, signal.confidence)
        return signal
