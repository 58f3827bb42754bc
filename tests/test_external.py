"""Unit tests for externally produced signals."""

import pytest
from trade_intel.core.types import Signal, SignalType
from trade_intel.strategies.external import ExternalSignalStrategy, parse_signal_response

RESPONSE = """SIGNAL: BUY
CONFIDENCE: 72%
REASONING: Strong quarterly results.
Guidance raised for next year.
TARGET_PRICE: 2,950.50
STOP_LOSS: 2710
"""


def test_parse_full_response():
    signal = parse_signal_response(RESPONSE, symbol="RELIANCE", strategy="News")
    assert signal.signal_type == SignalType.BUY
    assert signal.confidence == pytest.approx(0.72)
    assert signal.reasoning == "Strong quarterly results.\nGuidance raised for next year."
    assert signal.target_price == pytest.approx(2950.5)
    assert signal.stop_loss == pytest.approx(2710.0)
    assert (signal.symbol, signal.strategy) == ("RELIANCE", "News")


def test_parse_caps_confidence():
    signal = parse_signal_response("SIGNAL: SELL\nCONFIDENCE: 150\nREASONING: overheated")
    assert signal.signal_type == SignalType.SELL
    assert signal.confidence == 1.0


def test_parse_unstructured_falls_back():
    signal = parse_signal_response("The market looks uncertain.")
    assert signal.signal_type == SignalType.HOLD
    assert signal.confidence == 0.5
    assert signal.reasoning == "The market looks uncertain."
    assert signal.target_price is None


def test_external_strategy_not_backtestable(make_bars):
    strategy = ExternalSignalStrategy(
        "AI Strategy", "Model output", lambda symbol, bars: Signal(SignalType.SELL, 0.8, "model says sell"),
    )
    assert strategy.is_backtestable() is False
    assert strategy.min_data_points == 1
    assert strategy.name == "AI Strategy"
    assert strategy.analyze("TEST", make_bars([100.0])).signal_type == SignalType.SELL


def test_text_producer(make_bars):
    strategy = ExternalSignalStrategy.from_text_producer(
        "News Sentiment", "Headlines", lambda symbol, bars: f"SIGNAL: BUY\nCONFIDENCE: 64\nREASONING: {symbol} upbeat",
    )
    signal = strategy.analyze("TCS", make_bars([100.0, 101.0]))
    assert signal.signal_type == SignalType.BUY
    assert signal.confidence == pytest.approx(0.64)
    assert signal.reasoning == "TCS upbeat"
    assert signal.strategy == "News Sentiment"


def test_producer_failure_is_hold(make_bars):
    def producer(symbol, bars):
        raise ConnectionError("service unavailable")

    signal = ExternalSignalStrategy("AI Strategy", "", producer).analyze("TEST", make_bars([100.0]))
    assert signal.signal_type == SignalType.HOLD
    assert signal.confidence == 0.0
    assert signal.metadata["error"] == "service unavailable"
