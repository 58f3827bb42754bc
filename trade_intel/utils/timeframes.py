"""Timeframe string helpers."""

from __future__ import annotations
from datetime import datetime, timedelta


def timeframe_minutes(tf: str) -> int:
    """Convert Binance-style timeframe (e.g. '5m', '1h', '1d', '1w') to minutes."""
    tf = tf.strip().lower()
    if tf.endswith("m"):
        return int(tf[:-1])
    if tf.endswith("h"):
        return int(tf[:-1]) * 60
    if tf.endswith("d"):
        return int(tf[:-1]) * 60 * 24
    if tf.endswith("w"):
        return int(tf[:-1]) * 60 * 24 * 7
    raise ValueError(f"Unsupported timeframe: {tf}")


def lookback_start(end: datetime, tf: str, bars: int) -> datetime:
    """Start of a window holding `bars` candles of timeframe `tf` that ends at `end`."""
    return end - timedelta(minutes=timeframe_minutes(tf) * bars)
