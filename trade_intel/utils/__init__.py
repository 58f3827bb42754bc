"""Utils: timeframes, decimal rounding."""

from trade_intel.utils.rounding import round_half_up, whole_shares
from trade_intel.utils.timeframes import timeframe_minutes, lookback_start

__all__ = ["round_half_up", "whole_shares", "timeframe_minutes", "lookback_start"]
