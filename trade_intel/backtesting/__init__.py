"""Backtesting engine: bar-by-bar long-only simulation."""

from trade_intel.backtesting.engine import BacktestEngine, BacktestResult

__all__ = ["BacktestEngine", "BacktestResult"]
