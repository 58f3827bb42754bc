"""Analytics: performance metrics and signal consensus."""

from trade_intel.analytics.consensus import ConsensusResult, majority, tally_signals
from trade_intel.analytics.metrics import (
    PerformanceMetrics,
    compute_metrics,
    sharpe_ratio,
    sortino_ratio,
    max_drawdown,
    win_rate,
    profit_factor,
)

__all__ = [
    "ConsensusResult",
    "PerformanceMetrics",
    "compute_metrics",
    "majority",
    "max_drawdown",
    "profit_factor",
    "sharpe_ratio",
    "sortino_ratio",
    "tally_signals",
    "win_rate",
]
