"""Historical bar sources."""

from trade_intel.data.source import (
    BarSource,
    CsvBarSource,
    InMemoryBarSource,
    bars_from_frame,
    bars_to_frame,
)

__all__ = ["BarSource", "CsvBarSource", "InMemoryBarSource", "bars_from_frame", "bars_to_frame"]
