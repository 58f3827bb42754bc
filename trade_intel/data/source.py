"""
Bar sources: where historical OHLCV comes from.
Every source returns bars in ascending timestamp order without duplicates.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from trade_intel.core.types import Bar

logger = logging.getLogger("trade_intel.data")

OHLCV_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]


def bars_from_frame(df: pd.DataFrame) -> List[Bar]:
    """
    DataFrame (timestamp or time, open, high, low, close, volume) -> ascending Bars.
    Rows are sorted and duplicate timestamps dropped (last row wins).
    """
    if df is None or df.empty:
        return []
    if "timestamp" not in df.columns and "time" in df.columns:
        df = df.rename(columns={"time": "timestamp"})
    missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing OHLCV columns: {', '.join(missing)}")
    df = df[OHLCV_COLUMNS].copy()
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    df[OHLCV_COLUMNS[1:]] = df[OHLCV_COLUMNS[1:]].astype(float)
    df = df.sort_values("timestamp", kind="stable").drop_duplicates(subset="timestamp", keep="last")
    return [
        Bar(
            timestamp=row.timestamp.to_pydatetime(),
            open=row.open,
            high=row.high,
            low=row.low,
            close=row.close,
            volume=row.volume,
        )
        for row in df.itertuples(index=False)
    ]


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    return pd.DataFrame(
        [(b.timestamp, b.open, b.high, b.low, b.close, b.volume) for b in bars],
        columns=OHLCV_COLUMNS,
    )


def _in_range(bars: Iterable[Bar], start: Optional[datetime], end: Optional[datetime]) -> List[Bar]:
    return [
        b for b in bars
        if (start is None or b.timestamp >= start) and (end is None or b.timestamp <= end)
    ]


class BarSource(ABC):
    """Read-only history provider."""

    @abstractmethod
    def get_bars(self, symbol: str, start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[Bar]:
        """Bars for symbol with start <= timestamp <= end, ascending."""
        pass


class InMemoryBarSource(BarSource):
    def __init__(self, bars_by_symbol: Optional[Dict[str, Sequence[Bar]]] = None):
        self._bars: Dict[str, List[Bar]] = {}
        for symbol, bars in (bars_by_symbol or {}).items():
            self.add(symbol, bars)

    def add(self, symbol: str, bars: Sequence[Bar]) -> None:
        by_time = {b.timestamp: b for b in bars}
        self._bars[symbol] = [by_time[t] for t in sorted(by_time)]

    def get_bars(self, symbol: str, start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[Bar]:
        return _in_range(self._bars.get(symbol, []), start, end)


class CsvBarSource(BarSource):
    """
    CSV with columns timestamp, open, high, low, close, volume and an optional
    symbol column. Without a symbol column the file is one instrument and the
    symbol argument is ignored.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._frame: Optional[pd.DataFrame] = None

    def _load(self) -> pd.DataFrame:
        if self._frame is None:
            if not self.path.exists():
                raise FileNotFoundError(f"Bar file not found: {self.path}")
            self._frame = pd.read_csv(self.path)
            logger.info("Loaded %d rows from %s", len(self._frame), self.path)
        return self._frame

    def get_bars(self, symbol: str, start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[Bar]:
        df = self._load()
        if "symbol" in df.columns:
            df = df[df["symbol"].astype(str).str.upper() == symbol.upper()]
        bars = _in_range(bars_from_frame(df), start, end)
        logger.debug("%s: %d bars from %s", symbol, len(bars), self.path.name)
        return bars
