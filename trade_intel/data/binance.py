"""
Historical klines from Binance (spot or USDT-M futures) with rate-limit retry.
"""

from __future__ import annotations
import functools
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

import pandas as pd

from binance.client import Client
from binance.exceptions import BinanceAPIException

from trade_intel.core.types import Bar
from trade_intel.data.source import BarSource, _in_range, bars_from_frame

logger = logging.getLogger("trade_intel.data.binance")

KLINE_COLUMNS = [
    "open_time", "open", "high", "low", "close", "volume",
    "close_time", "quote_av", "num_trades", "tb_base_av", "tb_quote_av", "ignore",
]


# 429: too many requests; 418: IP banned for ignoring 429s
RATE_LIMIT_STATUSES = (429, 418)


def retry_on_rate_limit(max_retries: int = 3, base_delay: float = 1.0, retry_on=(BinanceAPIException,)):
    """
    Retry a kline request while Binance answers with a rate-limit status,
    sleeping base_delay, 2 * base_delay, ... between attempts. Other errors,
    and the error from the final attempt, propagate.
    """
    def decorator(request):
        @functools.wraps(request)
        def wrapped(*args, **kwargs):
            attempt = 1
            while True:
                try:
                    return request(*args, **kwargs)
                except retry_on as e:
                    status = getattr(e, "status_code", None)
                    if status not in RATE_LIMIT_STATUSES or attempt >= max_retries:
                        raise
                    delay = base_delay * 2 ** (attempt - 1)
                    logger.warning(
                        "%s rate limited (HTTP %s), attempt %d/%d, retrying in %.1fs",
                        request.__name__, status, attempt, max_retries, delay,
                    )
                    time.sleep(delay)
                    attempt += 1
        return wrapped
    return decorator


def _to_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def klines_to_frame(raw: list) -> pd.DataFrame:
    df = pd.DataFrame(raw, columns=KLINE_COLUMNS)
    df[["open", "high", "low", "close", "volume"]] = df[["open", "high", "low", "close", "volume"]].astype(float)
    df["timestamp"] = pd.to_datetime(df["open_time"], unit="ms")
    return df[["timestamp", "open", "high", "low", "close", "volume"]]


class BinanceBarSource(BarSource):
    """Bar timestamps are candle open times in naive UTC."""

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        interval: str = "1d",
        futures: bool = False,
        client: Optional[Client] = None,
    ):
        self._client = client if client is not None else Client(api_key or None, api_secret or None)
        self.interval = interval
        self.futures = futures
        logger.info("Binance bars: %s klines, interval %s", "futures" if futures else "spot", interval)

    @retry_on_rate_limit(max_retries=3, base_delay=1.0)
    def _fetch(self, symbol: str, start_ms: Optional[int], end_ms: Optional[int]) -> list:
        fetch = self._client.futures_historical_klines if self.futures else self._client.get_historical_klines
        return fetch(
            symbol=symbol,
            interval=self.interval,
            start_str=str(start_ms) if start_ms is not None else None,
            end_str=str(end_ms) if end_ms is not None else None,
        )

    def get_bars(self, symbol: str, start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[Bar]:
        raw = self._fetch(
            symbol,
            _to_ms(start) if start is not None else None,
            _to_ms(end) if end is not None else None,
        )
        bars = bars_from_frame(klines_to_frame(raw)) if raw else []
        logger.debug("%s: fetched %d klines", symbol, len(bars))
        return _in_range(bars, _naive_utc(start), _naive_utc(end))


def _naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)
