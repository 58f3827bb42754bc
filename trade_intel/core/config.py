"""
Load configuration from config.yaml and .env. API keys only from env.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

DEFAULT_CONSENSUS = (
    "rsi",
    "macd",
    "bollinger_bands",
    "ma_crossover",
    "stochastic",
    "volume_breakout",
    "support_resistance",
)


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    # Env overrides (for secrets and overrides)
    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    bars = data.get("data", {})
    backtest = data.get("backtest", {})
    consensus = data.get("consensus", {})
    logging_cfg = data.get("logging", {})

    return Config(
        symbol=env("SYMBOL", data.get("symbol", "RELIANCE")).upper(),
        # Bar source
        bar_source=env("BAR_SOURCE", bars.get("source", "csv")).lower(),
        csv_path=Path(env("BARS_CSV", str(bars.get("csv_path", "data/bars.csv")))),
        timeframe=env("TIMEFRAME", bars.get("timeframe", "1d")),
        lookback_bars=env_int("LOOKBACK_BARS", bars.get("lookback_bars", 250)),
        # API (env only; never put keys in config.yaml)
        binance_api_key=env("BINANCE_API_KEY"),
        binance_api_secret=env("BINANCE_API_SECRET"),
        # Strategies
        strategy_params=data.get("strategies") or {},
        consensus_strategies=tuple(consensus.get("strategies") or DEFAULT_CONSENSUS),
        # Backtest
        backtest_start=backtest.get("start_date"),
        backtest_end=backtest.get("end_date"),
        backtest_initial_capital=env_float("INITIAL_CAPITAL", float(backtest.get("initial_capital", 100000.0))),
        warmup_bars=int(backtest.get("warmup_bars", 20)),
        # Logging
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "trade_intel.log"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "symbol", "bar_source", "csv_path", "timeframe", "lookback_bars",
        "binance_api_key", "binance_api_secret",
        "strategy_params", "consensus_strategies",
        "backtest_start", "backtest_end", "backtest_initial_capital", "warmup_bars",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        symbol: str = "RELIANCE",
        bar_source: str = "csv",
        csv_path: Path = None,
        timeframe: str = "1d",
        lookback_bars: int = 250,
        binance_api_key: str = "",
        binance_api_secret: str = "",
        strategy_params: Optional[dict] = None,
        consensus_strategies: tuple = DEFAULT_CONSENSUS,
        backtest_start: Optional[str] = None,
        backtest_end: Optional[str] = None,
        backtest_initial_capital: float = 100000.0,
        warmup_bars: int = 20,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "trade_intel.log",
    ):
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "bar_source", bar_source)
        object.__setattr__(self, "csv_path", Path(csv_path) if csv_path else Path("data/bars.csv"))
        object.__setattr__(self, "timeframe", timeframe)
        object.__setattr__(self, "lookback_bars", lookback_bars)
        object.__setattr__(self, "binance_api_key", binance_api_key)
        object.__setattr__(self, "binance_api_secret", binance_api_secret)
        object.__setattr__(self, "strategy_params", dict(strategy_params or {}))
        object.__setattr__(self, "consensus_strategies", tuple(consensus_strategies))
        object.__setattr__(self, "backtest_start", backtest_start)
        object.__setattr__(self, "backtest_end", backtest_end)
        object.__setattr__(self, "backtest_initial_capital", backtest_initial_capital)
        object.__setattr__(self, "warmup_bars", warmup_bars)
        object.__setattr__(self, "log_level", log_level)
        object.__setattr__(self, "log_dir", Path(log_dir) if log_dir else Path("logs"))
        object.__setattr__(self, "log_file", log_file)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Config is immutable (tried to set {name!r})")
