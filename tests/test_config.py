"""Unit tests for core.config."""

from pathlib import Path

import pytest
from trade_intel.core.config import DEFAULT_CONSENSUS, load_config

ENV_KEYS = ["SYMBOL", "BAR_SOURCE", "BARS_CSV", "TIMEFRAME", "LOOKBACK_BARS", "INITIAL_CAPITAL", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path / "missing.yaml", tmp_path)
    assert config.symbol == "RELIANCE"
    assert config.bar_source == "csv"
    assert config.backtest_initial_capital == 100000.0
    assert config.warmup_bars == 20
    assert config.consensus_strategies == DEFAULT_CONSENSUS
    assert config.log_file == "trade_intel.log"


def test_yaml_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "symbol: tcs\n"
        "data:\n  timeframe: 1h\n  lookback_bars: 100\n"
        "strategies:\n  rsi:\n    period: 7\n"
        "consensus:\n  strategies: [rsi, macd]\n"
        "backtest:\n  initial_capital: 50000\n  start_date: '2024-01-01'\n"
    )
    config = load_config(path, tmp_path)
    assert config.symbol == "TCS"
    assert config.timeframe == "1h"
    assert config.lookback_bars == 100
    assert config.strategy_params == {"rsi": {"period": 7}}
    assert config.consensus_strategies == ("rsi", "macd")
    assert config.backtest_initial_capital == 50000.0
    assert config.backtest_start == "2024-01-01"


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("symbol: tcs\nbacktest:\n  initial_capital: 50000\n")
    monkeypatch.setenv("SYMBOL", "infy")
    monkeypatch.setenv("INITIAL_CAPITAL", "2500")
    monkeypatch.setenv("BAR_SOURCE", "Binance")
    config = load_config(path, tmp_path)
    assert config.symbol == "INFY"
    assert config.backtest_initial_capital == 2500.0
    assert config.bar_source == "binance"


def test_dotenv_loaded(tmp_path):
    (tmp_path / ".env").write_text("LOOKBACK_BARS=42\n")
    try:
        config = load_config(tmp_path / "missing.yaml", tmp_path)
        assert config.lookback_bars == 42
    finally:
        import os
        os.environ.pop("LOOKBACK_BARS", None)


def test_config_immutable(tmp_path):
    config = load_config(tmp_path / "missing.yaml", tmp_path)
    with pytest.raises(AttributeError):
        config.symbol = "X"
    assert isinstance(config.csv_path, Path)
