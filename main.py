#!/usr/bin/env python3
"""
Trade Intel CLI: backtest | signal | consensus | strategies
Usage:
  python main.py backtest --strategy rsi [--symbol RELIANCE] [--start 2024-01-01] [--end 2024-12-31]
  python main.py signal --strategy macd [--symbol RELIANCE]
  python main.py consensus [--symbol RELIANCE]
  python main.py strategies
All commands accept --config config.yaml.
"""

from __future__ import annotations
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trade_intel.core.config import Config, load_config
from trade_intel.core.errors import TradeIntelError
from trade_intel.core.logger import setup_logging
from trade_intel.data.source import BarSource, CsvBarSource
from trade_intel.service import TradingService
from trade_intel.strategies.registry import build_registry
from trade_intel.utils.timeframes import lookback_start

logger = logging.getLogger("trade_intel")


def _parse_date(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return pd.Timestamp(value).to_pydatetime()


def build_bar_source(config: Config) -> BarSource:
    if config.bar_source == "binance":
        from trade_intel.data.binance import BinanceBarSource

        return BinanceBarSource(
            config.binance_api_key,
            config.binance_api_secret,
            interval=config.timeframe,
        )
    if config.bar_source == "csv":
        path = config.csv_path if config.csv_path.is_absolute() else ROOT / config.csv_path
        return CsvBarSource(path)
    raise ValueError(f"Unknown bar source: {config.bar_source}")


def build_service(config: Config) -> TradingService:
    return TradingService(
        build_registry(config.strategy_params),
        build_bar_source(config),
        warmup_bars=config.warmup_bars,
    )


def run_backtest(config: Config, args: argparse.Namespace) -> int:
    service = build_service(config)
    symbol = (args.symbol or config.symbol).upper()
    start = _parse_date(args.start or config.backtest_start)
    end = _parse_date(args.end or config.backtest_end)
    capital = args.capital if args.capital is not None else config.backtest_initial_capital
    result = service.run_backtest(args.strategy, symbol, start, end, capital)

    m = result.metrics
    print("\n--- Backtest Results ---")
    print(f"Strategy: {result.strategy_name} | Symbol: {result.symbol}")
    print(f"Period: {result.start_date:%Y-%m-%d} to {result.end_date:%Y-%m-%d} ({m.days_in_market} days)")
    print(f"Initial capital: {m.initial_capital:,.2f} | Final capital: {m.final_capital:,.2f}")
    print(f"Total return: {m.total_return:,.2f} ({m.total_return_pct:.2f}%)")
    print(f"Total trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})")
    print(f"Win rate: {m.win_rate:.2f}%")
    print(f"Average win: {m.avg_win:,.2f} | Average loss: {m.avg_loss:,.2f}")
    print(f"Largest win: {m.largest_win:,.2f} | Largest loss: {m.largest_loss:,.2f}")
    print(f"Profit factor: {m.profit_factor:.2f}")
    print(f"Sharpe ratio: {m.sharpe_ratio:.2f}")
    print(f"Sortino ratio: {m.sortino_ratio:.2f}")
    print(f"Max drawdown: {m.max_drawdown:,.2f} ({m.max_drawdown_pct:.2f}%)")

    if args.report_dir:
        report_dir = Path(args.report_dir)
        report_dir.mkdir(parents=True, exist_ok=True)
        stem = f"{symbol}_{args.strategy}"
        result.trades_frame().to_csv(report_dir / f"{stem}_trades.csv", index=False)
        result.equity_frame().to_csv(report_dir / f"{stem}_equity.csv", index=False)
        logger.info("Reports written to %s", report_dir)
    return 0


def _recent_bars(service: TradingService, config: Config, symbol: str, end: Optional[datetime]):
    start = lookback_start(end, config.timeframe, config.lookback_bars) if end else None
    bars = service.recent_bars(symbol, end=end, start=start)
    return bars[-config.lookback_bars:]


def run_signal(config: Config, args: argparse.Namespace) -> int:
    service = build_service(config)
    symbol = (args.symbol or config.symbol).upper()
    bars = _recent_bars(service, config, symbol, _parse_date(args.end))
    signal = service.execute_strategy(args.strategy, symbol, bars)
    print(f"\n--- {signal.strategy} | {symbol} | {bars[-1].timestamp:%Y-%m-%d %H:%M} ---")
    print(f"Signal: {signal.signal_type.value} (confidence {signal.confidence:.2f})")
    print(f"Reasoning: {signal.reasoning}")
    if signal.target_price is not None:
        print(f"Target: {signal.target_price:.2f}")
    if signal.stop_loss is not None:
        print(f"Stop loss: {signal.stop_loss:.2f}")
    return 0


def run_consensus(config: Config, args: argparse.Namespace) -> int:
    service = build_service(config)
    symbol = (args.symbol or config.symbol).upper()
    names = args.strategies.split(",") if args.strategies else list(config.consensus_strategies)
    bars = _recent_bars(service, config, symbol, _parse_date(args.end))
    result = service.execute_consensus(names, symbol, bars)
    print(f"\n--- Consensus | {symbol} ---")
    for name, signal in result.signals:
        print(f"{name:<20} {signal.signal_type.value:<5} {signal.confidence:.2f}  {signal.reasoning}")
    print(f"BUY: {result.buy_votes} | SELL: {result.sell_votes} | HOLD: {result.hold_votes}")
    print(f"Consensus: {result.consensus.value}")
    return 0


def run_strategies(config: Config, args: argparse.Namespace) -> int:
    service = TradingService(build_registry(config.strategy_params))
    for key, name, description, backtestable in service.available_strategies():
        flag = "" if backtestable else " (live only)"
        print(f"{key:<20} {name}{flag}: {description}")
    return 0


COMMANDS = {
    "backtest": run_backtest,
    "signal": run_signal,
    "consensus": run_consensus,
    "strategies": run_strategies,
}


def main() -> int:
    parser = argparse.ArgumentParser(description="Trade Intel CLI")
    parser.add_argument("mode", choices=list(COMMANDS), help="Command to run")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--strategy", default="rsi", help="Strategy key (see `strategies`)")
    parser.add_argument("--strategies", default=None, help="Comma-separated keys for consensus")
    parser.add_argument("--symbol", default=None)
    parser.add_argument("--start", default=None, help="Start date, e.g. 2024-01-01")
    parser.add_argument("--end", default=None, help="End date, e.g. 2024-12-31")
    parser.add_argument("--capital", type=float, default=None, help="Initial capital")
    parser.add_argument("--report-dir", default=None, help="Write trades/equity CSV here")
    args = parser.parse_args()

    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    try:
        return COMMANDS[args.mode](config, args)
    except (TradeIntelError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    exit(main())
