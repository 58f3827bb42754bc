"""Strategies: base interface, technical implementations and the registry."""

from trade_intel.strategies.base import BaseStrategy
from trade_intel.strategies.bollinger import BollingerBandsStrategy, BollingerConfig
from trade_intel.strategies.external import ExternalSignalStrategy, parse_signal_response
from trade_intel.strategies.ma_crossover import MACrossoverConfig, MovingAverageCrossoverStrategy
from trade_intel.strategies.macd import MACDConfig, MACDStrategy
from trade_intel.strategies.registry import TECHNICAL_STRATEGIES, StrategyRegistry, build_registry
from trade_intel.strategies.rsi import RSIConfig, RSIStrategy
from trade_intel.strategies.stochastic import StochasticConfig, StochasticStrategy
from trade_intel.strategies.support_resistance import SupportResistanceConfig, SupportResistanceStrategy
from trade_intel.strategies.volume_breakout import VolumeBreakoutConfig, VolumeBreakoutStrategy

__all__ = [
    "BaseStrategy",
    "BollingerBandsStrategy",
    "BollingerConfig",
    "ExternalSignalStrategy",
    "MACDConfig",
    "MACDStrategy",
    "MACrossoverConfig",
    "MovingAverageCrossoverStrategy",
    "RSIConfig",
    "RSIStrategy",
    "StochasticConfig",
    "StochasticStrategy",
    "StrategyRegistry",
    "SupportResistanceConfig",
    "SupportResistanceStrategy",
    "TECHNICAL_STRATEGIES",
    "VolumeBreakoutConfig",
    "VolumeBreakoutStrategy",
    "build_registry",
    "parse_signal_response",
]
