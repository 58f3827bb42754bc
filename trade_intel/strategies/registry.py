"""
Name -> strategy lookup. build_registry() wires the technical strategies from
the `strategies:` section of config.yaml.
"""

from __future__ import annotations
import logging
from dataclasses import fields
from typing import Any, Dict, Iterator, List, Mapping, Optional

from trade_intel.core.errors import UnknownStrategyError
from trade_intel.strategies.base import BaseStrategy
from trade_intel.strategies.bollinger import BollingerBandsStrategy, BollingerConfig
from trade_intel.strategies.ma_crossover import MACrossoverConfig, MovingAverageCrossoverStrategy
from trade_intel.strategies.macd import MACDConfig, MACDStrategy
from trade_intel.strategies.rsi import RSIConfig, RSIStrategy
from trade_intel.strategies.stochastic import StochasticConfig, StochasticStrategy
from trade_intel.strategies.support_resistance import SupportResistanceConfig, SupportResistanceStrategy
from trade_intel.strategies.volume_breakout import VolumeBreakoutConfig, VolumeBreakoutStrategy

logger = logging.getLogger("trade_intel.strategies.registry")

# key -> (strategy class, config dataclass)
TECHNICAL_STRATEGIES = {
    "rsi": (RSIStrategy, RSIConfig),
    "macd": (MACDStrategy, MACDConfig),
    "bollinger_bands": (BollingerBandsStrategy, BollingerConfig),
    "ma_crossover": (MovingAverageCrossoverStrategy, MACrossoverConfig),
    "stochastic": (StochasticStrategy, StochasticConfig),
    "volume_breakout": (VolumeBreakoutStrategy, VolumeBreakoutConfig),
    "support_resistance": (SupportResistanceStrategy, SupportResistanceConfig),
}


class StrategyRegistry:
    def __init__(self, strategies: Optional[Mapping[str, BaseStrategy]] = None):
        self._strategies: Dict[str, BaseStrategy] = dict(strategies or {})

    def register(self, key: str, strategy: BaseStrategy) -> None:
        if key in self._strategies:
            logger.warning("Replacing strategy registered as %s", key)
        self._strategies[key] = strategy

    def get(self, key: str) -> BaseStrategy:
        try:
            return self._strategies[key]
        except KeyError:
            raise UnknownStrategyError(key) from None

    def keys(self) -> List[str]:
        return list(self._strategies)

    def __contains__(self, key: object) -> bool:
        return key in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)


def _make_config(key: str, config_cls, params: Mapping[str, Any]):
    known = {f.name for f in fields(config_cls)}
    unknown = set(params) - known
    if unknown:
        logger.warning("Ignoring unknown %s parameters: %s", key, ", ".join(sorted(unknown)))
    return config_cls(**{k: v for k, v in params.items() if k in known})


def build_registry(strategy_params: Optional[Mapping[str, Mapping[str, Any]]] = None) -> StrategyRegistry:
    """All technical strategies, each with defaults overridden by strategy_params[key]."""
    strategy_params = strategy_params or {}
    registry = StrategyRegistry()
    for key, (strategy_cls, config_cls) in TECHNICAL_STRATEGIES.items():
        config = _make_config(key, config_cls, strategy_params.get(key) or {})
        registry.register(key, strategy_cls(config))
    for key in set(strategy_params) - set(TECHNICAL_STRATEGIES):
        logger.warning("No technical strategy named %s; parameters ignored", key)
    logger.debug("Registered strategies: %s", ", ".join(registry.keys()))
    return registry
