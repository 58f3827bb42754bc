"""Decimal rounding helpers for money, percentages and share counts."""

from __future__ import annotations
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP


def _dec(value: float) -> Decimal:
    # repr() keeps the shortest round-tripping form, so 0.125 stays 0.125
    return Decimal(repr(float(value)))


def round_half_up(value: float, places: int = 2) -> float:
    """Round like BigDecimal HALF_UP: 2.345 -> 2.35, -2.345 -> -2.35."""
    if value != value or value in (float("inf"), float("-inf")):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(_dec(value).quantize(quantum, rounding=ROUND_HALF_UP))


def whole_shares(cash: float, fraction: float, price: float) -> int:
    """Shares affordable with cash * fraction at price, rounded down."""
    if price <= 0 or cash <= 0:
        return 0
    budget = _dec(cash) * _dec(fraction)
    return int((budget / _dec(price)).to_integral_value(rounding=ROUND_DOWN))
