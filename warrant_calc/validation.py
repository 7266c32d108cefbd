# warrant_calc/validation.py
from __future__ import annotations
from typing import Iterable, Optional

from .types import ScenarioTargets, WarrantPosition


def _check_market(errors: list[str], stock_price: float, strike: float, rate: float, exchange_rate: float) -> None:
    if stock_price <= 0:
        errors.append("Stock price must be > 0")
    if strike <= 0:
        errors.append("Strike price must be > 0")
    if not (-0.10 <= rate <= 0.20):
        errors.append("Risk-free rate must be in [-10%, 20%]")
    if exchange_rate <= 0:
        errors.append("Exchange rate must be > 0")


def validate_inputs(
    position: WarrantPosition,
    current_price: float,
    targets: Iterable[ScenarioTargets],
    total_months: int,
    volatility_range: Optional[float] = None,
) -> list[str]:
    errors: list[str] = []
    _check_market(errors, current_price, position.strike, position.risk_free_rate, position.exchange_rate)

    if position.investment <= 0:
        errors.append("Investment must be > 0")
    if position.initial_warrant_price <= 0:
        errors.append("Initial warrant price must be > 0")
    if not (0.0 < position.implied_volatility <= 5.0):
        errors.append("Implied volatility must be in ]0%, 500%]")

    if total_months < 1:
        errors.append("End date must be at least one month ahead")
    if volatility_range is not None and not (0.0 <= volatility_range <= 1.0):
        errors.append("Uncertainty range must be in [0%, 100%]")

    for t in targets:
        for label, val in [("near-term", t.near_term_price), ("far-term", t.far_term_price)]:
            if val < 0:
                errors.append(f"{t.name} {label} price must be >= 0")

    return errors


def validate_iv_inputs(
    market_price: float,
    stock_price: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    exchange_rate: float,
) -> list[str]:
    errors: list[str] = []
    _check_market(errors, stock_price, strike, rate, exchange_rate)
    if market_price <= 0:
        errors.append("Market warrant price must be > 0")
    if time_to_expiry <= 0:
        errors.append("Time to expiry must be > 0")
    return errors
