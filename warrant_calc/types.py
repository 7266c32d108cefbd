# warrant_calc/types.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from .constants import DEFAULT_RISK_FREE_RATES

IVStatus = Literal["converged", "flat_vega", "max_iterations", "expired"]


@dataclass(frozen=True)
class PricingParameters:
    spot: float
    strike: float
    time_to_expiry: float           # years, may be <= 0
    rate: float                     # decimal (0.01 = 1%)
    volatility: float               # decimal (0.30 = 30%)


@dataclass(frozen=True)
class WarrantPosition:
    investment: float
    initial_warrant_price: float    # target currency
    implied_volatility: float       # decimal
    strike: float                   # source currency
    risk_free_rate: float = DEFAULT_RISK_FREE_RATES["EUR"]
    exchange_rate: float = 1.0      # target currency per source currency unit

    @property
    def warrants_bought(self) -> float:
        return self.investment / self.initial_warrant_price

    def pricing_parameters(self, stock_price: float, time_to_expiry_years: float) -> PricingParameters:
        return PricingParameters(
            spot=stock_price,
            strike=self.strike,
            time_to_expiry=time_to_expiry_years,
            rate=self.risk_free_rate,
            volatility=self.implied_volatility,
        )

    def profit_loss_pct(self, value: float) -> float:
        return (value - self.investment) / self.investment * 100.0


@dataclass(frozen=True)
class ScenarioTargets:
    name: str
    near_term_price: float          # reached after min(horizon, 24) months
    far_term_price: float           # reached at the end of the horizon


@dataclass(frozen=True)
class ScenarioPoint:
    month: int
    price: float
    upper_bound: Optional[float] = None
    lower_bound: Optional[float] = None

    @property
    def has_bounds(self) -> bool:
        return self.upper_bound is not None and self.lower_bound is not None


@dataclass(frozen=True)
class Scenario:
    name: str
    points: Tuple[ScenarioPoint, ...] = field(default_factory=tuple)

    @property
    def months(self) -> list[int]:
        return [p.month for p in self.points]


@dataclass(frozen=True)
class ResultRow:
    scenario: str
    month: int
    stock_price: float
    warrant_price: float            # target currency
    investment_value: float         # target currency
    profit_loss_pct: float
    upper_bound: Optional[float] = None
    lower_bound: Optional[float] = None
    upper_investment_value: Optional[float] = None
    lower_investment_value: Optional[float] = None
    upper_profit_loss_pct: Optional[float] = None
    lower_profit_loss_pct: Optional[float] = None


@dataclass(frozen=True)
class ImpliedVolResult:
    volatility: float
    iterations: int
    status: IVStatus

    @property
    def converged(self) -> bool:
        return self.status == "converged"
