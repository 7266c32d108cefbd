# warrant_calc/scenarios.py
from __future__ import annotations
import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .constants import DEFAULT_HORIZON_YEARS, DEFAULT_TARGETS, NEAR_TERM_MONTHS, SCENARIO_NAMES, TIME_EPSILON
from .pricing import position_value, solve_implied_volatility, warrant_price_at
from .types import ImpliedVolResult, ResultRow, Scenario, ScenarioPoint, ScenarioTargets, WarrantPosition

logger = logging.getLogger(__name__)


# ---------- Horizon ----------
def months_between(start: dt.date, end: dt.date) -> int:
    """Calendar months from `start` to `end`, ignoring the day of month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def time_to_expiry_years(month: int, total_months: int) -> float:
    t = (total_months - month) / 12.0
    # Expiry month: keep d1/d2 finite
    if t <= 0:
        t = TIME_EPSILON
    return t


def default_end_date(today: dt.date | None = None) -> dt.date:
    today = today or dt.date.today()
    return (pd.Timestamp(today) + pd.DateOffset(years=DEFAULT_HORIZON_YEARS)).date()


def solve_entry_volatility(
    market_price: float,
    current_price: float,
    strike: float,
    rate: float,
    exchange_rate: float,
    total_months: int,
) -> ImpliedVolResult:
    """
    Implied vol from the warrant price paid today, on the same month grid as
    `project_scenario` so that month 0 reprices the entry exactly.
    """
    return solve_implied_volatility(
        market_price, current_price, strike, time_to_expiry_years(0, total_months), rate, exchange_rate
    )


# ---------- Paths ----------
def _segment(start_price: float, end_price: float, n_months: int) -> np.ndarray:
    """Prices for months 1..n_months, linear from start_price to end_price."""
    if n_months <= 0:
        return np.empty(0, dtype=float)
    frac = np.arange(1, n_months + 1, dtype=float) / n_months
    return start_price + (end_price - start_price) * frac


def uncertainty_range(month: int, total_months: int, volatility_range: float) -> float:
    """Band half-width as a fraction of price, growing with sqrt(elapsed time)."""
    if total_months <= 0:
        return 0.0
    return volatility_range * float(np.sqrt(month / total_months))


def build_scenario(
    name: str,
    current_price: float,
    near_term_price: float,
    far_term_price: float,
    total_months: int,
    volatility_range: Optional[float] = None,
) -> Scenario:
    """
    Piecewise-linear path:
      - months 0..min(total, 24): current_price -> near_term_price
      - remaining months: near_term_price -> far_term_price
    With `volatility_range`, each point carries upper/lower bounds.
    """
    total = max(0, int(total_months))
    near_months = min(total, NEAR_TERM_MONTHS)
    far_months = total - near_months

    prices = np.concatenate([
        [float(current_price)],
        _segment(current_price, near_term_price, near_months),
        _segment(near_term_price, far_term_price, far_months),
    ])

    points = []
    for month, price in enumerate(prices):
        price = float(price)
        if volatility_range is None:
            points.append(ScenarioPoint(month=month, price=price))
            continue
        rng = uncertainty_range(month, total, volatility_range)
        points.append(ScenarioPoint(
            month=month,
            price=price,
            upper_bound=price * (1.0 + rng),
            lower_bound=price * (1.0 - rng),
        ))

    logger.debug("Scenario %s: %d points over %d months", name, len(points), total)
    return Scenario(name=name, points=tuple(points))


def default_targets(
    expected: Sequence[float] = DEFAULT_TARGETS["Expected"],
    worst_case: Sequence[float] = DEFAULT_TARGETS["Worst Case"],
    best_case: Sequence[float] = DEFAULT_TARGETS["Best Case"],
) -> List[ScenarioTargets]:
    pairs = [expected, worst_case, best_case]
    return [
        ScenarioTargets(name=name, near_term_price=float(near), far_term_price=float(far))
        for name, (near, far) in zip(SCENARIO_NAMES, pairs)
    ]


def build_scenarios(
    current_price: float,
    targets: Iterable[ScenarioTargets],
    total_months: int,
    volatility_range: Optional[float] = None,
) -> List[Scenario]:
    targets = list(targets)
    if not targets:
        raise ValueError("At least one scenario target is required")
    return [
        build_scenario(t.name, current_price, t.near_term_price, t.far_term_price,
                       total_months, volatility_range)
        for t in targets
    ]


# ---------- Projection ----------
def project_scenario(scenario: Scenario, position: WarrantPosition, total_months: int) -> List[ResultRow]:
    """Feed every point of `scenario` through the position's warrant valuation."""
    rows: List[ResultRow] = []
    for point in scenario.points:
        if point.month > max(0, total_months):
            raise ValueError(
                f"Scenario '{scenario.name}' has month {point.month} beyond horizon {total_months}"
            )
        T = time_to_expiry_years(point.month, total_months)

        warrant_price = warrant_price_at(position, point.price, T)
        value = warrant_price * position.warrants_bought

        extra = {}
        if point.has_bounds:
            upper_value = position_value(position, point.upper_bound, T)
            lower_value = position_value(position, point.lower_bound, T)
            extra = dict(
                upper_bound=point.upper_bound,
                lower_bound=point.lower_bound,
                upper_investment_value=upper_value,
                lower_investment_value=lower_value,
                upper_profit_loss_pct=position.profit_loss_pct(upper_value),
                lower_profit_loss_pct=position.profit_loss_pct(lower_value),
            )

        rows.append(ResultRow(
            scenario=scenario.name,
            month=point.month,
            stock_price=point.price,
            warrant_price=warrant_price,
            investment_value=value,
            profit_loss_pct=position.profit_loss_pct(value),
            **extra,
        ))
    return rows


def project_scenarios(
    scenarios: Iterable[Scenario], position: WarrantPosition, total_months: int
) -> List[ResultRow]:
    rows: List[ResultRow] = []
    for scenario in scenarios:
        rows.extend(project_scenario(scenario, position, total_months))
    return rows
