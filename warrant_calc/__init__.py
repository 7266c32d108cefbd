"""
Warrant scenario calculator.

Black-Scholes pricing of a warrant (European call), implied volatility,
and projection of an investment's value along stock-price scenarios.
"""

from .pricing import (
    black_scholes_call_price,
    calculate_implied_volatility,
    calculate_vega,
    calculate_warrant_value,
    norm_cdf,
    norm_pdf,
    position_value,
    price_call,
    solve_implied_volatility,
    warrant_price_at,
)
from .scenarios import (
    build_scenario,
    build_scenarios,
    default_end_date,
    default_targets,
    months_between,
    project_scenario,
    project_scenarios,
    solve_entry_volatility,
)
from .types import (
    ImpliedVolResult,
    PricingParameters,
    ResultRow,
    Scenario,
    ScenarioPoint,
    ScenarioTargets,
    WarrantPosition,
)
