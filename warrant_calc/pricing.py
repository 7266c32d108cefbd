# warrant_calc/pricing.py
from __future__ import annotations
import logging
import math
import numpy as np

from .constants import (
    DEFAULT_RISK_FREE_RATES,
    IV_INITIAL_GUESS,
    IV_MAX_ITERATIONS,
    IV_MIN_VOLATILITY,
    IV_TOLERANCE,
    MIN_VEGA,
    VEGA_SIGMA_FLOOR,
)
from .types import ImpliedVolResult, PricingParameters, WarrantPosition

logger = logging.getLogger(__name__)

# Abramowitz & Stegun 7.1.26
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


# ---------- Normal distribution ----------
def norm_cdf(x: float) -> float:
    """Standard normal CDF, rational approximation accurate to ~1e-7."""
    sign = 1.0 if x >= 0 else -1.0
    z = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + _P * z)
    erf = 1.0 - ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t * math.exp(-z * z)
    return 0.5 * (1.0 + sign * erf)


def norm_pdf(x: float) -> float:
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


def _d1(S: float, K: float, T: float, r: float, sigma: float) -> float:
    # S = 0 gives ln(0) = -inf, K <= 0 or sigma = 0 give inf/NaN; none of them raise
    with np.errstate(divide="ignore", invalid="ignore"):
        num = np.log(np.divide(S, K)) + (r + 0.5 * sigma * sigma) * T
        return float(np.divide(num, sigma * math.sqrt(T)))


# ---------- Black-Scholes ----------
def black_scholes_call_price(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """
    European call price.

    S, K > 0 are the caller's responsibility. When T <= 0 the intrinsic value
    max(0, S - K) is returned.
    """
    if T <= 0:
        return max(0.0, S - K)
    d1 = _d1(S, K, T, r, sigma)
    d2 = d1 - sigma * math.sqrt(T)
    return S * norm_cdf(d1) - K * math.exp(-r * T) * norm_cdf(d2)


def price_call(params: PricingParameters) -> float:
    return black_scholes_call_price(
        params.spot, params.strike, params.time_to_expiry, params.rate, params.volatility
    )


def calculate_vega(S: float, K: float, T: float, r: float, sigma: float) -> float:
    """dPrice/dSigma. Zero at or after expiry."""
    if T <= 0:
        return 0.0
    safe_sigma = max(sigma, VEGA_SIGMA_FLOOR)
    d1 = _d1(S, K, T, r, safe_sigma)
    return S * math.sqrt(T) * norm_pdf(d1)


# ---------- Implied volatility ----------
def solve_implied_volatility(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    exchange_rate: float = 1.0,
    initial_guess: float = IV_INITIAL_GUESS,
    tolerance: float = IV_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolResult:
    """
    Newton-Raphson inversion of the call price.

    The model price (source currency) is converted with `exchange_rate` before
    being compared with `market_price`. The current sigma is returned whatever
    the outcome; `status` tells why the iteration stopped:
      - converged: |price - market_price| < tolerance
      - flat_vega: |vega| < 1e-10, the Newton step cannot be taken
      - max_iterations: no stop condition met after `max_iterations` updates
      - expired: T <= 0, volatility is 0
    """
    if T <= 0:
        return ImpliedVolResult(volatility=0.0, iterations=0, status="expired")

    sigma = initial_guess
    iteration = 0
    status = "max_iterations"

    while iteration < max_iterations:
        price = black_scholes_call_price(S, K, T, r, sigma) * exchange_rate
        vega = calculate_vega(S, K, T, r, sigma) * exchange_rate

        if abs(vega) < MIN_VEGA:
            status = "flat_vega"
            break

        diff = price - market_price
        if abs(diff) < tolerance:
            status = "converged"
            break

        sigma = max(IV_MIN_VOLATILITY, sigma - diff / vega)
        iteration += 1

    if status == "converged":
        logger.debug("Implied vol %.6f converged after %d iterations", sigma, iteration)
    else:
        logger.warning("Implied vol solver stopped (%s) after %d iterations at sigma=%.6f",
                       status, iteration, sigma)
    return ImpliedVolResult(volatility=sigma, iterations=iteration, status=status)


def calculate_implied_volatility(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    exchange_rate: float,
) -> float:
    return solve_implied_volatility(market_price, S, K, T, r, exchange_rate).volatility


# ---------- Warrant value ----------
def calculate_warrant_value(
    *,
    stock_price: float,
    strike_price: float,
    time_to_expiry_years: float,
    exchange_rate: float,
    investment: float,
    initial_warrant_price: float,
    implied_volatility: float,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATES["EUR"],
) -> float:
    """Value of the position: converted call price times the warrants bought at inception."""
    call_price = black_scholes_call_price(
        stock_price, strike_price, time_to_expiry_years, risk_free_rate, implied_volatility
    )
    warrant_price = call_price * exchange_rate
    warrants_bought = investment / initial_warrant_price
    return warrant_price * warrants_bought


def warrant_price_at(position: WarrantPosition, stock_price: float, time_to_expiry_years: float) -> float:
    """Model price of one warrant, converted to the target currency."""
    return price_call(position.pricing_parameters(stock_price, time_to_expiry_years)) * position.exchange_rate


def position_value(position: WarrantPosition, stock_price: float, time_to_expiry_years: float) -> float:
    return warrant_price_at(position, stock_price, time_to_expiry_years) * position.warrants_bought
