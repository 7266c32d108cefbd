"""
Tests for the Black-Scholes pricing core.

These tests verify:
- Normal CDF approximation (value at 0, symmetry, accuracy, tails)
- Call price limits and monotonicity
- Vega against a finite difference of the price
- Implied volatility round trip and stop conditions
- Warrant value scaling and time decay
"""

import dataclasses
import math
import pytest

from warrant_calc.pricing import (
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
from warrant_calc.types import PricingParameters, WarrantPosition


BASE = dict(S=350.0, K=460.0, T=2.5, r=0.01, sigma=0.3)


def _price(**overrides):
    p = {**BASE, **overrides}
    return black_scholes_call_price(p["S"], p["K"], p["T"], p["r"], p["sigma"])


class TestNormalDistribution:
    """Test the normal distribution helpers."""

    def test_norm_cdf_zero(self):
        """N(0) = 0.5"""
        assert abs(norm_cdf(0) - 0.5) < 1e-6

    def test_norm_cdf_symmetry(self):
        """N(x) + N(-x) = 1"""
        for x in [0.1, 0.5, 1.0, 1.5, 2.0, 3.7, 8.0]:
            assert abs(norm_cdf(x) + norm_cdf(-x) - 1.0) < 1e-6

    def test_norm_cdf_accuracy(self):
        """Rational approximation stays within ~1e-7 of the erf-based value."""
        for x in [-3.0, -1.2, -0.3, 0.25, 0.9, 2.4]:
            exact = 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))
            assert abs(norm_cdf(x) - exact) < 2e-7

    def test_norm_cdf_tails(self):
        assert norm_cdf(10) > 0.9999
        assert norm_cdf(-10) < 0.0001
        assert norm_cdf(float("inf")) == 1.0
        assert norm_cdf(float("-inf")) == 0.0

    def test_norm_pdf_zero(self):
        """n(0) = 1/sqrt(2*pi)"""
        assert abs(norm_pdf(0) - 1.0 / math.sqrt(2 * math.pi)) < 1e-12


class TestBlackScholesCallPrice:

    def test_zero_stock_price(self):
        assert _price(S=0.0) == 0

    def test_zero_time_is_intrinsic(self):
        assert _price(T=0) == max(0.0, BASE["S"] - BASE["K"])
        assert _price(S=500.0, T=0) == pytest.approx(40.0)

    def test_negative_time_is_intrinsic(self):
        assert _price(S=480.0, T=-0.5) == pytest.approx(20.0)

    def test_increases_with_stock_price(self):
        assert _price(S=BASE["S"] * 1.5) > _price()

    def test_decreases_with_strike(self):
        assert _price(K=BASE["K"] * 1.5) < _price()

    def test_monotone_on_grid(self):
        prices = [_price(S=s) for s in range(200, 700, 25)]
        assert all(b > a for a, b in zip(prices, prices[1:]))

    def test_matches_d1_d2_formula(self):
        S, K, T, r, sigma = BASE["S"], BASE["K"], BASE["T"], BASE["r"], BASE["sigma"]
        d1 = (math.log(S / K) + (r + sigma * sigma / 2) * T) / (sigma * math.sqrt(T))
        d2 = d1 - sigma * math.sqrt(T)
        expected = S * norm_cdf(d1) - K * math.exp(-r * T) * norm_cdf(d2)
        assert _price() == pytest.approx(expected, rel=1e-12)

    def test_near_zero_volatility_does_not_raise(self):
        price = black_scholes_call_price(350.0, 300.0, 1.0, 0.01, 1e-12)
        assert price == pytest.approx(350.0 - 300.0 * math.exp(-0.01), rel=1e-9)

    def test_small_positive_time(self):
        """Clamped expiry behaves like intrinsic value."""
        assert black_scholes_call_price(600.0, 460.0, 0.0001, 0.01, 0.3) == pytest.approx(140.0, rel=1e-3)
        assert black_scholes_call_price(400.0, 460.0, 0.0001, 0.01, 0.3) == pytest.approx(0.0, abs=1e-9)

    def test_price_call_from_parameters(self):
        params = PricingParameters(spot=350.0, strike=460.0, time_to_expiry=2.5, rate=0.01, volatility=0.3)
        assert price_call(params) == _price()

    def test_parameters_are_immutable(self):
        params = PricingParameters(spot=350.0, strike=460.0, time_to_expiry=2.5, rate=0.01, volatility=0.3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.spot = 1.0


class TestVega:

    def test_zero_at_expiry(self):
        assert calculate_vega(350.0, 460.0, 0.0, 0.01, 0.3) == 0.0
        assert calculate_vega(350.0, 460.0, -1.0, 0.01, 0.3) == 0.0

    def test_non_negative(self):
        for S in [100.0, 350.0, 460.0, 900.0]:
            for sigma in [0.05, 0.3, 1.2]:
                assert calculate_vega(S, 460.0, 1.5, 0.01, sigma) >= 0.0

    def test_zero_sigma_is_floored(self):
        assert calculate_vega(350.0, 460.0, 1.0, 0.01, 0.0) >= 0.0

    def test_matches_finite_difference(self):
        h = 1e-4
        S, K, T, r, sigma = BASE["S"], BASE["K"], BASE["T"], BASE["r"], BASE["sigma"]
        fd = (black_scholes_call_price(S, K, T, r, sigma + h) - black_scholes_call_price(S, K, T, r, sigma - h)) / (2 * h)
        assert calculate_vega(S, K, T, r, sigma) == pytest.approx(fd, rel=1e-3)


class TestImpliedVolatility:

    def test_round_trip(self):
        S, K, T, r = 350.0, 460.0, 2.5, 0.01
        for sigma in [0.15, 0.3, 0.6]:
            market = black_scholes_call_price(S, K, T, r, sigma)
            res = solve_implied_volatility(market, S, K, T, r)
            assert res.status == "converged"
            assert res.volatility == pytest.approx(sigma, abs=1e-4)

    def test_round_trip_with_exchange_rate(self):
        S, K, T, r, fx = 350.0, 460.0, 2.5, 0.01, 0.92
        market = black_scholes_call_price(S, K, T, r, 0.45) * fx
        assert calculate_implied_volatility(market, S, K, T, r, fx) == pytest.approx(0.45, abs=1e-4)

    def test_expired_returns_zero(self):
        res = solve_implied_volatility(8.145, 350.0, 460.0, 0.0, 0.01, 0.92)
        assert res.volatility == 0.0
        assert res.status == "expired"
        assert calculate_implied_volatility(8.145, 350.0, 460.0, -1.0, 0.01, 0.92) == 0.0

    def test_flat_vega_returns_initial_guess(self):
        res = solve_implied_volatility(1.0, 100.0, 1000.0, 0.01, 0.01)
        assert res.status == "flat_vega"
        assert res.volatility == 0.2
        assert res.iterations == 0

    def test_max_iterations(self):
        market = black_scholes_call_price(350.0, 460.0, 2.5, 0.01, 0.3)
        res = solve_implied_volatility(market, 350.0, 460.0, 2.5, 0.01, max_iterations=1)
        assert res.status == "max_iterations"
        assert res.iterations == 1
        assert not res.converged

    def test_volatility_stays_above_floor(self):
        res = solve_implied_volatility(1e-9, 350.0, 460.0, 0.5, 0.01)
        assert res.volatility >= 0.001

    def test_wrapper_matches_result(self):
        market = black_scholes_call_price(350.0, 460.0, 2.5, 0.01, 0.3)
        res = solve_implied_volatility(market, 350.0, 460.0, 2.5, 0.01, 1.0)
        assert calculate_implied_volatility(market, 350.0, 460.0, 2.5, 0.01, 1.0) == res.volatility


class TestWarrantValue:

    base = dict(
        stock_price=350.0,
        strike_price=460.0,
        time_to_expiry_years=2.5,
        implied_volatility=0.3,
        exchange_rate=0.92,
        investment=2000.0,
        initial_warrant_price=8.145,
    )

    def test_base_scenario(self):
        value = calculate_warrant_value(**self.base)
        assert 0 < value < self.base["investment"] * 10

    def test_end_to_end_formula(self):
        value = calculate_warrant_value(**self.base, risk_free_rate=0.01)
        expected = _price() * 0.92 * (2000.0 / 8.145)
        assert value == pytest.approx(expected, rel=1e-12)
        assert 0 < value < 20000

    def test_scales_linearly_with_investment(self):
        v1 = calculate_warrant_value(**self.base)
        v2 = calculate_warrant_value(**{**self.base, "investment": 4000.0})
        assert v2 == pytest.approx(2 * v1, rel=1e-2)

    def test_time_decay(self):
        long_time = calculate_warrant_value(**self.base)
        short_time = calculate_warrant_value(**{**self.base, "time_to_expiry_years": 1.25})
        assert short_time < long_time

    def test_value_after_one_month(self):
        """Moving one month along a path towards 500 raises the value, moderately."""
        initial_t = 2.0
        price_after = 350.0 + (500.0 - 350.0) / 24
        initial = calculate_warrant_value(**{**self.base, "time_to_expiry_years": initial_t})
        after = calculate_warrant_value(**{
            **self.base,
            "stock_price": price_after,
            "time_to_expiry_years": initial_t - 1 / 12,
        })
        assert 0 < after < self.base["investment"] * 10
        assert abs((after - initial) / initial * 100) < 50
        assert after > initial

    def test_default_rate_is_eur(self):
        assert calculate_warrant_value(**self.base) == calculate_warrant_value(**self.base, risk_free_rate=0.04)


class TestPositionValuation:

    position = WarrantPosition(2000.0, 8.145, 0.3, 460.0, 0.01, 0.92)

    def test_warrant_price_converted(self):
        assert warrant_price_at(self.position, 350.0, 2.5) == pytest.approx(_price() * 0.92)

    def test_matches_warrant_value(self):
        expected = calculate_warrant_value(
            stock_price=350.0,
            strike_price=460.0,
            time_to_expiry_years=2.5,
            exchange_rate=0.92,
            investment=2000.0,
            initial_warrant_price=8.145,
            implied_volatility=0.3,
            risk_free_rate=0.01,
        )
        assert position_value(self.position, 350.0, 2.5) == pytest.approx(expected)
