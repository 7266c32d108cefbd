"""
Tests for input validation at the UI boundary.
"""

import dataclasses

from warrant_calc.scenarios import default_targets
from warrant_calc.types import ScenarioTargets, WarrantPosition
from warrant_calc.validation import validate_inputs, validate_iv_inputs


GOOD = WarrantPosition(
    investment=2000.0,
    initial_warrant_price=8.145,
    implied_volatility=0.3,
    strike=460.0,
    risk_free_rate=0.01,
    exchange_rate=1.0,
)


def _errors(position=GOOD, current_price=200.0, targets=None, total_months=26, volatility_range=0.2):
    if targets is None:
        targets = default_targets()
    return validate_inputs(position, current_price, targets, total_months, volatility_range)


class TestValidateInputs:

    def test_defaults_are_valid(self):
        assert _errors() == []

    def test_band_is_optional(self):
        assert _errors(volatility_range=None) == []

    def test_stock_price(self):
        assert "Stock price must be > 0" in _errors(current_price=0.0)

    def test_strike(self):
        assert "Strike price must be > 0" in _errors(position=dataclasses.replace(GOOD, strike=-1.0))

    def test_warrant_price(self):
        errors = _errors(position=dataclasses.replace(GOOD, initial_warrant_price=0.0))
        assert "Initial warrant price must be > 0" in errors

    def test_investment(self):
        assert "Investment must be > 0" in _errors(position=dataclasses.replace(GOOD, investment=0.0))

    def test_volatility(self):
        assert len(_errors(position=dataclasses.replace(GOOD, implied_volatility=0.0))) == 1
        assert len(_errors(position=dataclasses.replace(GOOD, implied_volatility=7.0))) == 1

    def test_volatility_bounds(self):
        """Volatility must lie in ]0, 5]."""
        assert _errors(position=dataclasses.replace(GOOD, implied_volatility=5.0)) == []
        assert _errors(position=dataclasses.replace(GOOD, implied_volatility=0.0)) == ["Implied volatility must be in ]0%, 500%]"]

    def test_rate(self):
        assert "Risk-free rate must be in [-10%, 20%]" in _errors(position=dataclasses.replace(GOOD, risk_free_rate=0.5))

    def test_exchange_rate(self):
        assert "Exchange rate must be > 0" in _errors(position=dataclasses.replace(GOOD, exchange_rate=0.0))

    def test_horizon(self):
        assert "End date must be at least one month ahead" in _errors(total_months=0)

    def test_band_range(self):
        assert "Uncertainty range must be in [0%, 100%]" in _errors(volatility_range=1.5)

    def test_negative_target(self):
        errors = _errors(targets=[ScenarioTargets("Worst Case", -1.0, 200.0)])
        assert errors == ["Worst Case near-term price must be >= 0"]

    def test_collects_every_error(self):
        bad = dataclasses.replace(GOOD, investment=0.0, strike=0.0)
        assert len(_errors(position=bad, current_price=-5.0, total_months=0)) == 4


class TestValidateIVInputs:

    def test_valid(self):
        assert validate_iv_inputs(8.145, 350.0, 460.0, 2.5, 0.01, 0.92) == []

    def test_market_price(self):
        assert "Market warrant price must be > 0" in validate_iv_inputs(0.0, 350.0, 460.0, 2.5, 0.01, 0.92)

    def test_expired(self):
        assert "Time to expiry must be > 0" in validate_iv_inputs(8.145, 350.0, 460.0, 0.0, 0.01, 0.92)
