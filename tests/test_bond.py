"""
Tests for bond pricing and yield solving.
"""

import pytest

from ficore import Bond, ConvergenceError, ValidationError
from ficore import accrued_interest, price_bond, solve_yield, value_bond


class TestPriceBond:
    """Tests for bond pricing at a flat yield."""

    def test_near_par_at_coupon_yield(self, treasury_bond, issue_date):
        """Priced at its coupon rate, the bond is close to par."""
        price = price_bond(treasury_bond, 0.035, issue_date)
        assert abs(price - 1000.0) < 0.5

    def test_discount_bond(self, treasury_bond, issue_date):
        """A 4% yield prices the 3.5% bond near 959."""
        price = price_bond(treasury_bond, 0.04, issue_date)
        assert 958.5 < price < 961.0

    def test_premium_bond(self, treasury_bond, issue_date):
        """A yield below the coupon gives a premium."""
        assert price_bond(treasury_bond, 0.03, issue_date) > 1000.0

    def test_decreasing_in_yield(self, treasury_bond, issue_date):
        """Price falls strictly as yield rises."""
        prices = [price_bond(treasury_bond, y, issue_date) for y in (0.01, 0.02, 0.035, 0.05, 0.08)]
        assert all(a > b for a, b in zip(prices, prices[1:]))

    def test_zero_yield_sums_flows(self, treasury_bond, issue_date):
        """At zero yield the price is the undiscounted sum of flows."""
        result = value_bond(treasury_bond, 0.0, issue_date)
        assert abs(result.npv - sum(cf.amount for cf in result.cashflows)) < 1e-9

    def test_matured_bond_worthless(self, treasury_bond):
        """Nothing is left to value after maturity."""
        assert price_bond(treasury_bond, 0.04, '2035-06-01') == 0.0

    def test_annual_compounding(self, treasury_bond, issue_date):
        """More frequent compounding at the same positive yield discounts more."""
        semi = price_bond(treasury_bond, 0.04, issue_date)
        annual = price_bond(treasury_bond, 0.04, issue_date, compounding_frequency=1)
        assert semi < annual


class TestAccruedInterest:
    """Tests for accrued interest and clean price."""

    def test_on_issue_date(self, treasury_bond, issue_date):
        """No interest has accrued on the issue date."""
        assert accrued_interest(treasury_bond, issue_date) == 0.0

    def test_mid_period(self, treasury_bond):
        """Accrued interest grows with days since the last coupon."""
        accrued = accrued_interest(treasury_bond, '2025-04-15')
        assert abs(accrued - 1000.0 * 0.035 * 90 / 365) < 1e-9

    def test_on_coupon_date(self, treasury_bond):
        """Accrued interest resets on a coupon date."""
        assert accrued_interest(treasury_bond, '2025-07-15') == 0.0

    def test_clean_price(self, treasury_bond):
        """Clean price = dirty price - accrued interest."""
        result = value_bond(treasury_bond, 0.04, '2025-04-15')
        assert abs(result.clean_price - (result.npv - result.accrued_interest)) < 1e-12
        assert result.accrued_interest > 0


class TestSolveYield:
    """Tests for yield to maturity."""

    def test_discount_price_yields_above_coupon(self, treasury_bond, issue_date):
        """A price below par implies a yield above the coupon."""
        ytm = solve_yield(treasury_bond, 950.0, issue_date)
        assert ytm > 0.035

    def test_reprices_market_price(self, treasury_bond, issue_date):
        """The solved yield reprices the bond to the market price."""
        ytm = solve_yield(treasury_bond, 950.0, issue_date)
        assert abs(price_bond(treasury_bond, ytm, issue_date) - 950.0) < 1e-6

    @pytest.mark.parametrize('yield_rate', [0.005, 0.035, 0.06, 0.12])
    def test_round_trip(self, treasury_bond, yield_rate):
        """Pricing then solving recovers the yield."""
        vd = '2027-03-01'
        price = price_bond(treasury_bond, yield_rate, vd)
        assert abs(solve_yield(treasury_bond, price, vd) - yield_rate) < 1e-6

    def test_quarterly_bond(self):
        """Solving works for other payment frequencies."""
        bond = Bond('Q', 100.0, 0.06, '2024-06-30', '2029-06-30', frequency=4,
                    day_count='ACT/360')
        price = price_bond(bond, 0.055, '2025-01-10')
        assert abs(solve_yield(bond, price, '2025-01-10') - 0.055) < 1e-6

    def test_initial_guess(self, treasury_bond, issue_date):
        """An explicit seed converges to the same yield."""
        a = solve_yield(treasury_bond, 980.0, issue_date)
        b = solve_yield(treasury_bond, 980.0, issue_date, initial_guess=0.10)
        assert abs(a - b) < 1e-6

    @pytest.mark.parametrize('market_price', [0.0, -10.0])
    def test_non_positive_price(self, treasury_bond, issue_date, market_price):
        """Market price must be positive."""
        with pytest.raises(ValidationError):
            solve_yield(treasury_bond, market_price, issue_date)

    def test_iteration_budget(self, treasury_bond, issue_date):
        """An exhausted iteration budget raises ConvergenceError."""
        with pytest.raises(ConvergenceError) as exc_info:
            solve_yield(treasury_bond, 700.0, issue_date, max_iterations=1)
        assert 'UST-10Y' in str(exc_info.value)
        assert exc_info.value.iterations == 1
