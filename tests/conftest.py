"""
Shared test fixtures for pricing core tests.
"""

import os
import pathlib
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(pathlib.Path(__file__).parent, '..', 'src'))

from ficore import Bond, CreditDefaultSwap, CurveInputs


@pytest.fixture
def issue_date():
    """Issue date of the sample treasury bond."""
    return '2025-01-15'


@pytest.fixture
def treasury_bond(issue_date):
    """10Y 3.5% semi-annual bond, face 1000."""
    return Bond(
        identifier='UST-10Y',
        notional=1000.0,
        rate=0.035,
        issue_date=issue_date,
        maturity_date='2035-01-15',
        frequency=2,
        day_count='ACT/ACT',
    )


@pytest.fixture
def cds_start_date():
    """Accrual start of the sample CDS."""
    return '2025-03-20'


@pytest.fixture
def five_year_cds(cds_start_date):
    """5Y 250bps protection on 10MM, quarterly ACT/360, 40% recovery."""
    return CreditDefaultSwap.from_spread_bps(
        identifier='CORP-5Y',
        notional=10_000_000.0,
        spread_bps=250.0,
        start_date=cds_start_date,
        maturity_date='2030-03-20',
        recovery_rate=0.4,
    )


@pytest.fixture
def credit_inputs():
    """5% discount rate with a 250bps market spread."""
    return CurveInputs(discount_rate=0.05, market_spread=0.025)
