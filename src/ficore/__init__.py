"""
ficore - Fixed Income and CDS Pricing Core

Flat-curve pricing of fixed-coupon bonds and single-name credit default
swaps: payment schedules, day counts, discounting, hazard-rate survival,
yield solving and risk metrics.

Basic Usage:
    >>> from ficore import Bond, CurveInputs, Pricer
    >>>
    >>> bond = Bond(
    ...     identifier='UST-10Y',
    ...     notional=1000,
    ...     rate=0.035,
    ...     issue_date='2025-01-15',
    ...     maturity_date='2035-01-15',
    ... )
    >>> pricer = Pricer('2025-01-15', CurveInputs(discount_rate=0.04))
    >>> print(f"Price: {pricer.price(bond).npv:.2f}")
    >>> print(f"YTM at 950: {pricer.yield_to_maturity(bond, 950.0):.6f}")
"""

__version__ = '1.0.0'

# Bond pricing
from .bond import accrued_interest, price_bond, solve_yield, value_bond
# Cash flows
from .cashflows import CashFlow, principal_cashflow, project_cashflows
# CDS pricing
from .cds import cds_npv, fair_spread, value_cds, value_cds_with_curves
from .contingent_leg import expected_loss, protection_leg_pv
from .credit_curve import credit_curve_from_spread, implied_hazard_rate
# Curves
from .curves import CurveInputs, DiscountCurve, FlatDiscountCurve, FlatHazardCurve
from .curves import SurvivalCurve, hazard_rate_from_spread, hazard_rate_from_survival
# Dates
from .dates import days_between, time_in_years, to_date, year_fraction
# Enumerations
from .enums import Compounding, DayCountConvention, PaymentFrequency, Position
# Exceptions
from .exceptions import BootstrapError, ConvergenceError, DomainError
from .exceptions import InvalidPeriodError, PricingError, ScheduleError
from .exceptions import ValidationError
from .fee_leg import accrued_premium, premium_leg_pv, risky_annuity
# IMM dates
from .imm import is_imm_date, next_imm_date, previous_imm_date
# Instruments
from .instruments import Bond, CreditDefaultSwap, InstrumentTerms
from .instruments import bps_to_decimal, decimal_to_bps
# Request/response API
from .pricer import FairSpreadRequest, PriceRequest, Pricer, RiskRequest
from .pricer import YieldRequest
from .results import RiskMetrics, ValuationResult
# Risk
from .risk import bond_risk, cds_risk
# Schedule
from .schedule import PaymentSchedule, SchedulePeriod, generate_schedule
from .schedule import months_per_period

__all__ = [
    # Version
    '__version__',
    # Main API
    'Pricer',
    'PriceRequest',
    'YieldRequest',
    'FairSpreadRequest',
    'RiskRequest',
    'ValuationResult',
    'RiskMetrics',
    # Instruments
    'InstrumentTerms',
    'Bond',
    'CreditDefaultSwap',
    'bps_to_decimal',
    'decimal_to_bps',
    # Bonds
    'price_bond',
    'value_bond',
    'solve_yield',
    'accrued_interest',
    # CDS
    'value_cds',
    'value_cds_with_curves',
    'cds_npv',
    'fair_spread',
    'premium_leg_pv',
    'protection_leg_pv',
    'risky_annuity',
    'accrued_premium',
    'expected_loss',
    'implied_hazard_rate',
    'credit_curve_from_spread',
    # Risk
    'bond_risk',
    'cds_risk',
    # Curves
    'CurveInputs',
    'DiscountCurve',
    'SurvivalCurve',
    'FlatDiscountCurve',
    'FlatHazardCurve',
    'hazard_rate_from_spread',
    'hazard_rate_from_survival',
    # Cash flows
    'CashFlow',
    'project_cashflows',
    'principal_cashflow',
    # Enums
    'DayCountConvention',
    'Compounding',
    'PaymentFrequency',
    'Position',
    # Dates
    'to_date',
    'days_between',
    'year_fraction',
    'time_in_years',
    # Schedule
    'PaymentSchedule',
    'SchedulePeriod',
    'generate_schedule',
    'months_per_period',
    # IMM
    'is_imm_date',
    'next_imm_date',
    'previous_imm_date',
    # Exceptions
    'PricingError',
    'ValidationError',
    'ScheduleError',
    'InvalidPeriodError',
    'ConvergenceError',
    'DomainError',
    'BootstrapError',
]
