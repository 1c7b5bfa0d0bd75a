"""
CDS valuation.

Combines the premium and protection legs into an NPV, the risky annuity
and the fair (par) spread. Discounting is continuous at a flat rate;
survival comes from a flat hazard rate or a bootstrapped market spread.
"""

import logging

from .cashflows import project_cashflows
from .config import INTEGRATION_STEPS
from .contingent_leg import protection_leg_pv
from .curves import CurveInputs, DiscountCurve, FlatDiscountCurve, FlatHazardCurve
from .curves import SurvivalCurve
from .dates import DateLike, to_date
from .enums import Compounding
from .exceptions import DomainError
from .fee_leg import accrued_premium, premium_leg_pv, risky_annuity
from .instruments import CreditDefaultSwap, decimal_to_bps
from .results import ValuationResult

logger = logging.getLogger(__name__)


def value_cds_with_curves(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    discount_curve: DiscountCurve,
    survival_curve: SurvivalCurve,
    steps: int = INTEGRATION_STEPS,
) -> ValuationResult:
    """
    Price a CDS against any discount and survival curve.

    NPV for the protection buyer = protection leg - premium leg - upfront fee;
    the sign flips for the protection seller.

    Args:
        cds: CDS contract
        value_date: Valuation date
        discount_curve: Risk-free discounting
        survival_curve: Survival probabilities and hazard rates
        steps: Protection leg integration slices

    Returns
        ValuationResult with leg breakdown, risky annuity and fair spread
    """
    vd = to_date(value_date)

    premium = premium_leg_pv(cds, vd, discount_curve, survival_curve)
    protection = protection_leg_pv(cds, vd, discount_curve, survival_curve, steps)
    annuity = risky_annuity(cds, vd, discount_curve, survival_curve)

    buyer_npv = protection - premium - cds.upfront_fee
    npv = cds.position.sign * buyer_npv

    par_spread = protection / (cds.notional * annuity) if annuity > 0 else None

    logger.debug('%s: premium=%.6f protection=%.6f annuity=%.6f npv=%.6f',
                 cds.identifier, premium, protection, annuity, npv)

    return ValuationResult(
        identifier=cds.identifier,
        npv=npv,
        cashflows=tuple(project_cashflows(cds, vd, survival_curve)),
        accrued_interest=accrued_premium(cds, vd),
        premium_leg_pv=premium,
        protection_leg_pv=protection,
        upfront_fee=cds.upfront_fee,
        risky_annuity=annuity,
        fair_spread=par_spread,
    )


def value_cds(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    curve: CurveInputs,
    steps: int = INTEGRATION_STEPS,
) -> ValuationResult:
    """Price a CDS from flat market inputs (continuous discounting)."""
    return value_cds_with_curves(
        cds,
        value_date,
        curve.discount_curve(Compounding.CONTINUOUS),
        curve.survival_curve(cds.recovery_rate),
        steps,
    )


def cds_npv(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    curve: CurveInputs,
    steps: int = INTEGRATION_STEPS,
) -> float:
    """Position-signed NPV only."""
    return value_cds(cds, value_date, curve, steps).npv


def fair_spread(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    hazard_rate: float,
    discount_rate: float,
    steps: int = INTEGRATION_STEPS,
) -> float:
    """
    Spread that sets the premium leg equal to the protection leg.

        s = protection_pv / (notional * risky_annuity)

    Returns
        Fair spread as a decimal
    """
    discount_curve = FlatDiscountCurve(discount_rate, Compounding.CONTINUOUS)
    survival_curve = FlatHazardCurve(hazard_rate)
    vd = to_date(value_date)

    protection = protection_leg_pv(cds, vd, discount_curve, survival_curve, steps)
    annuity = risky_annuity(cds, vd, discount_curve, survival_curve)
    if annuity <= 0:
        raise DomainError(f'{cds.identifier}: no premium payments remain after {vd}')

    spread = protection / (cds.notional * annuity)
    logger.debug('%s: fair spread %.4fbps', cds.identifier, decimal_to_bps(spread))
    return spread
