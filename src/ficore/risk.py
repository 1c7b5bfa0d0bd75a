"""
Risk metrics.

Bond durations and convexity come from the discounted cash flows at the
current yield. DV01 and CS01 are one-sided finite differences: the
instrument is re-valued under inputs bumped by bump_bp basis points and
the value change is divided by bump_bp. Every bump builds new inputs;
nothing is cached between valuations.
"""

from .bond import bond_cashflows, bond_discount_curve, price_bond
from .cds import value_cds
from .config import BASIS_POINT, INTEGRATION_STEPS
from .curves import CurveInputs
from .dates import DateLike, to_date
from .exceptions import DomainError
from .instruments import Bond, CreditDefaultSwap
from .results import RiskMetrics


def bond_risk(
    bond: Bond,
    yield_rate: float,
    valuation_date: DateLike,
    compounding_frequency: int | None = None,
    bump_bp: float = 1.0,
) -> RiskMetrics:
    """
    Duration, convexity and DV01 of a bond at a flat yield.

    - Macaulay duration = sum(t_i * PV_i) / P
    - Modified duration = Macaulay / (1 + y/m)
    - Dollar duration = -Modified * P
    - Convexity = sum(PV_i * t_i * (t_i + 1)) / (P * (1 + y/m)^2)
    - DV01 = (P(y + bump) - P(y)) / bump_bp

    Times t_i are actual days / 365 from valuation; the sums include the
    principal repayment.
    """
    vd = to_date(valuation_date)
    m = compounding_frequency or bond.frequency
    curve = bond_discount_curve(bond, yield_rate, m)
    flows = bond_cashflows(bond, vd)

    pvs = [cf.amount * curve.discount_factor(cf.time) for cf in flows]
    price = sum(pvs)
    if price <= 0:
        raise DomainError(f'{bond.identifier}: no positive value left at {vd} to measure risk')

    growth = 1.0 + yield_rate / m
    macaulay = sum(cf.time * pv for cf, pv in zip(flows, pvs)) / price
    modified = macaulay / growth
    convexity = sum(pv * cf.time * (cf.time + 1.0) for cf, pv in zip(flows, pvs)) / (price * growth ** 2)

    bumped = price_bond(bond, yield_rate + bump_bp * BASIS_POINT, vd, m)
    dv01 = (bumped - price) / bump_bp

    return RiskMetrics(
        macaulay_duration=macaulay,
        modified_duration=modified,
        dollar_duration=-modified * price,
        convexity=convexity,
        dv01=dv01,
    )


def _spread_bumped(cds: CreditDefaultSwap, curve: CurveInputs, shift: float) -> CurveInputs:
    """Bump the market spread, or the hazard rate by shift / (1 - R)."""
    if curve.market_spread is not None and curve.hazard_rate is None:
        return curve.bumped(spread_shift=shift)
    return curve.bumped(hazard_shift=shift / cds.loss_given_default)


def cds_risk(
    cds: CreditDefaultSwap,
    valuation_date: DateLike,
    curve: CurveInputs,
    steps: int = INTEGRATION_STEPS,
    bump_bp: float = 1.0,
) -> RiskMetrics:
    """
    CS01, DV01 and risky duration of a CDS position.

    CS01 bumps the credit spread (the hazard rate moves by bump / (1 - R)
    when only a hazard rate is supplied); DV01 bumps the discount rate.
    Both are position-signed like the NPV.
    """
    vd = to_date(valuation_date)
    shift = bump_bp * BASIS_POINT

    base = value_cds(cds, vd, curve, steps)
    spread_up = value_cds(cds, vd, _spread_bumped(cds, curve, shift), steps)
    rate_up = value_cds(cds, vd, curve.bumped(discount_shift=shift), steps)

    return RiskMetrics(
        cs01=(spread_up.npv - base.npv) / bump_bp,
        dv01=(rate_up.npv - base.npv) / bump_bp,
        risky_duration=base.risky_annuity,
    )
