"""
Fee (premium) leg calculation for CDS.

The premium leg is the stream of running spread payments from the
protection buyer to the protection seller, each paid only if the
reference entity has survived to the payment date.
"""

from .cashflows import project_cashflows
from .curves import DiscountCurve, SurvivalCurve
from .dates import DateLike, to_date, year_fraction
from .instruments import CreditDefaultSwap


def premium_leg_pv(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    discount_curve: DiscountCurve,
    survival_curve: SurvivalCurve,
) -> float:
    """
    Present value of the premium leg.

        PV = sum(premium_i * Q(t_i) * DF(t_i))

    where premium_i = notional * spread * accrued_days / 360 under the
    default ACT/360 convention.

    Args:
        cds: CDS contract
        value_date: Valuation date
        discount_curve: Risk-free discounting
        survival_curve: Survival probabilities

    Returns
        Present value of the premium leg (positive)
    """
    flows = project_cashflows(cds, value_date, survival_curve)
    return sum(
        cf.amount * cf.survival_probability * discount_curve.discount_factor(cf.time)
        for cf in flows
    )


def risky_annuity(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    discount_curve: DiscountCurve,
    survival_curve: SurvivalCurve,
) -> float:
    """
    Risky annuity (RPV01 per unit notional).

        A = sum(accrual_fraction_i * Q(t_i) * DF(t_i))

    The premium leg PV equals notional * spread * A.
    """
    flows = project_cashflows(cds, value_date, survival_curve)
    return sum(
        cf.year_fraction * cf.survival_probability * discount_curve.discount_factor(cf.time)
        for cf in flows
    )


def accrued_premium(cds: CreditDefaultSwap, value_date: DateLike) -> float:
    """
    Premium accrued since the last payment date.

    Zero before the first accrual period starts and after maturity.
    """
    vd = to_date(value_date)
    period = cds.payment_schedule().period_containing(vd)
    if period is None:
        return 0.0
    return cds.notional * cds.spread * year_fraction(period.accrual_start, vd, cds.day_count)
