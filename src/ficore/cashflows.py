"""
Cash-flow projection.

Coupons and premiums are sized with the instrument's day count convention;
the time attached to each flow is always actual days / 365 from the
valuation date. Both quantities are kept on the CashFlow.
"""

import logging
from dataclasses import dataclass

from opendate import Date

from .curves import SurvivalCurve
from .dates import DateLike, time_in_years, to_date
from .instruments import Bond, InstrumentTerms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CashFlow:
    """
    A single projected payment.

    Attributes
        payment_date: Date of payment
        amount: Gross amount paid
        accrual_start: Start of the accrual period
        accrual_days: Actual days accrued
        year_fraction: Accrual under the instrument's day count
        time: Years from valuation date to payment (actual/365)
        survival_probability: Survival to payment date (credit only)
        is_principal: True for a notional repayment
    """

    payment_date: Date
    amount: float
    accrual_start: Date
    accrual_days: int
    year_fraction: float
    time: float
    survival_probability: float | None = None
    is_principal: bool = False


def project_cashflows(
    terms: InstrumentTerms,
    valuation_date: DateLike,
    survival_curve: SurvivalCurve | None = None,
) -> list[CashFlow]:
    """
    Coupon or premium flows paid strictly after the valuation date.

    amount = notional * rate * year_fraction(period)

    Args:
        terms: Instrument terms
        valuation_date: Flows on or before this date are dropped
        survival_curve: If given, each flow carries Q(time)

    Returns
        Flows in payment date order
    """
    vd = to_date(valuation_date)
    flows = []

    for period in terms.payment_schedule():
        if period.payment_date <= vd:
            continue
        t = time_in_years(vd, period.payment_date)
        flows.append(CashFlow(
            payment_date=period.payment_date,
            amount=terms.notional * terms.rate * period.year_fraction,
            accrual_start=period.accrual_start,
            accrual_days=period.accrual_days,
            year_fraction=period.year_fraction,
            time=t,
            survival_probability=(
                survival_curve.survival_probability(t) if survival_curve is not None else None
            ),
        ))

    if not flows:
        logger.warning('%s: no cash flows after valuation date %s (maturity %s)',
                       terms.identifier, vd, terms.maturity_date)
    return flows


def principal_cashflow(bond: Bond, valuation_date: DateLike) -> CashFlow | None:
    """Face value repaid at maturity, or None once the bond has matured."""
    vd = to_date(valuation_date)
    if bond.maturity_date <= vd:
        return None
    return CashFlow(
        payment_date=bond.maturity_date,
        amount=bond.notional,
        accrual_start=bond.maturity_date,
        accrual_days=0,
        year_fraction=0.0,
        time=time_in_years(vd, bond.maturity_date),
        is_principal=True,
    )
