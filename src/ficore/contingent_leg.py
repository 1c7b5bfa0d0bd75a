"""
Contingent (protection) leg calculation for CDS.

The contingent leg is the payment from the protection seller to the
protection buyer upon default. It equals:
    (1 - Recovery Rate) * Notional
"""

import numpy as np

from .config import INTEGRATION_STEPS
from .curves import DiscountCurve, SurvivalCurve
from .dates import DateLike, time_in_years, to_date
from .instruments import CreditDefaultSwap


def protection_leg_pv(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    discount_curve: DiscountCurve,
    survival_curve: SurvivalCurve,
    steps: int = INTEGRATION_STEPS,
) -> float:
    """
    Present value of the protection leg.

        PV = (1 - R) * N * ∫₀ᵀ λ(t) * Q(t) * DF(t) dt

    integrated with the midpoint rule over steps equal slices from the
    valuation date to maturity. Slice i has width T/steps and is sampled
    at its midpoint (i + 0.5) * T/steps.

    Args:
        cds: CDS contract
        value_date: Valuation date, start of protection
        discount_curve: Risk-free discounting
        survival_curve: Hazard rates and survival probabilities
        steps: Number of integration slices

    Returns
        Present value of the protection leg (positive)
    """
    if steps <= 0:
        raise ValueError(f'Integration steps must be positive, got {steps}')

    vd = to_date(value_date)
    t_end = time_in_years(vd, cds.maturity_date)
    if t_end <= 0:
        return 0.0

    dt = t_end / steps
    midpoints = (np.arange(steps) + 0.5) * dt
    integrand = (
        survival_curve.hazard_rates(midpoints)
        * survival_curve.survival_probabilities(midpoints)
        * discount_curve.discount_factors(midpoints)
    )

    loss_given_default = cds.loss_given_default * cds.notional
    return float(loss_given_default * integrand.sum() * dt)


def expected_loss(
    cds: CreditDefaultSwap,
    value_date: DateLike,
    survival_curve: SurvivalCurve,
) -> float:
    """
    Expected loss (undiscounted) over the remaining life of the CDS.

        EL = (1 - R) * N * (1 - Q(T))
    """
    t_mat = time_in_years(value_date, cds.maturity_date)
    return cds.loss_given_default * cds.notional * survival_curve.default_probability(t_mat)
