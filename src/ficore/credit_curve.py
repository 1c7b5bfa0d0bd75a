"""
Flat hazard rate calibration from a CDS spread.

hazard_rate_from_spread() gives the s / (1 - R) approximation. The exact
single-name calibration here solves for the flat hazard rate whose model
fair spread reproduces the market spread.
"""

import logging

from .cds import fair_spread
from .config import INTEGRATION_STEPS
from .curves import FlatHazardCurve, hazard_rate_from_spread
from .dates import DateLike, to_date
from .exceptions import BootstrapError, ConvergenceError
from .instruments import CreditDefaultSwap
from .root_finding import brent

logger = logging.getLogger(__name__)


def credit_curve_from_spread(spread: float, recovery_rate: float) -> FlatHazardCurve:
    """Flat hazard curve from the s / (1 - R) approximation."""
    return FlatHazardCurve(hazard_rate_from_spread(spread, recovery_rate))


def implied_hazard_rate(
    cds: CreditDefaultSwap,
    market_spread: float,
    discount_rate: float,
    value_date: DateLike,
    steps: int = INTEGRATION_STEPS,
    tol: float = 1e-12,
) -> float:
    """
    Flat hazard rate whose fair spread equals the market spread.

    Args:
        cds: Contract whose schedule and recovery define the fair spread
        market_spread: Target spread as a decimal
        discount_rate: Flat continuous discount rate
        value_date: Valuation date
        steps: Protection leg integration slices
        tol: Brent tolerance on the spread difference

    Returns
        Calibrated hazard rate

    Raises
        BootstrapError: If no hazard rate in the search range matches
    """
    vd = to_date(value_date)
    if market_spread == 0:
        return 0.0

    def objective(h: float) -> float:
        return fair_spread(cds, vd, h, discount_rate, steps) - market_spread

    # The approximation is a good centre for the bracket
    guess = hazard_rate_from_spread(market_spread, cds.recovery_rate)
    upper = max(2.0 * guess, 1e-4)
    while objective(upper) < 0:
        upper *= 2.0
        if upper > 100.0:
            raise BootstrapError(
                f'{cds.identifier}: no hazard rate below {upper} reproduces '
                f'spread {market_spread}'
            )

    try:
        hazard = brent(objective, 0.0, upper, tol=tol)
    except ConvergenceError as e:
        raise BootstrapError(f'{cds.identifier}: hazard rate calibration failed: {e}') from e

    logger.debug('%s: implied hazard %.8f (approximation %.8f)', cds.identifier, hazard, guess)
    return hazard
