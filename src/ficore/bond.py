"""
Fixed-coupon bond pricing and yield solving.

Price = sum(coupon_i * DF(t_i)) + face * DF(T), with
DF(t) = (1 + y/m) ** (-t * m) and t = actual days / 365 from the
valuation date. Coupons themselves are sized with the bond's day count,
so the two time bases differ for ACT/360 or 30/360 bonds.
"""

import logging

from .cashflows import CashFlow, principal_cashflow, project_cashflows
from .config import MAX_ITER, TOL
from .curves import DiscountCurve, FlatDiscountCurve
from .dates import DateLike, to_date, year_fraction
from .enums import Compounding
from .exceptions import ConvergenceError, DomainError, ValidationError
from .instruments import Bond
from .results import ValuationResult
from .root_finding import newton_raphson

logger = logging.getLogger(__name__)


def bond_discount_curve(
    bond: Bond,
    yield_rate: float,
    compounding_frequency: int | None = None,
) -> FlatDiscountCurve:
    """Periodic flat curve at the given yield, compounded m times a year
    (default: the bond's payment frequency)."""
    m = compounding_frequency or bond.frequency
    return FlatDiscountCurve(yield_rate, Compounding.PERIODIC, m)


def bond_cashflows(bond: Bond, valuation_date: DateLike) -> list[CashFlow]:
    """Remaining coupons followed by the principal repayment."""
    flows = project_cashflows(bond, valuation_date)
    principal = principal_cashflow(bond, valuation_date)
    if principal is not None:
        flows.append(principal)
    return flows


def present_value(flows: list[CashFlow], discount_curve: DiscountCurve) -> float:
    """Sum of discounted cash flow amounts."""
    return sum(cf.amount * discount_curve.discount_factor(cf.time) for cf in flows)


def price_bond(
    bond: Bond,
    yield_rate: float,
    valuation_date: DateLike,
    compounding_frequency: int | None = None,
) -> float:
    """
    Full (dirty) price of a bond at a flat yield.

    Args:
        bond: Bond terms
        yield_rate: Yield to maturity as a decimal
        valuation_date: Valuation date
        compounding_frequency: Compounding periods per year (default: bond frequency)

    Returns
        Price in the same units as the face value
    """
    curve = bond_discount_curve(bond, yield_rate, compounding_frequency)
    return present_value(bond_cashflows(bond, valuation_date), curve)


def accrued_interest(bond: Bond, valuation_date: DateLike) -> float:
    """
    Coupon accrued since the last payment date under the bond's day count.

    Zero on a payment date, before issue and after maturity.
    """
    vd = to_date(valuation_date)
    period = bond.payment_schedule().period_containing(vd)
    if period is None:
        return 0.0
    return bond.notional * bond.coupon_rate * year_fraction(
        period.accrual_start, vd, bond.day_count
    )


def value_bond(
    bond: Bond,
    yield_rate: float,
    valuation_date: DateLike,
    compounding_frequency: int | None = None,
) -> ValuationResult:
    """Price a bond and report its cash flows, accrued interest and clean price."""
    vd = to_date(valuation_date)
    curve = bond_discount_curve(bond, yield_rate, compounding_frequency)
    flows = bond_cashflows(bond, vd)
    dirty = present_value(flows, curve)
    accrued = accrued_interest(bond, vd)

    logger.debug('%s: dirty=%.6f accrued=%.6f at yield %.6f', bond.identifier,
                 dirty, accrued, yield_rate)

    return ValuationResult(
        identifier=bond.identifier,
        npv=dirty,
        cashflows=tuple(flows),
        accrued_interest=accrued,
        clean_price=dirty - accrued,
    )


def solve_yield(
    bond: Bond,
    market_price: float,
    valuation_date: DateLike,
    compounding_frequency: int | None = None,
    tolerance: float = TOL,
    max_iterations: int = MAX_ITER,
    initial_guess: float | None = None,
) -> float:
    """
    Yield to maturity matching a full market price.

    Newton-Raphson on price(y) - market_price, starting from the coupon
    rate unless initial_guess is given.

    Args:
        bond: Bond terms
        market_price: Observed full price, > 0
        valuation_date: Valuation date
        compounding_frequency: Compounding periods per year (default: bond frequency)
        tolerance: Converged when |price(y) - market_price| < tolerance
        max_iterations: Iteration budget
        initial_guess: Seed yield; callers retry with a different seed

    Returns
        Yield to maturity as a decimal

    Raises
        ValidationError: If market_price is not positive
        ConvergenceError: If the solver does not converge within budget
    """
    if not market_price > 0:
        raise ValidationError('market_price', market_price, 'must be positive', bond.identifier)

    vd = to_date(valuation_date)
    flows = bond_cashflows(bond, vd)
    seed = bond.coupon_rate if initial_guess is None else initial_guess

    def objective(y: float) -> float:
        return present_value(flows, bond_discount_curve(bond, y, compounding_frequency)) - market_price

    try:
        ytm = newton_raphson(objective, seed, tol=tolerance, max_iter=max_iterations)
    except ConvergenceError as e:
        raise ConvergenceError(
            f'{bond.identifier}: yield for market_price={market_price} '
            f'did not converge from seed {seed}: {e}',
            iterations=e.iterations, x=e.x, fx=e.fx,
        ) from e
    except DomainError as e:
        raise ConvergenceError(
            f'{bond.identifier}: yield iteration for market_price={market_price} '
            f'left the valid rate domain: {e}',
        ) from e

    logger.info('%s: yield %.8f for price %.6f', bond.identifier, ytm, market_price)
    return ytm
