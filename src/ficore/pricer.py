"""
High-level request/response API.

Each request carries everything needed to answer it: instrument terms,
market inputs and an explicit valuation date. Requests are validated when
constructed, so a malformed request never reaches the valuation code.
"""

from dataclasses import dataclass, replace

from opendate import Date

from .bond import solve_yield as _solve_bond_yield
from .bond import value_bond
from .cds import fair_spread as _fair_spread
from .cds import value_cds
from .config import INTEGRATION_STEPS, MAX_ITER, TOL
from .curves import CurveInputs
from .dates import DateLike, to_date
from .exceptions import ValidationError, check_finite
from .instruments import Bond, CreditDefaultSwap, InstrumentTerms, decimal_to_bps
from .results import RiskMetrics, ValuationResult
from .risk import bond_risk, cds_risk


def _check_instrument(instrument, allowed: tuple[type, ...]) -> None:
    if not isinstance(instrument, allowed):
        names = ', '.join(t.__name__ for t in allowed)
        raise ValidationError('instrument', type(instrument).__name__, f'expected {names}')


def _check_curve(instrument: InstrumentTerms, curve: CurveInputs) -> None:
    if not isinstance(curve, CurveInputs):
        raise ValidationError('curve', type(curve).__name__, 'expected CurveInputs',
                              instrument.identifier)
    if isinstance(instrument, CreditDefaultSwap) and not curve.has_credit:
        raise ValidationError('curve', curve, 'a hazard rate or market spread is required',
                              instrument.identifier)


def _coerce_date(name: str, value: DateLike) -> Date:
    try:
        return to_date(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(name, value, str(e)) from e


@dataclass(frozen=True)
class PriceRequest:
    """Value a bond (at curve.discount_rate as its yield) or a CDS."""

    instrument: InstrumentTerms
    curve: CurveInputs
    valuation_date: DateLike
    compounding_frequency: int | None = None
    integration_steps: int = INTEGRATION_STEPS
    compute_risk: bool = False

    def __post_init__(self):
        _check_instrument(self.instrument, (Bond, CreditDefaultSwap))
        _check_curve(self.instrument, self.curve)
        object.__setattr__(self, 'valuation_date',
                           _coerce_date('valuation_date', self.valuation_date))
        if self.integration_steps <= 0:
            raise ValidationError('integration_steps', self.integration_steps,
                                  'must be positive', self.instrument.identifier)


@dataclass(frozen=True)
class YieldRequest:
    """Solve a bond's yield to maturity from its full market price."""

    bond: Bond
    market_price: float
    valuation_date: DateLike
    compounding_frequency: int | None = None
    tolerance: float = TOL
    max_iterations: int = MAX_ITER

    def __post_init__(self):
        _check_instrument(self.bond, (Bond,))
        object.__setattr__(self, 'valuation_date',
                           _coerce_date('valuation_date', self.valuation_date))
        if not self.market_price > 0:
            raise ValidationError('market_price', self.market_price, 'must be positive',
                                  self.bond.identifier)
        if not self.tolerance > 0:
            raise ValidationError('tolerance', self.tolerance, 'must be positive',
                                  self.bond.identifier)
        if self.max_iterations < 1:
            raise ValidationError('max_iterations', self.max_iterations, 'must be at least 1',
                                  self.bond.identifier)


@dataclass(frozen=True)
class FairSpreadRequest:
    """Fair CDS spread for a flat hazard rate and discount rate."""

    cds: CreditDefaultSwap
    hazard_rate: float
    discount_rate: float
    valuation_date: DateLike
    integration_steps: int = INTEGRATION_STEPS

    def __post_init__(self):
        _check_instrument(self.cds, (CreditDefaultSwap,))
        object.__setattr__(self, 'valuation_date',
                           _coerce_date('valuation_date', self.valuation_date))
        check_finite('hazard_rate', self.hazard_rate, self.cds.identifier)
        check_finite('discount_rate', self.discount_rate, self.cds.identifier)
        if not self.hazard_rate >= 0:
            raise ValidationError('hazard_rate', self.hazard_rate, 'must be non-negative',
                                  self.cds.identifier)


@dataclass(frozen=True)
class RiskRequest:
    """Sensitivities of a bond or CDS."""

    instrument: InstrumentTerms
    curve: CurveInputs
    valuation_date: DateLike
    compounding_frequency: int | None = None
    integration_steps: int = INTEGRATION_STEPS
    bump_bp: float = 1.0

    def __post_init__(self):
        _check_instrument(self.instrument, (Bond, CreditDefaultSwap))
        _check_curve(self.instrument, self.curve)
        object.__setattr__(self, 'valuation_date',
                           _coerce_date('valuation_date', self.valuation_date))
        if not self.bump_bp > 0:
            raise ValidationError('bump_bp', self.bump_bp, 'must be positive',
                                  self.instrument.identifier)


def risk(request: RiskRequest) -> RiskMetrics:
    """Answer a RiskRequest."""
    inst = request.instrument
    if isinstance(inst, Bond):
        return bond_risk(inst, request.curve.discount_rate, request.valuation_date,
                         request.compounding_frequency, request.bump_bp)
    return cds_risk(inst, request.valuation_date, request.curve,
                    request.integration_steps, request.bump_bp)


def price(request: PriceRequest) -> ValuationResult:
    """Answer a PriceRequest, attaching risk metrics when asked."""
    inst = request.instrument
    if isinstance(inst, Bond):
        result = value_bond(inst, request.curve.discount_rate, request.valuation_date,
                            request.compounding_frequency)
    else:
        result = value_cds(inst, request.valuation_date, request.curve,
                           request.integration_steps)

    if not request.compute_risk:
        return result

    metrics = risk(RiskRequest(
        instrument=inst,
        curve=request.curve,
        valuation_date=request.valuation_date,
        compounding_frequency=request.compounding_frequency,
        integration_steps=request.integration_steps,
    ))
    return replace(result, risk=metrics)


def solve_yield(request: YieldRequest) -> float:
    """Answer a YieldRequest; raises ConvergenceError if the solver fails."""
    return _solve_bond_yield(
        request.bond,
        request.market_price,
        request.valuation_date,
        compounding_frequency=request.compounding_frequency,
        tolerance=request.tolerance,
        max_iterations=request.max_iterations,
    )


def fair_spread(request: FairSpreadRequest) -> float:
    """Answer a FairSpreadRequest, in basis points."""
    spread = _fair_spread(request.cds, request.valuation_date, request.hazard_rate,
                          request.discount_rate, request.integration_steps)
    return decimal_to_bps(spread)


class Pricer:
    """
    Pricing session bound to one valuation date and one set of flat inputs.

    Example:
        >>> pricer = Pricer('2025-01-15', CurveInputs(discount_rate=0.04))
        >>> pricer.price(bond).npv
    """

    def __init__(self, valuation_date: DateLike, curve: CurveInputs):
        self.valuation_date = _coerce_date('valuation_date', valuation_date)
        self.curve = curve

    def price(self, instrument: InstrumentTerms, compute_risk: bool = False) -> ValuationResult:
        return price(PriceRequest(instrument, self.curve, self.valuation_date,
                                  compute_risk=compute_risk))

    def risk(self, instrument: InstrumentTerms) -> RiskMetrics:
        return risk(RiskRequest(instrument, self.curve, self.valuation_date))

    def yield_to_maturity(self, bond: Bond, market_price: float, **kwargs) -> float:
        return solve_yield(YieldRequest(bond, market_price, self.valuation_date, **kwargs))

    def fair_spread_bps(self, cds: CreditDefaultSwap) -> float:
        """Fair spread at the session's hazard rate (bootstrapped if needed)."""
        hazard = self.curve.survival_curve(cds.recovery_rate).rate
        return fair_spread(FairSpreadRequest(cds, hazard, self.curve.discount_rate,
                                             self.valuation_date))
