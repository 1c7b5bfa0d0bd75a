"""
Discounting and survival curves.

The valuation code only needs two capabilities:
- discount_factor(t) from a discount curve
- survival_probability(t) and hazard_rate(t) from a survival curve

Flat curves implement both here. Any object providing the same methods
(a term-structure curve, for instance) can be passed in their place.
Curves are immutable; bumped() returns a new curve.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

import numpy as np

from .enums import Compounding
from .exceptions import DomainError, ValidationError, check_finite


class DiscountCurve(ABC):
    """Risk-free discounting, time measured in years from valuation."""

    @abstractmethod
    def discount_factor(self, t: float) -> float:
        """Discount factor at time t."""

    def discount_factors(self, times) -> np.ndarray:
        """Vector of discount factors."""
        return np.array([self.discount_factor(t) for t in times], dtype=float)


class SurvivalCurve(ABC):
    """Default-survival model, time measured in years from valuation."""

    @abstractmethod
    def survival_probability(self, t: float) -> float:
        """Probability of no default before time t."""

    @abstractmethod
    def hazard_rate(self, t: float) -> float:
        """Instantaneous default intensity at time t."""

    def default_probability(self, t: float) -> float:
        """
        Cumulative default probability at time t.

        PD(t) = 1 - Q(t)
        """
        return 1.0 - self.survival_probability(t)

    def forward_survival_probability(self, t1: float, t2: float) -> float:
        """
        Survival from t1 to t2 given survival to t1.

        Q(t1, t2) = Q(t2) / Q(t1)
        """
        q1 = self.survival_probability(t1)
        q2 = self.survival_probability(t2)
        return q2 / q1 if q1 > 0 else 0.0

    def survival_probabilities(self, times) -> np.ndarray:
        """Vector of survival probabilities."""
        return np.array([self.survival_probability(t) for t in times], dtype=float)

    def hazard_rates(self, times) -> np.ndarray:
        """Vector of hazard rates."""
        return np.array([self.hazard_rate(t) for t in times], dtype=float)


class FlatDiscountCurve(DiscountCurve):
    """
    Single flat rate.

    PERIODIC:   DF(t) = (1 + r/m) ** (-t * m)
    CONTINUOUS: DF(t) = exp(-r * t)
    """

    def __init__(
        self,
        rate: float,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: int = 1,
    ):
        if isinstance(compounding, str):
            compounding = Compounding.from_string(compounding)
        if not np.isfinite(rate):
            raise DomainError(f'Discount rate must be finite, got {rate}')
        if compounding is Compounding.PERIODIC:
            if frequency <= 0:
                raise DomainError(f'Compounding frequency must be positive, got {frequency}')
            if 1.0 + rate / frequency <= 0.0:
                raise DomainError(
                    f'Rate {rate} is below -{frequency}; '
                    f'periodic discount factor undefined'
                )
        self._rate = float(rate)
        self._compounding = compounding
        self._frequency = frequency

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def compounding(self) -> Compounding:
        return self._compounding

    @property
    def frequency(self) -> int:
        return self._frequency

    def discount_factor(self, t: float) -> float:
        if t <= 0:
            return 1.0
        if self._compounding is Compounding.PERIODIC:
            m = self._frequency
            return float((1.0 + self._rate / m) ** (-t * m))
        return float(np.exp(-self._rate * t))

    def discount_factors(self, times) -> np.ndarray:
        t = np.maximum(np.asarray(times, dtype=float), 0.0)
        if self._compounding is Compounding.PERIODIC:
            m = self._frequency
            return (1.0 + self._rate / m) ** (-t * m)
        return np.exp(-self._rate * t)

    def bumped(self, shift: float) -> 'FlatDiscountCurve':
        """A new curve with the rate shifted by shift (decimal)."""
        return FlatDiscountCurve(self._rate + shift, self._compounding, self._frequency)

    def __repr__(self) -> str:
        return (
            f'FlatDiscountCurve(rate={self._rate:.6f}, '
            f'compounding={self._compounding.value}, frequency={self._frequency})'
        )


class FlatHazardCurve(SurvivalCurve):
    """
    Constant default intensity.

    Q(t) = exp(-h * t), so Q(0) = 1 and Q decreases in t for h > 0.
    """

    def __init__(self, hazard_rate: float):
        if not (np.isfinite(hazard_rate) and hazard_rate >= 0):
            raise DomainError(f'Hazard rate must be finite and non-negative, got {hazard_rate}')
        self._hazard_rate = float(hazard_rate)

    @property
    def rate(self) -> float:
        """The flat hazard rate."""
        return self._hazard_rate

    def hazard_rate(self, t: float) -> float:
        return self._hazard_rate

    def survival_probability(self, t: float) -> float:
        if t <= 0:
            return 1.0
        return float(np.exp(-self._hazard_rate * t))

    def survival_probabilities(self, times) -> np.ndarray:
        t = np.maximum(np.asarray(times, dtype=float), 0.0)
        return np.exp(-self._hazard_rate * t)

    def hazard_rates(self, times) -> np.ndarray:
        return np.full(np.shape(times), self._hazard_rate, dtype=float)

    def bumped(self, shift: float) -> 'FlatHazardCurve':
        """A new curve with the hazard rate shifted by shift."""
        return FlatHazardCurve(self._hazard_rate + shift)

    def __repr__(self) -> str:
        return f'FlatHazardCurve(hazard_rate={self._hazard_rate:.6f})'


def hazard_rate_from_spread(spread: float, recovery_rate: float) -> float:
    """
    Single-parameter calibration of a flat hazard rate.

        h = s / (1 - R)

    Args:
        spread: Market spread as a decimal (0.025 for 250bps)
        recovery_rate: Recovery rate in [0, 1)
    """
    if not 0.0 <= recovery_rate < 1.0:
        raise DomainError(f'Recovery rate must be within [0, 1), got {recovery_rate}')
    if not spread >= 0:
        raise DomainError(f'Spread must be non-negative, got {spread}')
    return spread / (1.0 - recovery_rate)


def hazard_rate_from_survival(survival_probability: float, t: float) -> float:
    """
    Flat hazard rate implied by a survival probability at time t.

        h = -ln(Q) / t

    Raises
        DomainError: If Q is outside (0, 1] or t is not positive
    """
    if not 0.0 < survival_probability <= 1.0:
        raise DomainError(
            f'Survival probability must be within (0, 1], got {survival_probability}'
        )
    if not t > 0:
        raise DomainError(f'Time must be positive to imply a hazard rate, got {t}')
    return float(-np.log(survival_probability) / t)


@dataclass(frozen=True)
class CurveInputs:
    """
    Valuation-time market inputs.

    Attributes
        discount_rate: Flat risk-free rate (the yield, for bonds)
        hazard_rate: Flat default intensity for credit instruments
        market_spread: Market spread (decimal) to bootstrap the hazard rate
                       from when hazard_rate is not given
    """

    discount_rate: float
    hazard_rate: float | None = None
    market_spread: float | None = None

    def __post_init__(self):
        check_finite('discount_rate', self.discount_rate)
        if self.hazard_rate is not None:
            check_finite('hazard_rate', self.hazard_rate)
        if self.market_spread is not None:
            check_finite('market_spread', self.market_spread)
        if self.hazard_rate is not None and not self.hazard_rate >= 0:
            raise ValidationError('hazard_rate', self.hazard_rate, 'must be non-negative')
        if self.market_spread is not None and not self.market_spread >= 0:
            raise ValidationError('market_spread', self.market_spread, 'must be non-negative')

    @property
    def has_credit(self) -> bool:
        return self.hazard_rate is not None or self.market_spread is not None

    def discount_curve(
        self,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: int = 1,
    ) -> FlatDiscountCurve:
        return FlatDiscountCurve(self.discount_rate, compounding, frequency)

    def survival_curve(self, recovery_rate: float) -> FlatHazardCurve:
        """Flat hazard curve, bootstrapped from market_spread if needed."""
        if self.hazard_rate is not None:
            return FlatHazardCurve(self.hazard_rate)
        if self.market_spread is not None:
            return FlatHazardCurve(hazard_rate_from_spread(self.market_spread, recovery_rate))
        raise ValidationError(
            'hazard_rate', None, 'a hazard rate or market spread is required'
        )

    def bumped(
        self,
        discount_shift: float = 0.0,
        hazard_shift: float = 0.0,
        spread_shift: float = 0.0,
    ) -> 'CurveInputs':
        """New inputs with the given shifts applied to the fields that are set."""
        return replace(
            self,
            discount_rate=self.discount_rate + discount_shift,
            hazard_rate=None if self.hazard_rate is None else self.hazard_rate + hazard_shift,
            market_spread=None if self.market_spread is None else self.market_spread + spread_shift,
        )
