"""
Custom exceptions for the pricing core.
"""

import math


class PricingError(Exception):
    """Base exception for all pricing errors."""


class ValidationError(PricingError, ValueError):
    """Malformed instrument or request data, raised at construction."""

    def __init__(self, parameter: str, value, reason: str, identifier: str | None = None):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        self.identifier = identifier
        prefix = f'{identifier}: ' if identifier else ''
        super().__init__(f'{prefix}invalid {parameter}={value!r} ({reason})')


class ScheduleError(PricingError):
    """Error related to payment schedule generation."""


class InvalidPeriodError(ScheduleError, ValueError):
    """Payment frequency does not divide twelve months evenly."""

    def __init__(self, frequency, identifier: str | None = None):
        self.frequency = frequency
        self.identifier = identifier
        prefix = f'{identifier}: ' if identifier else ''
        super().__init__(
            f'{prefix}invalid frequency={frequency!r} '
            f'(periods per year must be a positive divisor of 12)'
        )


class ConvergenceError(PricingError):
    """Root finding failed to converge."""

    def __init__(self, message: str, iterations: int | None = None,
                 x: float | None = None, fx: float | None = None):
        self.iterations = iterations
        self.x = x
        self.fx = fx
        super().__init__(message)


class DomainError(PricingError, ValueError):
    """Numerical input outside the domain of a formula."""


class BootstrapError(PricingError):
    """Error during hazard rate calibration."""


def check_finite(parameter: str, value, identifier: str | None = None) -> None:
    """Raise ValidationError unless value is a real, finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(parameter, value, 'must be a finite number', identifier)
