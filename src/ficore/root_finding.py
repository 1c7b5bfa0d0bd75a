"""
Root finding algorithms.

Newton-Raphson with a forward-difference derivative drives yield solving.
Brent's method, which combines bisection with inverse quadratic
interpolation, drives the bracketed hazard rate calibration.

Both raise ConvergenceError rather than returning a best-effort value.
"""

import logging
import math
import sys
from collections.abc import Callable

from .config import DERIVATIVE_STEP, MAX_ITER, TOL
from .exceptions import ConvergenceError

logger = logging.getLogger(__name__)

_EPS = sys.float_info.epsilon


def newton_raphson(
    f: Callable[[float], float],
    x0: float,
    tol: float = TOL,
    max_iter: int = MAX_ITER,
    step: float = DERIVATIVE_STEP,
    df: Callable[[float], float] | None = None,
) -> float:
    """
    Find a root using Newton-Raphson.

    The derivative is estimated by a forward difference
    (f(x + step) - f(x)) / step unless df is given.

    Args:
        f: Function to find root of
        x0: Initial guess
        tol: Converged when |f(x)| < tol
        max_iter: Maximum iterations
        step: Forward-difference step
        df: Optional analytic derivative of f

    Returns
        x such that |f(x)| < tol

    Raises
        ConvergenceError: If the derivative vanishes, x leaves the reals,
                          or max_iter is exhausted
    """
    x = x0
    fx = float('nan')

    for iteration in range(max_iter):
        fx = f(x)
        logger.debug('newton iteration %d: x=%.12g f(x)=%.6g', iteration, x, fx)
        if abs(fx) < tol:
            return x

        dfx = df(x) if df is not None else (f(x + step) - fx) / step
        if abs(dfx) < 1e-14:
            raise ConvergenceError(
                f'Newton-Raphson: derivative too small at x={x}',
                iterations=iteration + 1, x=x, fx=fx,
            )

        x -= fx / dfx
        if not math.isfinite(x):
            raise ConvergenceError(
                'Newton-Raphson: iterate is not finite',
                iterations=iteration + 1, x=x, fx=fx,
            )

    raise ConvergenceError(
        f'Newton-Raphson did not converge in {max_iter} iterations '
        f'(last x={x}, f(x)={fx})',
        iterations=max_iter, x=x, fx=fx,
    )


def brent(
    f: Callable[[float], float],
    a: float,
    b: float,
    tol: float = 1e-12,
    max_iter: int = MAX_ITER,
) -> float:
    """
    Find a root of f in [a, b] using Brent's method.

    b is the best estimate and c the contrapoint, with f(b) and f(c) of
    opposite signs. Each step tries inverse quadratic interpolation (or
    the secant when only two points are distinct) and bisects [b, c]
    instead whenever the interpolated step would leave the bracket or
    shrink it too slowly.

    Args:
        f: Function to find root of
        a: Lower bound of search interval (f(a) and f(b) must have opposite signs)
        b: Upper bound of search interval
        tol: Absolute tolerance on the root
        max_iter: Maximum number of iterations

    Returns
        x within tol of a root of f

    Raises
        ConvergenceError: If f(a) and f(b) have the same sign, or max_iter exceeded
    """
    fa = f(a)
    fb = f(b)

    if fa * fb > 0:
        raise ConvergenceError(
            f'Function values at bounds must have opposite signs: '
            f'f({a})={fa}, f({b})={fb}'
        )

    c, fc = b, fb
    step = last_step = b - a

    for iteration in range(max_iter):
        if fb * fc > 0:
            c, fc = a, fa
            step = last_step = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        x_tol = 2.0 * _EPS * abs(b) + 0.5 * tol
        half = 0.5 * (c - b)
        if abs(half) <= x_tol or fb == 0.0:
            logger.debug('brent converged after %d iterations: x=%.12g', iteration, b)
            return b

        if abs(last_step) >= x_tol and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                p = 2.0 * half * s
                q = 1.0 - s
            else:
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * half * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0:
                q = -q
            p = abs(p)
            if 2.0 * p < min(3.0 * half * q - abs(x_tol * q), abs(last_step * q)):
                last_step, step = step, p / q
            else:
                step = last_step = half
        else:
            step = last_step = half

        a, fa = b, fb
        b += step if abs(step) > x_tol else math.copysign(x_tol, half)
        fb = f(b)

    raise ConvergenceError(
        f"Brent's method did not converge in {max_iter} iterations",
        iterations=max_iter, x=b, fx=fb,
    )
