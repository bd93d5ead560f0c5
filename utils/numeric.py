"""
Numeric Utilities
Polynomial evaluation, bracketed root finding and rounding helpers
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Sequence

import numpy as np


class NoBracketError(ValueError):
    """Raised when a function has the same sign at both ends of the interval"""


class NoConvergenceError(ArithmeticError):
    """Raised when the root finder runs out of iterations"""


def evaluate_polynomial(coefficients: Sequence[float], x: float) -> float:
    """
    Evaluate a polynomial given its coefficients in increasing order of degree

    Args:
        coefficients: c0, c1, c2, ... so that p(x) = c0 + c1*x + c2*x^2 + ...
        x: Point of evaluation

    Returns:
        p(x)
    """
    return float(np.polynomial.polynomial.polyval(x, np.asarray(coefficients, dtype=float)))


def bisect(
    function: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float = 1e-7,
    max_iterations: int = 100
) -> float:
    """
    Find a root of a continuous function inside [lower, upper] by bisection

    Args:
        function: Function whose root is sought
        lower: Lower end of the bracket
        upper: Upper end of the bracket
        tolerance: Width of the bracket at which the search stops
        max_iterations: Maximum number of halvings

    Returns:
        Abscissa of the root

    Raises:
        NoBracketError: The function does not change sign over the interval
        NoConvergenceError: The bracket did not shrink below tolerance in time
    """
    f_lower = function(lower)
    if f_lower == 0.:
        return lower
    f_upper = function(upper)
    if f_upper == 0.:
        return upper
    if np.sign(f_lower) == np.sign(f_upper):
        raise NoBracketError(
            f"Function does not change sign over [{lower}, {upper}]: "
            f"f(lower)={f_lower}, f(upper)={f_upper}"
        )

    for _ in range(max_iterations):
        middle = (lower + upper) / 2.
        f_middle = function(middle)
        if f_middle == 0. or (upper - lower) / 2. < tolerance:
            return middle
        if np.sign(f_middle) == np.sign(f_lower):
            lower, f_lower = middle, f_middle
        else:
            upper = middle

    raise NoConvergenceError(
        f"Bisection did not converge within {max_iterations} iterations"
    )


def round_half_up(value: float, digits: int) -> float:
    """Round to the given number of decimals, halves away from zero"""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
