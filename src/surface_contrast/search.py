from __future__ import annotations

import math
from typing import Callable

from .errors import SolverError

DEFAULT_EPSILON = 0.005
DEFAULT_MAX_ITERATIONS = 40


def _check_finite(value: float, **details) -> float:
    if not math.isfinite(value):
        raise SolverError(
            "MATH_NONFINITE",
            "binary_search evaluate() returned a non-finite value.",
            dict(details, value=value),
        )
    return value


def binary_search(
    lo: float,
    hi: float,
    evaluate: Callable[[float], float],
    target: float,
    epsilon: float = DEFAULT_EPSILON,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Find x in [lo, hi] with evaluate(x) within epsilon of target.

    `evaluate` must be monotonic over [lo, hi]; the direction is inferred
    from the two endpoints only. A target at or past either endpoint's
    value returns that endpoint exactly (clamped, never extrapolated).
    """
    val_lo = _check_finite(float(evaluate(lo)), bound="lo", x=lo, target=target)
    val_hi = _check_finite(float(evaluate(hi)), bound="hi", x=hi, target=target)

    slope = 1.0 if val_hi >= val_lo else -1.0

    min_val = min(val_lo, val_hi)
    max_val = max(val_lo, val_hi)

    if target <= min_val + epsilon:
        return lo if val_lo <= val_hi else hi
    if target >= max_val - epsilon:
        return hi if val_hi >= val_lo else lo

    low, high = lo, hi
    for i in range(max_iterations):
        mid = (low + high) / 2.0
        val = _check_finite(
            float(evaluate(mid)), x=mid, low=low, high=high, iteration=i
        )
        delta = val - target

        if abs(delta) <= epsilon:
            return mid

        if delta * slope > 0:
            high = mid
        else:
            low = mid

    return (low + high) / 2.0
