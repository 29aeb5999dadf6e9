from __future__ import annotations

from typing import Optional

from .config import HueShiftConfig
from .search import binary_search

CURVE_EPSILON = 0.001


def cubic_bezier(t: float, p1: float, p2: float) -> float:
    """One axis of a cubic Bezier with endpoints pinned at 0 and 1."""
    u = 1.0 - t
    return 3.0 * u * u * t * p1 + 3.0 * u * t * t * p2 + t * t * t


def calculate_hue_shift(
    lightness: float, config: Optional[HueShiftConfig] = None
) -> float:
    """
    Hue rotation in degrees for a surface of the given lightness.

    Inverts the curve's x(t) to find t for `lightness`, then scales
    y(t) by the configured maximum rotation.
    """
    if config is None:
        return 0.0

    (p1x, p1y), (p2x, p2y) = config.curve.p1, config.curve.p2

    t = binary_search(
        0.0,
        1.0,
        lambda v: cubic_bezier(v, p1x, p2x),
        lightness,
        CURVE_EPSILON,
    )
    return cubic_bezier(t, p1y, p2y) * config.max_rotation
