"""
APCA-style contrast between two OKLCH lightness values.

Lightness is placed on the neutral axis (C=0) of OKLCH, converted to
display sRGB with colour-science and projected to APCA screen luminance.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Tuple

import colour
import numpy as np

from .config import Context, Mode, Polarity
from .errors import SolverError
from .search import binary_search

# ============================================================
# APCA-W3 constants (0.0.98G-4g)
# ============================================================

MAIN_TRC = 2.4
SRGB_Y_COEFFS = (0.2126729, 0.7151522, 0.0721750)

NORM_BG = 0.56
NORM_TXT = 0.57
REV_TXT = 0.62
REV_BG = 0.65

BLK_THRS = 0.022
BLK_CLMP = 1.414
SCALE_BOW = 1.14
SCALE_WOB = 1.14
LO_BOW_OFFSET = 0.027
LO_WOB_OFFSET = 0.027
DELTA_Y_MIN = 0.0005
LO_CLIP = 0.1

CONTRAST_EPSILON = 0.005
LIGHTNESS_PRECISION = 4


# ============================================================
# Helpers
# ============================================================


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def clamp01(x: float) -> float:
    return clamp(x, 0.0, 1.0)


def round_lightness(value: float) -> float:
    return round(float(value), LIGHTNESS_PRECISION)


def background_bounds(start: float, end: float) -> Tuple[float, float]:
    return (min(start, end), max(start, end))


# ============================================================
# Projection
# ============================================================


def lightness_to_srgb(lightness: float) -> np.ndarray:
    """Neutral OKLCH lightness -> gamma-encoded sRGB triplet in [0, 1]."""
    oklab = np.array([clamp01(lightness), 0.0, 0.0])
    xyz = colour.Oklab_to_XYZ(oklab)
    rgb = colour.XYZ_to_sRGB(xyz)
    return np.clip(rgb, 0.0, 1.0)


@lru_cache(maxsize=4096)
def perceptual_lightness_to_luminance(lightness: float) -> float:
    """
    APCA screen luminance (Ys) of a neutral OKLCH lightness.

    The sRGB channels stay continuous; they are clipped to [0, 1] but not
    quantised to 8 bits, so solved lightness differs slightly from a
    pipeline that rounds each channel to 0..255 first.
    """
    rgb = lightness_to_srgb(lightness)
    return float(sum(c * float(ch) ** MAIN_TRC for c, ch in zip(SRGB_Y_COEFFS, rgb)))


def _soft_clamp_black(y: float) -> float:
    return y if y > BLK_THRS else y + (BLK_THRS - y) ** BLK_CLMP


def apca_contrast(txt_y: float, bg_y: float) -> float:
    """Signed APCA Lc for text luminance on background luminance."""
    if min(txt_y, bg_y) < 0.0 or max(txt_y, bg_y) > 1.1:
        return 0.0

    txt_y = _soft_clamp_black(txt_y)
    bg_y = _soft_clamp_black(bg_y)

    if abs(bg_y - txt_y) < DELTA_Y_MIN:
        return 0.0

    if bg_y > txt_y:
        # dark text on light background
        sapc = (bg_y**NORM_BG - txt_y**NORM_TXT) * SCALE_BOW
        out = 0.0 if sapc < LO_CLIP else sapc - LO_BOW_OFFSET
    else:
        # light text on dark background
        sapc = (bg_y**REV_BG - txt_y**REV_TXT) * SCALE_WOB
        out = 0.0 if sapc > -LO_CLIP else sapc + LO_WOB_OFFSET

    return out * 100.0


def contrast_for_pair(foreground: float, background: float) -> float:
    """Absolute APCA contrast of foreground lightness on background lightness."""
    fg_y = perceptual_lightness_to_luminance(float(foreground))
    bg_y = perceptual_lightness_to_luminance(float(background))
    value = apca_contrast(fg_y, bg_y)

    if not math.isfinite(value):
        raise SolverError(
            "MATH_NONFINITE",
            f"APCA contrast was non-finite for foreground {foreground} "
            f"and background {background}.",
            {"foreground": foreground, "background": background},
        )

    return abs(value)


# ============================================================
# Context contrast
# ============================================================


def text_lightness(context: Context) -> float:
    """0 (black text) or 1 (white text) for a polarity/mode pair."""
    if context.polarity is Polarity.PAGE:
        return 0.0 if context.mode is Mode.LIGHT else 1.0
    return 1.0 if context.mode is Mode.LIGHT else 0.0


def contrast_for_background(context: Context, background: float) -> float:
    return contrast_for_pair(text_lightness(context), background)


def clamp_contrast(context: Context, target: float) -> float:
    """Clamp a target into what the context's text can reach over [0, 1]."""
    at_zero = contrast_for_background(context, 0.0)
    at_one = contrast_for_background(context, 1.0)
    return clamp(target, min(at_zero, at_one), max(at_zero, at_one))


def solve_background_for_contrast(
    context: Context,
    target_contrast: float,
    lower: float,
    upper: float,
) -> float:
    lo, hi = background_bounds(lower, upper)
    result = binary_search(
        lo,
        hi,
        lambda bg: contrast_for_background(context, bg),
        clamp_contrast(context, target_contrast),
        CONTRAST_EPSILON,
    )
    return round_lightness(result)
