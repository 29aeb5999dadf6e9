from __future__ import annotations

from typing import Dict, Optional

from .config import BorderTargets
from .contrast import clamp01, contrast_for_pair, round_lightness
from .planner import SequenceDebug
from .search import binary_search
from .theme import ModeSpec

FOREGROUND_EPSILON = 0.0001
BORDER_EPSILON = 0.01

# ============================================================
# Contrast ladder
# ============================================================

HIGH_CONTRAST = 108.0
STRONG_CONTRAST = 105.0
SUBTLEST_CONTRAST = 75.0
STEP = (STRONG_CONTRAST - SUBTLEST_CONTRAST) / 3.0  # 10

HC_OFFSET = 15.0

FOREGROUND_TARGETS: Dict[str, float] = {
    "fg_high": HIGH_CONTRAST,
    "fg_strong": STRONG_CONTRAST,
    "fg_baseline": STRONG_CONTRAST - STEP,
    "fg_subtle": STRONG_CONTRAST - STEP * 2,
    "fg_subtlest": SUBTLEST_CONTRAST,
    # high contrast: each tier moves up one, capped at HIGH_CONTRAST
    "fg_high_hc": HIGH_CONTRAST,
    "fg_strong_hc": HIGH_CONTRAST,
    "fg_baseline_hc": STRONG_CONTRAST,
    "fg_subtle_hc": STRONG_CONTRAST - STEP,
    "fg_subtlest_hc": SUBTLEST_CONTRAST + HC_OFFSET,
}


def solve_foreground_lightness(background: float, target_contrast: float) -> float:
    """
    Text lightness reaching `target_contrast` on `background`.

    Searches only the half towards whichever of black or white
    contrasts more with the background.
    """
    prefer_lighter = contrast_for_pair(1.0, background) >= contrast_for_pair(0.0, background)
    lo, hi = (background, 1.0) if prefer_lighter else (0.0, background)

    result = binary_search(
        lo,
        hi,
        lambda fg: contrast_for_pair(fg, background),
        target_contrast,
        FOREGROUND_EPSILON,
    )
    return round_lightness(clamp01(result))


def solve_border_alpha(surface_l: float, text_l: float, target_contrast: float) -> float:
    """Alpha of `text_l` over `surface_l` whose mix hits `target_contrast`."""
    return binary_search(
        0.0,
        1.0,
        lambda alpha: contrast_for_pair(text_l * alpha + surface_l * (1.0 - alpha), surface_l),
        target_contrast,
        BORDER_EPSILON,
    )


def solve_foreground_spec(
    background: float,
    debug: Optional[SequenceDebug] = None,
    border_targets: Optional[BorderTargets] = None,
) -> ModeSpec:
    values = {
        name: solve_foreground_lightness(background, target)
        for name, target in FOREGROUND_TARGETS.items()
    }

    borders = {}
    if border_targets is not None:
        strong = values["fg_strong"]
        borders = {
            "border_decorative": round(
                solve_border_alpha(background, strong, border_targets.decorative), 4
            ),
            "border_interactive": round(
                solve_border_alpha(background, strong, border_targets.interactive), 4
            ),
        }

    return ModeSpec(background=round_lightness(background), debug=debug, **values, **borders)
