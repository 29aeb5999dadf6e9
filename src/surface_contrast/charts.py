from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Mapping, Tuple

from .colors import ColorSpec, circ_dist_deg, get_hue
from .config import SolverConfig
from .foreground import solve_foreground_lightness
from .theme import ChartColor, ModePair

logger = logging.getLogger(__name__)

MIN_CHART_HUE_SEPARATION = 30.0
DEFAULT_BRAND_HUE = 250.0
DEFAULT_HIGHLIGHT_HUE = 320.0

# page background when a config has no "page" surface
FALLBACK_PAGE = ModePair(light=ColorSpec(1.0, 0.0, 0.0), dark=ColorSpec(0.0, 0.0, 0.0))


def warn_close_hues(hues) -> None:
    for a, b in itertools.combinations(hues, 2):
        d = circ_dist_deg(a, b)
        if d < MIN_CHART_HUE_SEPARATION:
            logger.warning(
                "palette hues %.0f° and %.0f° are only %.0f° apart (< %.0f°)",
                a,
                b,
                d,
                MIN_CHART_HUE_SEPARATION,
            )


def solve_charts(
    config: SolverConfig, backgrounds: Mapping[str, ModePair]
) -> Tuple[ChartColor, ...]:
    """One light/dark color per palette hue at the palette's target contrast."""
    palette = config.palette
    if palette is None or not palette.hues:
        return ()

    warn_close_hues(palette.hues)

    page = backgrounds.get("page", FALLBACK_PAGE)
    light_l = solve_foreground_lightness(page.light.l, palette.target_contrast)
    dark_l = solve_foreground_lightness(page.dark.l, palette.target_contrast)

    return tuple(
        ChartColor(
            light=ColorSpec(light_l, palette.target_chroma, hue),
            dark=ColorSpec(dark_l, palette.target_chroma, hue),
        )
        for hue in palette.hues
    )


def _oklch(l: float, c: float, h: float, alpha: float | None = None) -> str:
    if alpha is None:
        return f"oklch({l:g} {c:g} {h:g})"
    return f"oklch({l:g} {c:g} {h:g} / {alpha:g})"


def _shadow(*layers: Tuple[str, float, float]) -> Dict[str, str]:
    """layers: (geometry, light alpha, dark alpha); dark shadows are white."""
    return {
        "light": ", ".join(f"{g} {_oklch(0, 0, 0, la)}" for g, la, _ in layers),
        "dark": ", ".join(f"{g} {_oklch(1, 0, 0, da)}" for g, _, da in layers),
    }


def solve_primitives(config: SolverConfig) -> Dict[str, Any]:
    key_colors = config.anchors.key_colors
    brand_hue = get_hue("brand", key_colors, DEFAULT_BRAND_HUE)
    highlight_hue = get_hue("highlight", key_colors, DEFAULT_HIGHLIGHT_HUE)

    return {
        "shadows": {
            "sm": _shadow(("0 1px 2px 0", 0.05, 0.15)),
            "md": _shadow(("0 4px 6px -1px", 0.1, 0.15), ("0 2px 4px -1px", 0.06, 0.1)),
            "lg": _shadow(("0 10px 15px -3px", 0.1, 0.15), ("0 4px 6px -2px", 0.05, 0.1)),
            "xl": _shadow(("0 20px 25px -5px", 0.1, 0.15), ("0 10px 10px -5px", 0.04, 0.1)),
        },
        "focus": {
            "ring": {
                "light": _oklch(0.45, 0.2, brand_hue),
                "dark": _oklch(0.75, 0.2, brand_hue),
            }
        },
        "highlight": {
            "ring": {
                "light": _oklch(0.6, 0.25, highlight_hue),
                "dark": _oklch(0.6, 0.25, highlight_hue),
            },
            # usable behind <mark> text in both modes
            "surface": {
                "light": _oklch(0.96, 0.05, highlight_hue),
                "dark": _oklch(0.25, 0.05, highlight_hue),
            },
        },
    }
