from __future__ import annotations

import logging
from typing import Dict, Mapping, Sequence

from .colors import ColorSpec, parse_color
from .config import Context, ModeAnchors, SurfaceConfig, SurfaceRef
from .contrast import contrast_for_background, solve_background_for_contrast
from .errors import SolverError

logger = logging.getLogger(__name__)


def parse_override(surface: SurfaceConfig, context: Context) -> ColorSpec:
    value = surface.override[context.mode]
    try:
        return parse_color(value)
    except SolverError as exc:
        raise SolverError(
            "COLOR_PARSE_FAILED",
            f"Could not parse surface override for {surface.slug} ({context.mode.value}).",
            dict(exc.details, surface=surface.slug, mode=context.mode.value),
        ) from exc


def apply_overrides(
    context: Context,
    anchors: ModeAnchors,
    surfaces: Sequence[SurfaceConfig],
    colors: Mapping[SurfaceRef, ColorSpec],
) -> Dict[SurfaceRef, ColorSpec]:
    """
    Replace solved colors with raw overrides for this quadrant's mode.

    An overridden surface's achieved contrast becomes the baseline its
    states are offset from; each state keeps the override's hue/chroma
    with a freshly solved lightness.
    """
    out = dict(colors)

    for surface in surfaces:
        if context.mode not in surface.override:
            continue

        spec = parse_override(surface, context)
        out[surface.ref] = spec
        baseline = contrast_for_background(context, spec.l)
        logger.debug(
            "override %s (%s): l=%.4f, baseline contrast %.2f",
            surface.slug,
            context.mode.value,
            spec.l,
            baseline,
        )

        for state in surface.states:
            lightness = solve_background_for_contrast(
                context,
                baseline + state.offset,
                anchors.start.background,
                anchors.end.background,
            )
            out[surface.state_ref(state)] = ColorSpec(l=lightness, c=spec.c, h=spec.h)

    return out
