"""
Theme solver: validate, align anchors, sequence every (polarity, mode)
quadrant, apply overrides, then solve the foreground ladder per surface.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Tuple

from .anchors import align_inverted_anchors
from .charts import solve_charts, solve_primitives
from .colors import ColorSpec, KeyColor, get_hue, key_color_stats
from .config import (
    CONTEXTS,
    Context,
    Mode,
    PolarityAnchors,
    SolverConfig,
    SurfaceConfig,
    SurfaceGroup,
    SurfaceRef,
)
from .errors import SolverError
from .foreground import solve_foreground_spec
from .hue_shift import calculate_hue_shift
from .overrides import apply_overrides
from .planner import SequenceDebug, solve_background_sequence
from .theme import ModePair, SolvedSurface, Theme
from .validate import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CHROMA = 0.0


def groups_for_polarity(config: SolverConfig, context: Context) -> Tuple[SurfaceGroup, ...]:
    """Groups narrowed to the context's polarity; groups left empty are dropped."""
    out = []
    for group in config.groups:
        surfaces = tuple(s for s in group.surfaces if s.polarity is context.polarity)
        if surfaces:
            out.append(SurfaceGroup(group.name, surfaces, group.gap_before))
    return tuple(out)


def surface_color(
    surface: SurfaceConfig,
    lightness: float,
    config: SolverConfig,
    key_colors: Mapping[str, KeyColor],
    default_hue: float,
) -> ColorSpec:
    chroma = surface.target_chroma if surface.target_chroma is not None else DEFAULT_CHROMA

    if isinstance(surface.hue, str):
        hue = get_hue(surface.hue, key_colors, default_hue)
    elif surface.hue is not None:
        hue = float(surface.hue)
    else:
        hue = default_hue

    hue = (hue + calculate_hue_shift(lightness, config.hue_shift)) % 360.0
    return ColorSpec(l=lightness, c=chroma, h=hue)


def solve_quadrant(
    config: SolverConfig,
    anchors: PolarityAnchors,
    context: Context,
    default_hue: float,
) -> Tuple[Dict[SurfaceRef, ColorSpec], Dict[SurfaceRef, SequenceDebug]]:
    groups = groups_for_polarity(config, context)
    mode_anchors = anchors.for_context(context)
    planned = solve_background_sequence(context, mode_anchors, groups)

    by_slug = {s.slug: s for g in groups for s in g.surfaces}
    colors = {
        ref: surface_color(by_slug[ref.slug], p.lightness, config, anchors.key_colors, default_hue)
        for ref, p in planned.items()
    }
    colors = apply_overrides(context, mode_anchors, tuple(by_slug.values()), colors)

    return colors, {ref: p.debug for ref, p in planned.items()}


def _mode_pair(
    ref: SurfaceRef, solved: Mapping[Mode, Mapping[SurfaceRef, object]]
) -> ModePair:
    missing = [mode.value for mode in (Mode.LIGHT, Mode.DARK) if ref not in solved[mode]]
    if missing:
        raise SolverError(
            "SOLVER_MISSING_BACKGROUNDS",
            f"Missing solved backgrounds for {ref.key} ({', '.join(missing)}).",
            {"surface": ref.key, "missing": missing},
        )
    return ModePair(light=solved[Mode.LIGHT][ref], dark=solved[Mode.DARK][ref])


def solve(config: SolverConfig) -> Theme:
    """Solve a complete theme. Same config, same theme."""
    validate_config(config)

    anchors = align_inverted_anchors(config.anchors, config.anchors.key_colors)
    stats = key_color_stats(anchors.key_colors)
    default_hue = stats.hue if stats.hue is not None else 0.0

    colors: Dict[Mode, Dict[SurfaceRef, ColorSpec]] = {Mode.LIGHT: {}, Mode.DARK: {}}
    debug: Dict[Mode, Dict[SurfaceRef, SequenceDebug]] = {Mode.LIGHT: {}, Mode.DARK: {}}

    for context in CONTEXTS:
        quadrant_colors, quadrant_debug = solve_quadrant(config, anchors, context, default_hue)
        colors[context.mode].update(quadrant_colors)
        debug[context.mode].update(quadrant_debug)

    backgrounds: Dict[str, ModePair] = {}
    solved_surfaces = []

    for surface in config.surfaces:
        pair = _mode_pair(surface.ref, colors)
        backgrounds[surface.slug] = pair
        for state in surface.states:
            backgrounds[surface.state_ref(state).key] = _mode_pair(surface.state_ref(state), colors)

        computed = ModePair(
            light=solve_foreground_spec(
                pair.light.l, debug[Mode.LIGHT].get(surface.ref), config.border_targets
            ),
            dark=solve_foreground_spec(
                pair.dark.l, debug[Mode.DARK].get(surface.ref), config.border_targets
            ),
        )
        solved_surfaces.append(SolvedSurface(config=surface, computed=computed))

    logger.debug("solved %d surfaces, %d backgrounds", len(solved_surfaces), len(backgrounds))

    return Theme(
        surfaces=tuple(solved_surfaces),
        backgrounds=backgrounds,
        charts=solve_charts(config, backgrounds),
        primitives=solve_primitives(config),
    )
