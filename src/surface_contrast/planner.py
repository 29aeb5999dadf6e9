"""
Background sequencing for one (polarity, mode) quadrant.

Groups are spread evenly over the contrast range implied by the
quadrant's anchors; the contrast target is clamped first and only then
resolved to a lightness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

from .config import Context, ModeAnchors, SurfaceGroup, SurfaceRef
from .contrast import (
    background_bounds,
    clamp,
    contrast_for_background,
    solve_background_for_contrast,
)

logger = logging.getLogger(__name__)

INTRA_GROUP_STAGGER = 0.2
CLAMP_TOLERANCE = 0.01


@dataclass(frozen=True)
class SequenceDebug:
    target_contrast: float
    clamped: bool

    def to_dict(self):
        return {"targetContrast": self.target_contrast, "clamped": self.clamped}


@dataclass(frozen=True)
class PlannedBackground:
    lightness: float
    debug: SequenceDebug


@dataclass(frozen=True)
class DeltaInfo:
    start_contrast: float
    end_contrast: float
    delta: float

    @property
    def min_contrast(self) -> float:
        return min(self.start_contrast, self.end_contrast)

    @property
    def max_contrast(self) -> float:
        return max(self.start_contrast, self.end_contrast)


def compute_delta_info(context: Context, anchors: ModeAnchors, count: int) -> DeltaInfo:
    start_contrast = contrast_for_background(context, anchors.start.background)
    end_contrast = contrast_for_background(context, anchors.end.background)
    delta = 0.0 if count <= 1 else (end_contrast - start_contrast) / (count - 1)
    return DeltaInfo(start_contrast, end_contrast, delta)


def solve_background_sequence(
    context: Context,
    anchors: ModeAnchors,
    groups: Sequence[SurfaceGroup],
) -> Dict[SurfaceRef, PlannedBackground]:
    """Resolve every surface and state in `groups` to a background lightness."""
    backgrounds: Dict[SurfaceRef, PlannedBackground] = {}
    if not groups:
        return backgrounds

    info = compute_delta_info(context, anchors, len(groups))
    lo_bg, hi_bg = background_bounds(anchors.start.background, anchors.end.background)
    lo_c, hi_c = info.min_contrast, info.max_contrast

    def resolve(target: float) -> PlannedBackground:
        clamped_target = clamp(target, lo_c, hi_c)
        lightness = solve_background_for_contrast(context, clamped_target, lo_bg, hi_bg)
        return PlannedBackground(
            lightness,
            SequenceDebug(target, abs(target - clamped_target) > CLAMP_TOLERANCE),
        )

    for group_index, group in enumerate(groups):
        group_base = info.start_contrast + info.delta * (group_index + group.gap_before)

        for surface_index, surface in enumerate(group.surfaces):
            stagger = surface_index * info.delta * INTRA_GROUP_STAGGER
            offset = surface.contrast_offset.get(context.mode, 0.0)
            target = group_base + stagger + offset

            planned = resolve(target)
            backgrounds[surface.ref] = planned

            surface_contrast = clamp(target, lo_c, hi_c)
            for state in surface.states:
                backgrounds[surface.state_ref(state)] = resolve(surface_contrast + state.offset)

    logger.debug(
        "%s/%s: %d groups over contrast %.2f..%.2f, %d backgrounds",
        context.polarity.value,
        context.mode.value,
        len(groups),
        info.start_contrast,
        info.end_contrast,
        len(backgrounds),
    )
    return backgrounds
