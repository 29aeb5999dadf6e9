from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping

from .colors import KeyColor, key_color_lightness
from .config import Anchors, AnchorValue, Mode, ModeAnchors, PolarityAnchors
from .contrast import clamp01

logger = logging.getLogger(__name__)

# inverted surfaces never end lighter than this, so light text stays legible
INVERTED_MAX_LIGHTNESS = 0.4


def _align_end(mode_anchors: ModeAnchors, mode: Mode, lightness: float) -> ModeAnchors:
    end = mode_anchors.end
    if not end.adjustable:
        return mode_anchors

    start = mode_anchors.start.background
    # keep the mode's ordering: light runs downward, dark upward
    if mode is Mode.LIGHT:
        lightness = min(lightness, start)
    else:
        lightness = max(lightness, start)

    return replace(mode_anchors, end=AnchorValue(lightness, adjustable=True))


def align_inverted_anchors(
    anchors: PolarityAnchors, key_colors: Mapping[str, KeyColor]
) -> PolarityAnchors:
    """
    Return new anchors whose adjustable inverted `end` sits at the average
    key-color lightness (capped at INVERTED_MAX_LIGHTNESS).

    Page anchors and fixed anchors pass through untouched.
    """
    average = key_color_lightness(key_colors)
    if average is None:
        return anchors

    lightness = min(clamp01(average), INVERTED_MAX_LIGHTNESS)
    inverted = Anchors(
        light=_align_end(anchors.inverted.light, Mode.LIGHT, lightness),
        dark=_align_end(anchors.inverted.dark, Mode.DARK, lightness),
    )
    logger.debug(
        "aligned inverted anchors to key-color lightness %.4f (light end %.4f, dark end %.4f)",
        average,
        inverted.light.end.background,
        inverted.dark.end.background,
    )
    return replace(anchors, inverted=inverted)
