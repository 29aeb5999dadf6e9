from __future__ import annotations

import logging
from typing import Dict

from .colors import detect_key_color_cycles
from .config import CONTEXTS, MAX_STATE_OFFSET, Mode, SolverConfig
from .errors import SolverError

logger = logging.getLogger(__name__)


def check_unique_slugs(config: SolverConfig) -> None:
    seen: Dict[str, str] = {}

    def claim(key: str, owner: str) -> None:
        if key in seen:
            raise SolverError(
                "CONFIG_DUPLICATE_SURFACE_SLUG",
                f"Duplicate surface slug {key!r} found in {seen[key]} and {owner}.",
                {"slug": key, "first": seen[key], "second": owner},
            )
        seen[key] = owner

    for group in config.groups:
        for surface in group.surfaces:
            claim(surface.slug, f"group {group.name!r}")

    # synthesized state keys share the namespace with user slugs
    for group in config.groups:
        for surface in group.surfaces:
            for state in surface.states:
                claim(
                    surface.state_ref(state).key,
                    f"state {state.name!r} of surface {surface.slug!r}",
                )


def check_anchor_order(config: SolverConfig) -> None:
    for context in CONTEXTS:
        polarity, mode = context.polarity.value, context.mode
        anchors = config.anchors.for_context(context)
        start = anchors.start.background
        end = anchors.end.background

        # light runs from lighter to darker, dark the other way
        if (start >= end) if mode is Mode.LIGHT else (start <= end):
            continue

        op = ">=" if mode is Mode.LIGHT else "<="
        raise SolverError(
            "CONFIG_INVALID_ANCHOR_ORDER",
            f"Invalid anchor ordering for {polarity}/{mode.value}: "
            f"start.background ({start:.2f}) should be {op} end.background ({end:.2f}).",
            {"polarity": polarity, "mode": mode.value, "start": start, "end": end},
        )


def check_state_offsets(config: SolverConfig) -> None:
    for surface in config.surfaces:
        for state in surface.states:
            if not -MAX_STATE_OFFSET <= state.offset <= MAX_STATE_OFFSET:
                raise SolverError(
                    "CONFIG_INVALID_CONTRAST_OFFSET",
                    f"Contrast offset {state.offset} for state {state.name!r} on surface "
                    f"{surface.slug!r} is out of valid range (-20 to 20).",
                    {"surface": surface.slug, "state": state.name, "offset": state.offset},
                )


def warn_empty_groups(config: SolverConfig) -> None:
    for group in config.groups:
        if not group.surfaces:
            logger.warning(
                "CONFIG_EMPTY_SURFACE_GROUP: surface group %r has no surfaces", group.name
            )


def validate_config(config: SolverConfig) -> None:
    """Run every fatal configuration check; warn on empty groups."""
    check_unique_slugs(config)
    check_anchor_order(config)
    check_state_offsets(config)
    detect_key_color_cycles(config.anchors.key_colors)
    warn_empty_groups(config)
