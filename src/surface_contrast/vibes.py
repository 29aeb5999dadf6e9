"""
Named presets ("vibes").

Each vibe is a function over a typed SolverConfig built with
`dataclasses.replace`, applied between the defaults and the user's
own document.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from .config import (
    DEFAULT_CONFIG,
    DEFAULT_CURVE,
    Anchors,
    AnchorValue,
    HueShiftConfig,
    ModeAnchors,
    PaletteConfig,
    SolverConfig,
    config_from_dict,
)
from .errors import SolverError

# ============================================================
# Field setters
# ============================================================


def with_max_rotation(config: SolverConfig, max_rotation: float) -> SolverConfig:
    hue_shift = config.hue_shift or HueShiftConfig(curve=DEFAULT_CURVE, max_rotation=0.0)
    return replace(config, hue_shift=replace(hue_shift, max_rotation=max_rotation))


def with_chart_chroma(config: SolverConfig, chroma: float) -> SolverConfig:
    return replace(config, palette=replace(config.palette or PaletteConfig(), target_chroma=chroma))


def with_page_anchors(
    config: SolverConfig,
    *,
    light_start: Optional[float] = None,
    light_end: Optional[float] = None,
    dark_start: Optional[float] = None,
    dark_end: Optional[float] = None,
) -> SolverConfig:
    def move(value: AnchorValue, background: Optional[float]) -> AnchorValue:
        return value if background is None else replace(value, background=background)

    page = config.anchors.page
    page = Anchors(
        light=ModeAnchors(move(page.light.start, light_start), move(page.light.end, light_end)),
        dark=ModeAnchors(move(page.dark.start, dark_start), move(page.dark.end, dark_end)),
    )
    return replace(config, anchors=replace(config.anchors, page=page))


# ============================================================
# Vibes
# ============================================================


@dataclass(frozen=True)
class Vibe:
    name: str
    description: str
    apply: Callable[[SolverConfig], SolverConfig]


def _academic(config: SolverConfig) -> SolverConfig:
    config = with_chart_chroma(config, 0.08)
    config = with_max_rotation(config, 5.0)
    # paper white to ink black; blackboard to chalk
    return with_page_anchors(
        config, light_start=0.99, light_end=0.1, dark_start=0.15, dark_end=0.95
    )


def _vibrant(config: SolverConfig) -> SolverConfig:
    config = with_chart_chroma(config, 0.18)
    config = with_max_rotation(config, 45.0)
    return with_page_anchors(config, light_start=1.0, dark_start=0.05)


def _corporate(config: SolverConfig) -> SolverConfig:
    config = with_chart_chroma(config, 0.1)
    config = with_max_rotation(config, 15.0)
    return with_page_anchors(config, light_start=0.98, dark_start=0.12)


VIBES: Dict[str, Vibe] = {
    "default": Vibe(
        "Default", "Balanced, modern, and flexible. The baseline configuration.", lambda c: c
    ),
    "academic": Vibe(
        "Academic", "Serious and high-contrast. Journals and documentation.", _academic
    ),
    "vibrant": Vibe(
        "Vibrant", "Playful and high-chroma. Consumer apps and marketing.", _vibrant
    ),
    "corporate": Vibe(
        "Corporate", "Stable and standard. Enterprise software and dashboards.", _corporate
    ),
}


def apply_vibe(config: SolverConfig, name: str) -> SolverConfig:
    vibe = VIBES.get(name)
    if vibe is None:
        raise SolverError(
            "CONFIG_INVALID_VIBE",
            f"Unknown vibe: {name!r}.",
            {"vibe": name, "known": sorted(VIBES)},
        )
    return vibe.apply(config)


def resolve_config(
    user_config: Mapping[str, Any], vibe: Optional[str] = None
) -> SolverConfig:
    """Defaults, then the vibe (argument or the document's "vibe"), then the document."""
    if not isinstance(user_config, Mapping):
        raise SolverError(
            "CONFIG_INVALID_VALUE",
            f"config must be an object, got {type(user_config).__name__}.",
            {"path": "config"},
        )
    config = DEFAULT_CONFIG
    name = vibe or user_config.get("vibe")
    if name:
        config = apply_vibe(config, str(name))
    return config_from_dict(user_config, base=config)
