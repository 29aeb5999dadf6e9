"""
Typed solver configuration.

The config is a tree of frozen dataclasses. `config_from_dict` reads the
JSON shape (camelCase keys) field by field over a base config, so a
partial document only replaces what it names.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .colors import KeyColor, key_colors_from_mapping, key_colors_to_mapping
from .errors import SolverError

logger = logging.getLogger(__name__)

KNOWN_CONFIG_KEYS = ("vibe", "anchors", "groups", "hueShift", "borderTargets", "palette", "$schema")

MAX_STATE_OFFSET = 20.0


# ============================================================
# Enumerations / context
# ============================================================


class Polarity(str, Enum):
    PAGE = "page"
    INVERTED = "inverted"


class Mode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


POLARITIES = (Polarity.PAGE, Polarity.INVERTED)
MODES = (Mode.LIGHT, Mode.DARK)


@dataclass(frozen=True)
class Context:
    polarity: Polarity
    mode: Mode


CONTEXTS = tuple(Context(p, m) for p in POLARITIES for m in MODES)


# ============================================================
# Anchors
# ============================================================


@dataclass(frozen=True)
class AnchorValue:
    background: float
    adjustable: bool = False


@dataclass(frozen=True)
class ModeAnchors:
    start: AnchorValue
    end: AnchorValue


@dataclass(frozen=True)
class Anchors:
    light: ModeAnchors
    dark: ModeAnchors

    def for_mode(self, mode: Mode) -> ModeAnchors:
        return self.light if mode is Mode.LIGHT else self.dark


@dataclass(frozen=True)
class PolarityAnchors:
    page: Anchors
    inverted: Anchors
    key_colors: Dict[str, KeyColor] = field(default_factory=dict)

    def for_context(self, context: Context) -> ModeAnchors:
        anchors = self.page if context.polarity is Polarity.PAGE else self.inverted
        return anchors.for_mode(context.mode)


# ============================================================
# Surfaces
# ============================================================


@dataclass(frozen=True)
class StateDefinition:
    name: str
    offset: float


@dataclass(frozen=True)
class SurfaceRef:
    """A base surface (state=None) or one of its states."""

    slug: str
    state: Optional[str] = None

    @property
    def key(self) -> str:
        return self.slug if self.state is None else f"{self.slug}-{self.state}"


@dataclass(frozen=True)
class SurfaceConfig:
    slug: str
    label: str
    polarity: Polarity = Polarity.PAGE
    contrast_offset: Dict[Mode, float] = field(default_factory=dict)
    target_chroma: Optional[float] = None
    hue: Optional[Union[float, str]] = None
    states: Tuple[StateDefinition, ...] = ()
    override: Dict[Mode, str] = field(default_factory=dict)

    @property
    def ref(self) -> SurfaceRef:
        return SurfaceRef(self.slug)

    def state_ref(self, state: StateDefinition) -> SurfaceRef:
        return SurfaceRef(self.slug, state.name)


@dataclass(frozen=True)
class SurfaceGroup:
    name: str
    surfaces: Tuple[SurfaceConfig, ...] = ()
    gap_before: float = 0.0


# ============================================================
# Optional sections
# ============================================================


@dataclass(frozen=True)
class BezierCurve:
    p1: Tuple[float, float]
    p2: Tuple[float, float]


@dataclass(frozen=True)
class HueShiftConfig:
    curve: BezierCurve
    max_rotation: float


@dataclass(frozen=True)
class BorderTargets:
    decorative: float
    interactive: float


@dataclass(frozen=True)
class PaletteConfig:
    hues: Tuple[float, ...] = ()
    target_chroma: float = 0.12
    target_contrast: float = 60.0


@dataclass(frozen=True)
class SolverConfig:
    anchors: PolarityAnchors
    groups: Tuple[SurfaceGroup, ...]
    hue_shift: Optional[HueShiftConfig] = None
    border_targets: Optional[BorderTargets] = None
    palette: Optional[PaletteConfig] = None

    @property
    def surfaces(self) -> Tuple[SurfaceConfig, ...]:
        return tuple(s for g in self.groups for s in g.surfaces)


# ============================================================
# Dict -> config
# ============================================================


def _invalid(where: str, value: Any, expected: str) -> SolverError:
    return SolverError(
        "CONFIG_INVALID_VALUE",
        f"{where} must be {expected}, got {value!r}.",
        {"path": where, "value": value},
    )


def _float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid(where, value, "a number")
    if not math.isfinite(value):
        raise _invalid(where, value, "a finite number")
    return float(value)


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise _invalid(where, value, "an object")
    return value


def _point(value: Any, where: str) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise _invalid(where, value, "an [x, y] pair")
    return (_float(value[0], f"{where}[0]"), _float(value[1], f"{where}[1]"))


def _mode_map(value: Any, where: str, convert) -> Dict[Mode, Any]:
    data = _mapping(value, where)
    out = {}
    for mode in MODES:
        if mode.value in data and data[mode.value] is not None:
            out[mode] = convert(data[mode.value], f"{where}.{mode.value}")
    return out


def _anchor_value(data: Any, base: AnchorValue, where: str) -> AnchorValue:
    data = _mapping(data, where)
    return AnchorValue(
        background=_float(data["background"], f"{where}.background")
        if "background" in data
        else base.background,
        adjustable=bool(data.get("adjustable", base.adjustable)),
    )


def _mode_anchors(data: Any, base: ModeAnchors, where: str) -> ModeAnchors:
    data = _mapping(data, where)
    return ModeAnchors(
        start=_anchor_value(data["start"], base.start, f"{where}.start")
        if "start" in data
        else base.start,
        end=_anchor_value(data["end"], base.end, f"{where}.end")
        if "end" in data
        else base.end,
    )


def _anchors(data: Any, base: Anchors, where: str) -> Anchors:
    data = _mapping(data, where)
    return Anchors(
        light=_mode_anchors(data["light"], base.light, f"{where}.light")
        if "light" in data
        else base.light,
        dark=_mode_anchors(data["dark"], base.dark, f"{where}.dark")
        if "dark" in data
        else base.dark,
    )


def anchors_from_dict(data: Any, base: PolarityAnchors) -> PolarityAnchors:
    data = _mapping(data, "anchors")
    key_colors = base.key_colors
    if "keyColors" in data:
        raw = _mapping(data["keyColors"], "anchors.keyColors")
        key_colors = key_colors_from_mapping({str(k): str(v) for k, v in raw.items()})
    return PolarityAnchors(
        page=_anchors(data["page"], base.page, "anchors.page")
        if "page" in data
        else base.page,
        inverted=_anchors(data["inverted"], base.inverted, "anchors.inverted")
        if "inverted" in data
        else base.inverted,
        key_colors=key_colors,
    )


def _state_from_dict(data: Any, where: str) -> StateDefinition:
    data = _mapping(data, where)
    if "name" not in data:
        raise _invalid(f"{where}.name", None, "a string")
    return StateDefinition(
        name=str(data["name"]),
        offset=_float(data.get("offset", 0.0), f"{where}.offset"),
    )


def surface_from_dict(data: Any, where: str) -> SurfaceConfig:
    data = _mapping(data, where)
    if "slug" not in data:
        raise _invalid(f"{where}.slug", None, "a string")

    try:
        polarity = Polarity(data.get("polarity", "page"))
    except ValueError:
        raise _invalid(
            f"{where}.polarity", data.get("polarity"), "'page' or 'inverted'"
        ) from None

    hue = data.get("hue")
    if hue is not None and not isinstance(hue, str):
        hue = _float(hue, f"{where}.hue")

    states = tuple(
        _state_from_dict(s, f"{where}.states[{i}]")
        for i, s in enumerate(data.get("states") or ())
    )

    return SurfaceConfig(
        slug=str(data["slug"]),
        label=str(data.get("label", data["slug"])),
        polarity=polarity,
        contrast_offset=_mode_map(data.get("contrastOffset") or {}, f"{where}.contrastOffset", _float),
        target_chroma=_float(data["targetChroma"], f"{where}.targetChroma")
        if data.get("targetChroma") is not None
        else None,
        hue=hue,
        states=states,
        override=_mode_map(data.get("override") or {}, f"{where}.override", lambda v, _w: str(v)),
    )


def groups_from_dict(data: Any) -> Tuple[SurfaceGroup, ...]:
    if not isinstance(data, (list, tuple)):
        raise _invalid("groups", data, "a list")
    groups = []
    for gi, g in enumerate(data):
        g = _mapping(g, f"groups[{gi}]")
        groups.append(
            SurfaceGroup(
                name=str(g.get("name", f"group-{gi}")),
                surfaces=tuple(
                    surface_from_dict(s, f"groups[{gi}].surfaces[{si}]")
                    for si, s in enumerate(g.get("surfaces") or ())
                ),
                gap_before=_float(g.get("gapBefore", 0.0), f"groups[{gi}].gapBefore"),
            )
        )
    return tuple(groups)


def hue_shift_from_dict(data: Any, base: Optional[HueShiftConfig]) -> Optional[HueShiftConfig]:
    if data is None:
        return None
    data = _mapping(data, "hueShift")
    curve = base.curve if base else DEFAULT_CURVE
    if "curve" in data:
        c = _mapping(data["curve"], "hueShift.curve")
        curve = BezierCurve(
            p1=_point(c["p1"], "hueShift.curve.p1") if "p1" in c else curve.p1,
            p2=_point(c["p2"], "hueShift.curve.p2") if "p2" in c else curve.p2,
        )
    max_rotation = base.max_rotation if base else 0.0
    if "maxRotation" in data:
        max_rotation = _float(data["maxRotation"], "hueShift.maxRotation")
    return HueShiftConfig(curve=curve, max_rotation=max_rotation)


def border_targets_from_dict(data: Any) -> Optional[BorderTargets]:
    if data is None:
        return None
    data = _mapping(data, "borderTargets")
    return BorderTargets(
        decorative=_float(data["decorative"], "borderTargets.decorative"),
        interactive=_float(data["interactive"], "borderTargets.interactive"),
    )


def palette_from_dict(data: Any, base: Optional[PaletteConfig]) -> Optional[PaletteConfig]:
    if data is None:
        return None
    data = _mapping(data, "palette")
    base = base or PaletteConfig()
    return PaletteConfig(
        hues=tuple(_float(h, f"palette.hues[{i}]") for i, h in enumerate(data["hues"]))
        if "hues" in data
        else base.hues,
        target_chroma=_float(data["targetChroma"], "palette.targetChroma")
        if "targetChroma" in data
        else base.target_chroma,
        target_contrast=_float(data["targetContrast"], "palette.targetContrast")
        if "targetContrast" in data
        else base.target_contrast,
    )


def warn_unknown_properties(data: Mapping[str, Any]) -> None:
    for key in data:
        if key not in KNOWN_CONFIG_KEYS:
            logger.warning(
                "CONFIG_UNKNOWN_PROPERTY: unknown property %r in config (known: %s)",
                key,
                ", ".join(k for k in KNOWN_CONFIG_KEYS if k != "$schema"),
            )


def config_from_dict(data: Mapping[str, Any], base: Optional[SolverConfig] = None) -> SolverConfig:
    """Apply a JSON-shaped config document over `base` (defaults when None)."""
    data = _mapping(data, "config")
    warn_unknown_properties(data)
    config = base or DEFAULT_CONFIG

    if "anchors" in data:
        config = replace(config, anchors=anchors_from_dict(data["anchors"], config.anchors))
    if "groups" in data:
        config = replace(config, groups=groups_from_dict(data["groups"]))
    if "hueShift" in data:
        config = replace(config, hue_shift=hue_shift_from_dict(data["hueShift"], config.hue_shift))
    if "borderTargets" in data:
        config = replace(config, border_targets=border_targets_from_dict(data["borderTargets"]))
    if "palette" in data:
        config = replace(config, palette=palette_from_dict(data["palette"], config.palette))
    return config


# ============================================================
# Config -> dict
# ============================================================


def _anchors_to_dict(anchors: Anchors) -> Dict[str, Any]:
    return {
        mode.value: {
            "start": {
                "background": anchors.for_mode(mode).start.background,
                "adjustable": anchors.for_mode(mode).start.adjustable,
            },
            "end": {
                "background": anchors.for_mode(mode).end.background,
                "adjustable": anchors.for_mode(mode).end.adjustable,
            },
        }
        for mode in MODES
    }


def surface_to_dict(surface: SurfaceConfig) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "slug": surface.slug,
        "label": surface.label,
        "polarity": surface.polarity.value,
    }
    if surface.contrast_offset:
        out["contrastOffset"] = {m.value: v for m, v in surface.contrast_offset.items()}
    if surface.target_chroma is not None:
        out["targetChroma"] = surface.target_chroma
    if surface.hue is not None:
        out["hue"] = surface.hue
    if surface.states:
        out["states"] = [{"name": s.name, "offset": s.offset} for s in surface.states]
    if surface.override:
        out["override"] = {m.value: v for m, v in surface.override.items()}
    return out


def config_to_dict(config: SolverConfig) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "anchors": {
            "page": _anchors_to_dict(config.anchors.page),
            "inverted": _anchors_to_dict(config.anchors.inverted),
            "keyColors": key_colors_to_mapping(config.anchors.key_colors),
        },
        "groups": [
            {
                "name": g.name,
                **({"gapBefore": g.gap_before} if g.gap_before else {}),
                "surfaces": [surface_to_dict(s) for s in g.surfaces],
            }
            for g in config.groups
        ],
    }
    if config.hue_shift is not None:
        out["hueShift"] = {
            "curve": {
                "p1": list(config.hue_shift.curve.p1),
                "p2": list(config.hue_shift.curve.p2),
            },
            "maxRotation": config.hue_shift.max_rotation,
        }
    if config.border_targets is not None:
        out["borderTargets"] = {
            "decorative": config.border_targets.decorative,
            "interactive": config.border_targets.interactive,
        }
    if config.palette is not None:
        out["palette"] = {
            "hues": list(config.palette.hues),
            "targetChroma": config.palette.target_chroma,
            "targetContrast": config.palette.target_contrast,
        }
    return out


# ============================================================
# Defaults
# ============================================================

DEFAULT_CURVE = BezierCurve(p1=(0.5, 0.0), p2=(0.5, 1.0))

DEFAULT_CONFIG = SolverConfig(
    anchors=PolarityAnchors(
        page=Anchors(
            light=ModeAnchors(
                start=AnchorValue(1.0),
                end=AnchorValue(0.9, adjustable=True),
            ),
            dark=ModeAnchors(
                start=AnchorValue(0.1),
                end=AnchorValue(0.4, adjustable=True),
            ),
        ),
        inverted=Anchors(
            light=ModeAnchors(
                start=AnchorValue(0.4),
                end=AnchorValue(0.2, adjustable=True),
            ),
            dark=ModeAnchors(
                start=AnchorValue(0.85),
                end=AnchorValue(0.95),
            ),
        ),
        key_colors={"brand": KeyColor.literal("#6e56cf")},
    ),
    groups=(
        SurfaceGroup(
            name="Base",
            surfaces=(SurfaceConfig("page", "Page"),),
        ),
        SurfaceGroup(
            name="Containers",
            surfaces=(
                SurfaceConfig("workspace", "Workspace"),
                SurfaceConfig(
                    "card",
                    "Card",
                    states=(StateDefinition("hover", -4.0),),
                ),
            ),
        ),
        SurfaceGroup(
            name="Interactive",
            surfaces=(
                SurfaceConfig(
                    "action",
                    "Action",
                    states=(
                        StateDefinition("hover", -5.0),
                        StateDefinition("active", -10.0),
                    ),
                ),
            ),
        ),
        SurfaceGroup(
            name="Spotlight",
            surfaces=(
                SurfaceConfig("spotlight", "Spotlight", polarity=Polarity.INVERTED),
            ),
        ),
    ),
    hue_shift=HueShiftConfig(curve=DEFAULT_CURVE, max_rotation=30.0),
    border_targets=BorderTargets(decorative=10.0, interactive=30.0),
    palette=PaletteConfig(hues=(25.0, 85.0, 145.0, 240.0, 300.0)),
)
