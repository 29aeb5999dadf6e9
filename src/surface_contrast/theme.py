from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .colors import ColorSpec
from .config import Mode, SurfaceConfig, surface_to_dict
from .planner import SequenceDebug

FOREGROUND_FIELDS = (
    "fg_high",
    "fg_strong",
    "fg_baseline",
    "fg_subtle",
    "fg_subtlest",
    "fg_high_hc",
    "fg_strong_hc",
    "fg_baseline_hc",
    "fg_subtle_hc",
    "fg_subtlest_hc",
)


@dataclass(frozen=True)
class ModeSpec:
    """Solved background plus its foreground ladder for one mode."""

    background: float
    fg_high: float
    fg_strong: float
    fg_baseline: float
    fg_subtle: float
    fg_subtlest: float
    fg_high_hc: float
    fg_strong_hc: float
    fg_baseline_hc: float
    fg_subtle_hc: float
    fg_subtlest_hc: float
    debug: Optional[SequenceDebug] = None
    border_decorative: Optional[float] = None
    border_interactive: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"background": self.background}
        for name in FOREGROUND_FIELDS:
            out[name.replace("_", "-")] = getattr(self, name)
        if self.border_decorative is not None:
            out["border-decorative"] = self.border_decorative
            out["border-interactive"] = self.border_interactive
        if self.debug is not None:
            out["debug"] = self.debug.to_dict()
        return out


@dataclass(frozen=True)
class ModePair:
    light: Any
    dark: Any

    def for_mode(self, mode: Mode):
        return self.light if mode is Mode.LIGHT else self.dark


@dataclass(frozen=True)
class SolvedSurface:
    config: SurfaceConfig
    computed: ModePair  # ModePair[ModeSpec]

    @property
    def slug(self) -> str:
        return self.config.slug

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            surface_to_dict(self.config),
            computed={
                "light": self.computed.light.to_dict(),
                "dark": self.computed.dark.to_dict(),
            },
        )


@dataclass(frozen=True)
class ChartColor:
    light: ColorSpec
    dark: ColorSpec


@dataclass(frozen=True)
class Theme:
    surfaces: Tuple[SolvedSurface, ...]
    # keyed by "<slug>" and "<slug>-<state>"
    backgrounds: Dict[str, ModePair] = field(default_factory=dict)
    charts: Tuple[ChartColor, ...] = ()
    primitives: Dict[str, Any] = field(default_factory=dict)

    def surface(self, slug: str) -> SolvedSurface:
        for s in self.surfaces:
            if s.slug == slug:
                return s
        raise KeyError(slug)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "surfaces": [s.to_dict() for s in self.surfaces],
            "backgrounds": {
                key: {"light": pair.light.to_dict(), "dark": pair.dark.to_dict()}
                for key, pair in self.backgrounds.items()
            },
            "charts": [
                {"light": c.light.to_dict(), "dark": c.dark.to_dict()} for c in self.charts
            ],
            "primitives": self.primitives,
        }
