from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

import colour
import numpy as np
from colour.notation.css_color_3 import CSS_COLOR_3

from .errors import SolverError

logger = logging.getLogger(__name__)

# chroma below this is treated as neutral (no meaningful hue); sRGB white
# lands around 1e-4 after the Oklab round trip
ACHROMATIC_CHROMA = 1e-3

HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
FUNC_RE = re.compile(r"^(rgba?|hsla?|oklab|oklch)\(\s*(.*?)\s*\)$", re.IGNORECASE)
ARG_SPLIT_RE = re.compile(r"[\s,]+")


# ============================================================
# Color model
# ============================================================


@dataclass(frozen=True)
class ColorSpec:
    """A point in OKLCH: lightness 0..1, chroma >= 0, hue in degrees."""

    l: float
    c: float
    h: float

    def to_dict(self) -> Dict[str, float]:
        return {"l": self.l, "c": self.c, "h": self.h}


# ============================================================
# Lab / LCh helpers
# ============================================================


def lab_to_lch(L: float, a: float, b: float) -> Tuple[float, float, float]:
    C = math.sqrt(a * a + b * b)
    h = (math.degrees(math.atan2(b, a)) % 360.0) if C > ACHROMATIC_CHROMA else 0.0
    return (float(L), float(C), float(h))


def lch_to_lab(L: float, C: float, h: float) -> Tuple[float, float, float]:
    hr = math.radians(h)
    return (float(L), float(C * math.cos(hr)), float(C * math.sin(hr)))


def srgb_to_oklch(rgb) -> Tuple[float, float, float]:
    rgb = np.clip(np.asarray(rgb, dtype=float), 0.0, 1.0)
    xyz = colour.sRGB_to_XYZ(rgb)
    L, a, b = colour.XYZ_to_Oklab(xyz)
    return lab_to_lch(float(L), float(a), float(b))


def to_hex(spec: ColorSpec) -> str:
    """Gamut-clipped #rrggbb for an OKLCH spec."""
    lab = np.array(lch_to_lab(spec.l, spec.c, spec.h))
    xyz = colour.Oklab_to_XYZ(lab)
    rgb = np.clip(colour.XYZ_to_sRGB(xyz), 0.0, 1.0)
    r, g, b = (rgb * 255.0 + 0.5).astype(int)
    return f"#{r:02x}{g:02x}{b:02x}"


def circ_dist_deg(a: float, b: float) -> float:
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


def circular_mean_deg(deg) -> float:
    rad = np.deg2rad(np.asarray(deg, dtype=float))
    return float(
        np.rad2deg(np.arctan2(np.mean(np.sin(rad)), np.mean(np.cos(rad)))) % 360
    )


# ============================================================
# Parsing
# ============================================================


def _component(token: str, percent_scale: float = 1.0) -> float:
    token = token.strip().lower()
    if token == "none":
        return 0.0
    if token.endswith("%"):
        return float(token[:-1]) / 100.0 * percent_scale
    if token.endswith("deg"):
        return float(token[:-3])
    return float(token)


def _percentage(token: str) -> float:
    """CSS percentage channel; bare numbers are percentages too (hsl(120 50 50))."""
    token = token.strip()
    if token.endswith("%"):
        token = token[:-1]
    return _component(token) / 100.0


def _hex_to_rgb(digits: str) -> np.ndarray:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    return np.asarray(colour.notation.HEX_to_RGB(digits[:6]), dtype=float)


def _parse_function(name: str, body: str) -> Tuple[float, float, float]:
    # drop "/ alpha" and any comma-separated fourth channel
    body = body.split("/")[0]
    args = [a for a in ARG_SPLIT_RE.split(body.strip()) if a]
    if len(args) < 3:
        raise ValueError(f"{name}() needs three components")
    x, y, z = args[:3]

    if name in ("rgb", "rgba"):
        rgb = [
            _component(t, 1.0) if t.endswith("%") else _component(t) / 255.0
            for t in (x, y, z)
        ]
        return srgb_to_oklch(rgb)

    if name in ("hsl", "hsla"):
        hsl = np.array([(_component(x) % 360.0) / 360.0, _percentage(y), _percentage(z)])
        return srgb_to_oklch(colour.HSL_to_RGB(hsl))

    if name == "oklab":
        return lab_to_lch(_component(x), _component(y, 0.4), _component(z, 0.4))

    # oklch
    return (_component(x), _component(y, 0.4), _component(z) % 360.0)


def parse_color(text: str) -> ColorSpec:
    """Parse a CSS colour string into OKLCH. Raises COLOR_PARSE_FAILED."""
    raw = str(text).strip()

    try:
        hex_match = HEX_RE.match(raw)
        func_match = FUNC_RE.match(raw)
        if hex_match:
            L, C, h = srgb_to_oklch(_hex_to_rgb(hex_match.group(1)))
        elif func_match:
            L, C, h = _parse_function(func_match.group(1).lower(), func_match.group(2))
        elif raw.lower() in CSS_COLOR_3:
            L, C, h = srgb_to_oklch(colour.notation.HEX_to_RGB(CSS_COLOR_3[raw.lower()]))
        else:
            raise ValueError("unrecognised colour syntax")
    except ValueError as exc:
        raise SolverError(
            "COLOR_PARSE_FAILED",
            f"Could not parse colour {raw!r}: {exc}.",
            {"value": raw},
        ) from exc

    if not all(math.isfinite(v) for v in (L, C, h)):
        raise SolverError(
            "COLOR_PARSE_FAILED",
            f"Colour {raw!r} produced a non-finite OKLCH value.",
            {"value": raw, "parsed": {"l": L, "c": C, "h": h}},
        )

    # lightness is clamped at the edges, never wrapped
    L = min(max(float(L), 0.0), 1.0)
    C = max(float(C), 0.0)
    return ColorSpec(l=L, c=C, h=float(h))


# ============================================================
# Key colors
# ============================================================


@dataclass(frozen=True)
class KeyColor:
    """Either a literal colour string or an alias naming another key."""

    kind: str  # "literal" | "alias"
    value: str

    @classmethod
    def literal(cls, value: str) -> "KeyColor":
        return cls("literal", value)

    @classmethod
    def alias(cls, name: str) -> "KeyColor":
        return cls("alias", name)

    @property
    def is_alias(self) -> bool:
        return self.kind == "alias"


def key_colors_from_mapping(mapping: Mapping[str, str]) -> Dict[str, KeyColor]:
    """Tag raw strings: a value naming another key is an alias."""
    out: Dict[str, KeyColor] = {}
    for name, value in mapping.items():
        value = str(value)
        out[name] = KeyColor.alias(value) if value in mapping else KeyColor.literal(value)
    return out


def key_colors_to_mapping(key_colors: Mapping[str, KeyColor]) -> Dict[str, str]:
    return {name: kc.value for name, kc in key_colors.items()}


def detect_key_color_cycles(key_colors: Mapping[str, KeyColor]) -> None:
    for start in key_colors:
        visited = set()
        path: List[str] = []
        current: Optional[str] = start

        while current is not None:
            if current in visited:
                chain = path[path.index(current):] + [current]
                raise SolverError(
                    "CONFIG_CIRCULAR_KEY_COLOR",
                    f"Circular key color reference detected: {' → '.join(chain)}.",
                    {"chain": chain, "start": start},
                )
            visited.add(current)
            path.append(current)

            entry = key_colors.get(current)
            current = entry.value if entry is not None and entry.is_alias else None


def resolve_key_color(name: str, key_colors: Mapping[str, KeyColor]) -> Optional[str]:
    """Follow an alias chain to its literal colour string (None if unknown)."""
    detect_key_color_cycles(key_colors)
    entry = key_colors.get(name)
    while entry is not None and entry.is_alias:
        entry = key_colors.get(entry.value)
    return entry.value if entry is not None else None


def _literal_specs(key_colors: Mapping[str, KeyColor]) -> List[ColorSpec]:
    # insertion order; the average below depends on it staying fixed
    return [parse_color(kc.value) for kc in key_colors.values() if not kc.is_alias]


def key_color_lightness(key_colors: Mapping[str, KeyColor]) -> Optional[float]:
    """Sequential average lightness of all literal key colors."""
    specs = _literal_specs(key_colors)
    if not specs:
        return None
    total = 0.0
    for spec in specs:
        total += spec.l
    return round(total / len(specs), 4)


@dataclass(frozen=True)
class KeyColorStats:
    lightness: Optional[float] = None
    chroma: Optional[float] = None
    hue: Optional[float] = None


def key_color_stats(key_colors: Mapping[str, KeyColor]) -> KeyColorStats:
    """
    Global lightness/chroma/hue from the key colors.

    A literal `brand` wins outright; otherwise all literals are
    aggregated (hue as a circular mean of the chromatic ones).
    """
    if not key_colors:
        return KeyColorStats()

    detect_key_color_cycles(key_colors)

    brand = key_colors.get("brand")
    if brand is not None and not brand.is_alias:
        spec = parse_color(brand.value)
        return KeyColorStats(
            lightness=round(spec.l, 4),
            chroma=round(spec.c, 4),
            hue=round(spec.h, 4) % 360.0 if spec.c > ACHROMATIC_CHROMA else None,
        )

    specs = _literal_specs(key_colors)
    if not specs:
        return KeyColorStats()

    l_total = 0.0
    c_total = 0.0
    for spec in specs:
        l_total += spec.l
        c_total += spec.c
    hues = [s.h for s in specs if s.c > ACHROMATIC_CHROMA]

    return KeyColorStats(
        lightness=round(l_total / len(specs), 4),
        chroma=round(c_total / len(specs), 4),
        hue=round(circular_mean_deg(hues), 4) % 360.0 if hues else None,
    )


def get_hue(
    name: Optional[str], key_colors: Mapping[str, KeyColor], fallback: float
) -> float:
    """Hue of a (possibly aliased) key color, or `fallback` when neutral/absent."""
    if name is None:
        return fallback
    literal = resolve_key_color(name, key_colors)
    if literal is None:
        return fallback
    spec = parse_color(literal)
    return spec.h if spec.c > ACHROMATIC_CHROMA else fallback
