import pytest

from surface_contrast.colors import ColorSpec, parse_color
from surface_contrast.config import (
    AnchorValue,
    Context,
    Mode,
    ModeAnchors,
    Polarity,
    StateDefinition,
    SurfaceConfig,
    SurfaceRef,
)
from surface_contrast.contrast import contrast_for_background
from surface_contrast.errors import SolverError
from surface_contrast.overrides import apply_overrides

PAGE_LIGHT = Context(Polarity.PAGE, Mode.LIGHT)
PAGE_DARK = Context(Polarity.PAGE, Mode.DARK)
WIDE = ModeAnchors(start=AnchorValue(1.0), end=AnchorValue(0.1))

CARD = SurfaceConfig(
    "card",
    "Card",
    states=(StateDefinition("hover", 10.0),),
    override={Mode.LIGHT: "#cccccc"},
)
SOLVED = {
    SurfaceRef("card"): ColorSpec(0.95, 0.0, 0.0),
    SurfaceRef("card", "hover"): ColorSpec(0.97, 0.0, 0.0),
}


def test_override_replaces_base_color():
    out = apply_overrides(PAGE_LIGHT, WIDE, (CARD,), SOLVED)
    assert out[SurfaceRef("card")] == parse_color("#cccccc")


def test_state_is_offset_from_override_contrast():
    out = apply_overrides(PAGE_LIGHT, WIDE, (CARD,), SOLVED)
    base = contrast_for_background(PAGE_LIGHT, out[SurfaceRef("card")].l)
    hover = contrast_for_background(PAGE_LIGHT, out[SurfaceRef("card", "hover")].l)
    assert hover - base == pytest.approx(10.0, abs=0.5)


def test_state_keeps_override_hue_and_chroma():
    surface = SurfaceConfig(
        "card", "Card", states=(StateDefinition("hover", 5.0),), override={Mode.LIGHT: "oklch(0.8 0.05 140)"}
    )
    out = apply_overrides(PAGE_LIGHT, WIDE, (surface,), SOLVED)
    hover = out[SurfaceRef("card", "hover")]
    assert (hover.c, hover.h) == (0.05, 140.0)


def test_other_mode_is_untouched():
    out = apply_overrides(PAGE_DARK, WIDE, (CARD,), SOLVED)
    assert out == SOLVED


def test_input_mapping_is_not_mutated():
    before = dict(SOLVED)
    apply_overrides(PAGE_LIGHT, WIDE, (CARD,), SOLVED)
    assert SOLVED == before


def test_bad_override_reports_surface_and_mode():
    surface = SurfaceConfig("card", "Card", override={Mode.LIGHT: "chartreuse-ish"})
    with pytest.raises(SolverError, match="COLOR_PARSE_FAILED") as exc:
        apply_overrides(PAGE_LIGHT, WIDE, (surface,), SOLVED)
    assert exc.value.details["surface"] == "card"
    assert exc.value.details["mode"] == "light"
