import pytest

from surface_contrast.colors import (
    ColorSpec,
    KeyColor,
    circ_dist_deg,
    circular_mean_deg,
    detect_key_color_cycles,
    get_hue,
    key_color_lightness,
    key_color_stats,
    key_colors_from_mapping,
    parse_color,
    resolve_key_color,
    to_hex,
)
from surface_contrast.errors import SolverError

# ------------------------------------------------------------
# parsing
# ------------------------------------------------------------


def test_parse_white_and_black():
    white = parse_color("#ffffff")
    black = parse_color("#000")
    assert white.l == pytest.approx(1.0, abs=1e-3)
    assert white.c == pytest.approx(0.0, abs=1e-3)
    assert black.l == pytest.approx(0.0, abs=1e-3)


def test_achromatic_hue_is_zero():
    assert parse_color("#808080").h == 0.0


def test_parse_oklch_forms():
    assert parse_color("oklch(0.5 0.1 200)") == ColorSpec(0.5, 0.1, 200.0)
    assert parse_color("oklch(50% 0.1 200deg)") == ColorSpec(0.5, 0.1, 200.0)
    assert parse_color("oklch(0.5 0.1 none)").h == 0.0
    assert parse_color("OKLCH(0.5 0.1 400)").h == pytest.approx(40.0)


def test_parse_oklab():
    spec = parse_color("oklab(0.6 0 0.1)")
    assert spec.l == pytest.approx(0.6)
    assert spec.c == pytest.approx(0.1)
    assert spec.h == pytest.approx(90.0)


def test_red_spellings_agree():
    reference = parse_color("#ff0000")
    for text in ("red", "#f00", "#ff0000ff", "rgb(255, 0, 0)", "rgba(255 0 0 / 0.5)", "hsl(0, 100%, 50%)"):
        spec = parse_color(text)
        assert spec.l == pytest.approx(reference.l, abs=1e-4), text
        assert spec.c == pytest.approx(reference.c, abs=1e-4), text
        assert spec.h == pytest.approx(reference.h, abs=0.1), text


def test_red_in_oklch():
    spec = parse_color("#ff0000")
    assert spec.l == pytest.approx(0.628, abs=0.005)
    assert spec.h == pytest.approx(29.2, abs=0.5)


@pytest.mark.parametrize("text", ["", "nope", "#12", "#zzzzzz", "oklch(0.5 0.1)", "rgb(a, b, c)"])
def test_unparseable_colours_raise(text):
    with pytest.raises(SolverError, match="COLOR_PARSE_FAILED"):
        parse_color(text)


def test_modern_hsl_reads_bare_numbers_as_percentages():
    modern = parse_color("hsl(120 50 50)")
    legacy = parse_color("hsl(120, 50%, 50%)")
    assert 0.0 <= modern.l <= 1.0
    assert modern == legacy
    assert modern.h == pytest.approx(parse_color("#40bf40").h, abs=0.5)


@pytest.mark.parametrize(
    "text, expected",
    [("oklch(1.5 0 0)", 1.0), ("oklch(-0.2 0 0)", 0.0), ("oklch(150% 0.1 20)", 1.0), ("oklab(2 0 0)", 1.0)],
)
def test_lightness_is_clamped_to_unit_range(text, expected):
    assert parse_color(text).l == expected


def test_negative_chroma_is_clamped():
    assert parse_color("oklch(0.5 -0.1 20)").c == 0.0


def test_out_of_gamut_rgb_channels_are_clipped():
    assert parse_color("rgb(300, -20, 0)") == parse_color("rgb(255, 0, 0)")


def test_to_hex_of_parsed_colour():
    assert to_hex(parse_color("#6e56cf")) == "#6e56cf"
    assert to_hex(ColorSpec(1.0, 0.0, 0.0)) == "#ffffff"


# ------------------------------------------------------------
# hue helpers
# ------------------------------------------------------------


def test_circular_distance_wraps():
    assert circ_dist_deg(350, 10) == 20
    assert circ_dist_deg(10, 350) == 20
    assert circ_dist_deg(0, 180) == 180


def test_circular_mean_wraps():
    assert circ_dist_deg(circular_mean_deg([350, 10]), 0.0) < 1e-6
    assert circular_mean_deg([80, 100]) == pytest.approx(90.0)


# ------------------------------------------------------------
# key colors
# ------------------------------------------------------------


def test_values_naming_keys_become_aliases():
    tagged = key_colors_from_mapping({"brand": "accent", "accent": "#ff0000"})
    assert tagged["brand"] == KeyColor.alias("accent")
    assert tagged["accent"] == KeyColor.literal("#ff0000")


def test_alias_chain_resolves_to_literal():
    tagged = key_colors_from_mapping({"brand": "accent", "accent": "primary", "primary": "#ff0000"})
    assert resolve_key_color("brand", tagged) == "#ff0000"
    assert resolve_key_color("missing", tagged) is None


def test_two_key_cycle_is_rejected():
    tagged = key_colors_from_mapping({"brand": "accent", "accent": "brand"})
    with pytest.raises(SolverError, match="CONFIG_CIRCULAR_KEY_COLOR") as exc:
        detect_key_color_cycles(tagged)
    assert exc.value.details["chain"] == ["brand", "accent", "brand"]


def test_self_reference_is_rejected():
    with pytest.raises(SolverError, match="CONFIG_CIRCULAR_KEY_COLOR"):
        detect_key_color_cycles({"brand": KeyColor.alias("brand")})


def test_key_color_lightness_averages_literals():
    tagged = key_colors_from_mapping({"a": "#ffffff", "b": "#000000", "c": "a"})
    assert key_color_lightness(tagged) == pytest.approx(0.5, abs=1e-3)
    assert key_color_lightness({}) is None


def test_literal_brand_wins_stats():
    tagged = key_colors_from_mapping({"brand": "oklch(0.6 0.2 120)", "accent": "oklch(0.2 0.1 300)"})
    stats = key_color_stats(tagged)
    assert (stats.lightness, stats.chroma, stats.hue) == (0.6, 0.2, 120.0)


def test_aliased_brand_aggregates_stats():
    tagged = key_colors_from_mapping(
        {"brand": "a", "a": "oklch(0.4 0.1 350)", "b": "oklch(0.6 0.3 10)"}
    )
    stats = key_color_stats(tagged)
    assert stats.lightness == pytest.approx(0.5)
    assert stats.chroma == pytest.approx(0.2)
    assert circ_dist_deg(stats.hue, 0.0) < 1e-3


@pytest.mark.parametrize("brand", ["#777777", "#ffffff", "white", "#000"])
def test_neutral_brand_has_no_hue(brand):
    stats = key_color_stats(key_colors_from_mapping({"brand": brand}))
    assert stats.hue is None
    assert get_hue("brand", key_colors_from_mapping({"brand": brand}), 42.0) == 42.0


def test_aggregated_hue_wraps_to_zero():
    tagged = key_colors_from_mapping(
        {"brand": "a", "a": "oklch(0.5 0.1 350)", "b": "oklch(0.5 0.1 10)"}
    )
    hue = key_color_stats(tagged).hue
    assert 0.0 <= hue < 360.0
    assert circ_dist_deg(hue, 0.0) < 1e-3


def test_get_hue_follows_aliases_and_falls_back():
    tagged = key_colors_from_mapping({"brand": "accent", "accent": "oklch(0.5 0.1 140)", "grey": "#888"})
    assert get_hue("brand", tagged, 0.0) == pytest.approx(140.0)
    assert get_hue("grey", tagged, 42.0) == 42.0
    assert get_hue("missing", tagged, 42.0) == 42.0
    assert get_hue(None, tagged, 42.0) == 42.0
