import logging

import pytest

from surface_contrast.charts import solve_charts, solve_primitives
from surface_contrast.config import DEFAULT_CONFIG, config_from_dict
from surface_contrast.contrast import contrast_for_pair
from surface_contrast.solver import solve


def test_one_chart_color_per_hue():
    theme = solve(DEFAULT_CONFIG)
    assert [c.light.h for c in theme.charts] == list(DEFAULT_CONFIG.palette.hues)
    page = theme.backgrounds["page"]
    for chart in theme.charts:
        assert chart.light.c == DEFAULT_CONFIG.palette.target_chroma
        assert contrast_for_pair(chart.light.l, page.light.l) == pytest.approx(60, abs=0.05)
        assert contrast_for_pair(chart.dark.l, page.dark.l) == pytest.approx(60, abs=0.05)


def test_no_palette_no_charts():
    config = config_from_dict({"palette": None})
    assert solve_charts(config, {}) == ()


def test_missing_page_falls_back_to_white_and_black():
    charts = solve_charts(DEFAULT_CONFIG, {})
    assert charts[0].light.l < 0.7
    assert charts[0].dark.l > 0.3


def test_close_hues_warn(caplog):
    config = config_from_dict({"palette": {"hues": [10, 25, 200]}})
    with caplog.at_level(logging.WARNING, logger="surface_contrast.charts"):
        solve_charts(config, {})
    assert "only 15° apart" in caplog.text


def test_primitives_use_key_color_hues():
    config = config_from_dict(
        {"anchors": {"keyColors": {"brand": "oklch(0.5 0.2 123)", "highlight": "oklch(0.6 0.2 45)"}}}
    )
    primitives = solve_primitives(config)
    assert primitives["focus"]["ring"]["light"] == "oklch(0.45 0.2 123)"
    assert primitives["highlight"]["surface"]["dark"] == "oklch(0.25 0.05 45)"
    assert set(primitives["shadows"]) == {"sm", "md", "lg", "xl"}


def test_primitive_hue_defaults():
    config = config_from_dict({"anchors": {"keyColors": {}}})
    primitives = solve_primitives(config)
    assert primitives["focus"]["ring"]["dark"] == "oklch(0.75 0.2 250)"
    assert primitives["highlight"]["ring"]["light"] == "oklch(0.6 0.25 320)"
    assert primitives["shadows"]["sm"]["light"] == "0 1px 2px 0 oklch(0 0 0 / 0.05)"
