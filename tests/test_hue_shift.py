import pytest

from surface_contrast.config import DEFAULT_CURVE, BezierCurve, HueShiftConfig
from surface_contrast.hue_shift import calculate_hue_shift, cubic_bezier

SHIFT = HueShiftConfig(curve=DEFAULT_CURVE, max_rotation=30.0)


def test_bezier_endpoints():
    assert cubic_bezier(0.0, 0.3, 0.7) == 0.0
    assert cubic_bezier(1.0, 0.3, 0.7) == 1.0


def test_no_config_means_no_shift():
    assert calculate_hue_shift(0.5) == 0.0
    assert calculate_hue_shift(0.5, None) == 0.0


def test_shift_at_extremes():
    assert calculate_hue_shift(0.0, SHIFT) == pytest.approx(0.0)
    assert calculate_hue_shift(1.0, SHIFT) == pytest.approx(30.0)


def test_symmetric_curve_midpoint():
    assert calculate_hue_shift(0.5, SHIFT) == pytest.approx(15.0, abs=0.5)


def test_shift_grows_with_lightness():
    values = [calculate_hue_shift(i / 10, SHIFT) for i in range(11)]
    assert values == sorted(values)


def test_linear_curve_is_proportional():
    linear = HueShiftConfig(curve=BezierCurve(p1=(1 / 3, 1 / 3), p2=(2 / 3, 2 / 3)), max_rotation=10.0)
    assert calculate_hue_shift(0.3, linear) == pytest.approx(3.0, abs=0.05)
