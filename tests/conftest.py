import pytest

from surface_contrast.config import config_from_dict


@pytest.fixture
def make_config():
    """Build a SolverConfig from a JSON-shaped dict over the defaults."""

    def _make(**data):
        return config_from_dict(data)

    return _make


@pytest.fixture
def wide_page_anchors():
    # page light walks 1.0 -> 0.1, both ends fixed
    return {
        "page": {
            "light": {
                "start": {"background": 1.0, "adjustable": False},
                "end": {"background": 0.1, "adjustable": False},
            }
        }
    }
