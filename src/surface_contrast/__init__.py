from .colors import ColorSpec, KeyColor, parse_color
from .config import (
    DEFAULT_CONFIG,
    Context,
    Mode,
    Polarity,
    SolverConfig,
    config_from_dict,
)
from .contrast import contrast_for_pair
from .errors import SolverError
from .foreground import solve_border_alpha, solve_foreground_lightness, solve_foreground_spec
from .search import binary_search
from .solver import solve
from .theme import ModeSpec, Theme
from .vibes import VIBES, resolve_config

__all__ = [
    "ColorSpec",
    "Context",
    "DEFAULT_CONFIG",
    "KeyColor",
    "Mode",
    "ModeSpec",
    "Polarity",
    "SolverConfig",
    "SolverError",
    "Theme",
    "VIBES",
    "binary_search",
    "config_from_dict",
    "contrast_for_pair",
    "parse_color",
    "resolve_config",
    "solve",
    "solve_border_alpha",
    "solve_foreground_lightness",
    "solve_foreground_spec",
]
