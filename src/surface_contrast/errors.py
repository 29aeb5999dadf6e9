from __future__ import annotations

from typing import Any, Dict, Optional

# ============================================================
# Error codes
# ============================================================

ERROR_CODES = (
    "CONFIG_INVALID_VIBE",
    "CONFIG_INVALID_VALUE",
    "CONFIG_DUPLICATE_SURFACE_SLUG",
    "CONFIG_CIRCULAR_KEY_COLOR",
    "CONFIG_INVALID_ANCHOR_ORDER",
    "CONFIG_INVALID_CONTRAST_OFFSET",
    "SOLVER_MISSING_BACKGROUNDS",
    "COLOR_PARSE_FAILED",
    "MATH_NONFINITE",
)


class SolverError(Exception):
    """
    Fatal solver failure. Every code aborts the whole solve; nothing
    in the library catches it.
    """

    def __init__(
        self, code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        if code not in ERROR_CODES:
            raise ValueError(f"unknown solver error code {code!r}")
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.details = dict(details or {})
