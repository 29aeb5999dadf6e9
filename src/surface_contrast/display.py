from __future__ import annotations

from typing import Dict, List

import pandas as pd
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .colors import ColorSpec, to_hex
from .config import MODES
from .contrast import contrast_for_pair
from .theme import FOREGROUND_FIELDS, Theme

# ============================================================
# Tabular view
# ============================================================


def theme_frame(theme: Theme) -> pd.DataFrame:
    """
    One row per background key and mode:
      key, surface, mode, L, C, H, hex, fg_* ..., contrast_strong,
      target_contrast, clamped
    Foreground columns are empty for state rows.
    """
    specs = {s.slug: s for s in theme.surfaces}
    rows: List[Dict] = []

    for key, pair in theme.backgrounds.items():
        for mode in MODES:
            spec: ColorSpec = pair.for_mode(mode)
            row = {
                "key": key,
                "surface": key if key in specs else None,
                "mode": mode.value,
                "L": spec.l,
                "C": spec.c,
                "H": spec.h,
                "hex": to_hex(spec),
            }
            solved = specs.get(key)
            if solved is not None:
                computed = solved.computed.for_mode(mode)
                for name in FOREGROUND_FIELDS:
                    row[name] = getattr(computed, name)
                row["contrast_strong"] = contrast_for_pair(computed.fg_strong, computed.background)
                if computed.debug is not None:
                    row["target_contrast"] = computed.debug.target_contrast
                    row["clamped"] = computed.debug.clamped
            rows.append(row)

    df = pd.DataFrame(rows)
    if not df.empty:
        df["surface"] = df["surface"].ffill()
    return df


# ============================================================
# Rendering
# ============================================================


def _swatch(spec: ColorSpec, fg_l: float | None = None) -> Text:
    bg = to_hex(spec)
    if fg_l is None:
        return Text("   ", style=Style(bgcolor=bg))
    fg = to_hex(ColorSpec(fg_l, 0.0, 0.0))
    return Text(" Aa ", style=Style(color=fg, bgcolor=bg))


def render_table(theme: Theme, title: str = "theme") -> None:
    console = Console()
    table = Table(title=title)

    table.add_column("Surface", style="cyan", no_wrap=True)
    for mode in MODES:
        table.add_column(f"{mode.value.title()}", no_wrap=True)
        table.add_column(" ")
        table.add_column("L", justify="right")
        table.add_column("Lc", justify="right")
    table.add_column("Clamped", justify="center")

    specs = {s.slug: s for s in theme.surfaces}

    for key, pair in theme.backgrounds.items():
        cells = [key if key in specs else f"  [dim]{key}[/dim]"]
        clamped = False
        for mode in MODES:
            spec = pair.for_mode(mode)
            solved = specs.get(key)
            computed = solved.computed.for_mode(mode) if solved else None
            cells.append(to_hex(spec))
            cells.append(_swatch(spec, computed.fg_strong if computed else None))
            cells.append(f"{spec.l:.3f}")
            cells.append(
                f"{contrast_for_pair(computed.fg_strong, computed.background):.1f}"
                if computed
                else ""
            )
            if computed is not None and computed.debug is not None:
                clamped = clamped or computed.debug.clamped
        cells.append("✓" if clamped else "")
        table.add_row(*cells)

    console.print(table)
