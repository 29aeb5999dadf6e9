from surface_contrast.config import DEFAULT_CONFIG
from surface_contrast.display import render_table, theme_frame
from surface_contrast.solver import solve
from surface_contrast.theme import FOREGROUND_FIELDS


def test_frame_has_two_rows_per_background():
    theme = solve(DEFAULT_CONFIG)
    df = theme_frame(theme)
    assert len(df) == 2 * len(theme.backgrounds)
    assert set(df["mode"]) == {"light", "dark"}
    for name in FOREGROUND_FIELDS:
        assert name in df.columns


def test_state_rows_belong_to_parent_surface():
    df = theme_frame(solve(DEFAULT_CONFIG))
    hover = df[df["key"] == "card-hover"]
    assert list(hover["surface"]) == ["card", "card"]
    assert hover["fg_strong"].isna().all()


def test_render_table_prints_every_key(capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    theme = solve(DEFAULT_CONFIG)
    render_table(theme, title="defaults")
    out = capsys.readouterr().out
    assert "defaults" in out
    assert "action-active" in out
