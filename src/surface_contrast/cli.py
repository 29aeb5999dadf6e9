import json
import logging
from pathlib import Path
from typing import Optional

import click

from .config import DEFAULT_CONFIG, config_to_dict
from .display import render_table, theme_frame
from .errors import SolverError
from .solver import solve
from .vibes import VIBES, resolve_config


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
def main():
    """Solve light/dark surface lightness from contrast targets."""


@main.command("solve")
@click.argument(
    "config_json",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--vibe", default=None, help="Preset applied before the config file.")
@click.option(
    "--out-json",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the solved theme as JSON.",
)
@click.option(
    "--out-csv",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write one row per background and mode.",
)
@click.option(
    "--no-render", is_flag=True, default=False, help="Disable rich table output."
)
@click.option("--verbose", "-v", is_flag=True, default=False)
def solve_command(
    config_json: Path,
    vibe: Optional[str],
    out_json: Optional[Path],
    out_csv: Optional[Path],
    no_render: bool,
    verbose: bool,
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        user_config = json.loads(config_json.read_text())
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{config_json} is not valid JSON: {exc}")

    try:
        config = resolve_config(user_config, vibe=vibe)
        theme = solve(config)
    except SolverError as exc:
        raise click.ClickException(str(exc))

    if out_json is not None:
        out_json.parent.mkdir(parents=True, exist_ok=True)
        out_json.write_text(json.dumps(theme.to_dict(), indent=2))
        click.echo(f"✓ Wrote {out_json}")

    if out_csv is not None:
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        theme_frame(theme).to_csv(out_csv, index=False)
        click.echo(f"✓ Wrote {out_csv} ({len(theme.backgrounds)} backgrounds)")

    if not no_render:
        render_table(theme, title=config_json.stem)


@main.command("init")
@click.argument(
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("color-config.json"),
)
def init_command(path: Path):
    """Write the default config as a starting point."""
    if path.exists():
        raise click.ClickException(f"{path} already exists.")
    path.write_text(json.dumps(config_to_dict(DEFAULT_CONFIG), indent=2))
    click.echo(f"✓ Wrote {path}")


@main.command("vibes")
def vibes_command():
    """List the available presets."""
    for key, vibe in VIBES.items():
        click.echo(f"{key:14s} {vibe.description}")


if __name__ == "__main__":
    main()
