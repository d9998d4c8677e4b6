"""init-config command: write the packaged example configuration."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from nas_tools.cli import Context, pass_context
from nas_tools.config import get_default_config_path, load_config
from nas_tools.utils.fileops import secure_atomic_write
from nas_tools.utils.output import error, info, success, warning


def _load_example_config() -> str:
    return resources.files("nas_tools").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite an existing file")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Where to write the file (default: ~/.config/nas-tools/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a configuration file listing every option with its default.

    Paths in the new file that do not exist on this machine are reported,
    since the NAS volumes are usually mounted under different names.

    Examples:

    \b
      nas-tools init-config
      nas-tools init-config --output ./nas-tools.toml --force
    """
    target = (output or get_default_config_path()).expanduser().resolve()

    if target.exists() and not force:
        error(f"Config file already exists: {target}", hint="Use --force to overwrite")
        raise SystemExit(1)

    try:
        secure_atomic_write(target, _load_example_config())
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)
    success(f"Created config file: {target}")

    _, notes = load_config(target)
    for note in notes:
        warning(note)
    if notes:
        info(f"Edit {target} to point the paths at your NAS volumes.")
