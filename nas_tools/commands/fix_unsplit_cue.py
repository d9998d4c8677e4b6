"""fix-unsplit-cue command: split leftover single-file CD rips in place."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nas_tools.cli import Context, pass_context
from nas_tools.cue.driver import CueSplitDriver, print_summary
from nas_tools.cue.scanner import ScriptOptions
from nas_tools.cue.splitter import require_tools
from nas_tools.exceptions import MissingToolError
from nas_tools.utils.output import error, warning

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_MISSING_DEPS = 2


def _confirm(question: str) -> bool:
    return click.confirm(question, default=False)


@click.command("fix-unsplit-cue")
@click.argument(
    "folder_path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--ignore-failed",
    "-i",
    is_flag=True,
    default=False,
    help="Skip directories that still contain a __temp_split folder.",
)
@click.option(
    "--yes",
    "-y",
    "assume_yes",
    is_flag=True,
    default=False,
    help="Answer yes to every confirmation.",
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    default=False,
    help="List unsplit pairs without splitting anything.",
)
@pass_context
def cli(
    ctx: Context,
    folder_path: Path,
    ignore_failed: bool,
    assume_yes: bool,
    dry_run: bool,
) -> None:
    """Split single-file CD rips below FOLDER_PATH into tracks.

    Finds every .cue sheet with a matching .flac or .wav image, splits it
    with cuebreakpoints and shnsplit into a __temp_split folder, then
    (after confirmation) moves the tracks next to the original and removes
    the cue sheet and image.

    Processing stops at the first failed pair. Re-running after fixing
    the problem picks up where the previous run ended.

    Examples:

    \b
      # Interactive run
      nas-tools fix-unsplit-cue /volmain/Public/FLAC

    \b
      # Unattended, skipping folders left over from failed runs
      nas-tools fix-unsplit-cue -i -y /volmain/Public/FLAC
    """
    options = ScriptOptions(ignore_failed=ignore_failed, assume_yes=assume_yes, dry_run=dry_run)
    driver = CueSplitDriver(options, confirm=_confirm)

    pairs = driver.scan(folder_path)

    # Tools only matter once there is something to split
    to_split = [pair for pair in pairs if not pair.resume]
    if to_split and not dry_run:
        try:
            missing_optional = require_tools({pair.audio_suffix for pair in to_split})
        except MissingToolError as e:
            error(
                str(e),
                hint="Install cuetools, shntool and flac via your package manager.",
            )
            sys.exit(EXIT_MISSING_DEPS)
        if missing_optional:
            warning(f"Optional tools not found: {', '.join(missing_optional)}")

    summary = driver.run_pairs(pairs)
    if pairs:
        print_summary(summary)
    sys.exit(summary.exit_code)
