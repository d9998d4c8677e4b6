"""move-completed command: file finished downloads into the music library."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nas_tools.cli import Context, pass_context
from nas_tools.exceptions import MoveError
from nas_tools.library.artist import DEFAULT_STRATEGIES, ArtistStrategy, prompt_strategy
from nas_tools.library.organizer import (
    MoveOperation,
    OrganizeSummary,
    backup_album,
    move_album,
    plan_moves,
    scan_album_folders,
)
from nas_tools.utils.output import error, info, progress, success, warning

PROCEED_PROMPT = "Proceed with moving these albums?"


def _prompt_artist(question: str, default: str) -> str:
    # No default means click re-asks on empty input
    return click.prompt(question, default=default or None, show_default=bool(default))


def _show_plan(operations: list[MoveOperation]) -> None:
    info(f"Found {len(operations)} album(s) to process:")
    for op in operations:
        marker = "new artist" if op.is_new_artist else "known artist"
        info(f"  {op.album_name} -> {op.artist} ({marker})")


@click.command("move-completed")
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory with completed downloads (default: from config)",
)
@click.option(
    "--target-dir",
    "-t",
    type=click.Path(path_type=Path),
    default=None,
    help="Music library root (default: from config)",
)
@click.option(
    "--backup-dir",
    "-b",
    type=click.Path(path_type=Path),
    default=None,
    help="Where albums are copied before moving (default: from config)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show planned moves without touching any files.",
)
@click.option(
    "--interactive",
    "-i",
    is_flag=True,
    default=False,
    help="Ask for the artist when it cannot be inferred.",
)
@click.option(
    "--yes",
    "-y",
    "assume_yes",
    is_flag=True,
    default=False,
    help="Do not ask for confirmation before moving.",
)
@pass_context
def cli(
    ctx: Context,
    source_dir: Path | None,
    target_dir: Path | None,
    backup_dir: Path | None,
    dry_run: bool,
    interactive: bool,
    assume_yes: bool,
) -> None:
    """Move completed album downloads into the artist library.

    Every folder in the source directory holding music files is moved to
    <target>/<bucket>/<Artist>/<Album>, where the bucket is an
    alphabetical range (A-D, E-F, ...) picked from the artist's first
    letter. The artist is taken from the folder name ("Artist - Album")
    or from the audio tags. Each album is copied to the backup directory
    before it is moved.

    Examples:

    \b
      # Preview what would be moved
      nas-tools move-completed --dry-run

    \b
      # Ask for unknown artists, no final confirmation
      nas-tools move-completed -i -y
    """
    config = ctx.config
    source = (source_dir or config.source_dir).expanduser()
    target = (target_dir or config.target_dir).expanduser()
    backup = (backup_dir or config.backup_dir).expanduser()

    for label, path in (("Source", source), ("Target", target)):
        if not path.is_dir():
            error(f"{label} directory '{path}' does not exist or is not accessible")
            sys.exit(1)

    info(f"Scanning '{source}' for album folders...")
    albums = scan_album_folders(source)
    if not albums:
        info("No album folders found.")
        return
    info(f"Found {len(albums)} album folder(s)")

    strategies: list[ArtistStrategy] = list(DEFAULT_STRATEGIES)
    if interactive:
        strategies.append(prompt_strategy(_prompt_artist))

    operations, unresolved = plan_moves(albums, target, strategies)
    for album in unresolved:
        warning(f"Could not infer artist name for: {album.name}")

    if not operations:
        info("No valid albums to process.")
        return

    _show_plan(operations)

    if dry_run:
        info("Dry run: no files will be moved.")
        return

    if not assume_yes and not click.confirm(PROCEED_PROMPT, default=False):
        info("Operation cancelled.")
        return

    progress("Processing albums...")
    summary = OrganizeSummary(total=len(operations))
    for op in operations:
        backup_album(op.source, backup)
        progress(f"Moving: {op.album_name}")
        try:
            final = move_album(op)
        except MoveError as e:
            error(str(e))
            summary.failed += 1
            continue
        success(f"Moved: {op.album_name} -> {final}")
        summary.moved += 1

    info("")
    info(f"Done: {summary.moved} moved, {summary.failed} failed, {summary.total} total")
    sys.exit(summary.exit_code)
