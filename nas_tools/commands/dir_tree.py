"""dir-tree command: print a directory tree."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nas_tools.cli import Context, pass_context
from nas_tools.utils.output import console, error
from nas_tools.view.tree import DIR_ICON, TreeOptions, normalize_excludes, render_tree


@click.command("dir-tree")
@click.argument("path", required=False, default=".", type=click.Path(path_type=Path))
@click.argument("patterns", nargs=-1)
@click.option(
    "--max-depth",
    "-d",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum depth to descend (1 = top-level entries only).",
)
@click.option(
    "--show-hidden",
    "-H",
    is_flag=True,
    default=False,
    help="Include entries starting with a dot.",
)
@click.option(
    "--show-files",
    "-f",
    is_flag=True,
    default=False,
    help="Include files, not only directories.",
)
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Skip entries whose name contains PATTERN (repeatable).",
)
@pass_context
def cli(
    ctx: Context,
    path: Path,
    patterns: tuple[str, ...],
    max_depth: int | None,
    show_hidden: bool,
    show_files: bool,
    exclude: tuple[str, ...],
) -> None:
    """Print the directory tree below PATH (default: current directory).

    Extra arguments after PATH are treated as additional --exclude
    patterns.

    Examples:

    \b
      # Two levels of the library, folders only
      nas-tools dir-tree /volmain/Public/FLAC -d 2

    \b
      # Everything, skipping scans and logs
      nas-tools dir-tree . -f -H -e Scans -e .log
    """
    if not path.is_dir():
        error(f"Not a directory: {path}")
        sys.exit(1)

    options = TreeOptions(
        max_depth=max_depth,
        show_hidden=show_hidden,
        show_files=show_files,
        exclude=normalize_excludes(exclude + patterns),
    )
    lines = render_tree(path, options)

    console.print(f"{DIR_ICON} {path}", markup=False, highlight=False)
    if not lines:
        console.print("   (empty directory)", markup=False, highlight=False)
        return
    for line in lines:
        console.print(line, markup=False, highlight=False, soft_wrap=True)
