"""Directory tree rendering with box-drawing prefixes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from nas_tools.utils.fileops import list_dir_names

logger = logging.getLogger(__name__)

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

DIR_ICON = "📁"
FILE_ICON = "📄"


@dataclass(frozen=True)
class TreeOptions:
    """Rendering options.

    Attributes:
        max_depth: Levels to descend, None for unlimited. 1 shows only
            the top-level entries.
        show_hidden: Include dot entries.
        show_files: Include files, not just directories.
        exclude: Entries whose name contains any of these are omitted.
    """

    max_depth: int | None = None
    show_hidden: bool = False
    show_files: bool = False
    exclude: tuple[str, ...] = field(default_factory=tuple)


def _visible_entries(directory: Path, options: TreeOptions) -> list[Path]:
    entries: list[Path] = []
    for name in list_dir_names(directory):
        if not options.show_hidden and name.startswith("."):
            continue
        if any(pattern in name for pattern in options.exclude):
            continue
        path = directory / name
        if not options.show_files and not path.is_dir():
            continue
        entries.append(path)
    return entries


def _label(path: Path, options: TreeOptions) -> str:
    # The icon slot stays in the line, empty, when files are hidden
    icon = ""
    if options.show_files:
        icon = DIR_ICON if path.is_dir() else FILE_ICON
    return f"{icon} {path.name}"


def _render(
    directory: Path,
    options: TreeOptions,
    prefix: str,
    depth: int,
    lines: list[str],
) -> None:
    try:
        entries = _visible_entries(directory, options)
    except OSError as e:
        logger.warning("Cannot read %s: %s", directory, e)
        return

    for index, path in enumerate(entries):
        last = index == len(entries) - 1
        lines.append(f"{prefix}{LAST_BRANCH if last else BRANCH}{_label(path, options)}")

        # Symlinked directories are listed but not descended into
        if path.is_dir() and not path.is_symlink():
            if options.max_depth is None or depth < options.max_depth:
                _render(path, options, prefix + (SPACE if last else PIPE), depth + 1, lines)


def render_tree(path: Path, options: TreeOptions | None = None) -> list[str]:
    """Render the tree below ``path`` as a list of lines.

    The root itself is not included.
    """
    lines: list[str] = []
    _render(path, options or TreeOptions(), "", 1, lines)
    return lines


def normalize_excludes(patterns: Sequence[str]) -> tuple[str, ...]:
    """Drop empty patterns and duplicates, keeping order."""
    return tuple(dict.fromkeys(p for p in patterns if p))
