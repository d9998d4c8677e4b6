"""Promote split tracks out of ``__temp_split``.

Cleanup is a sequence of independently re-runnable steps:

1. move every track (and cue) out of the temp folder, never overwriting;
2. only if nothing is left to move, delete the original cue and image;
3. remove the temp folder once it is empty.

A run interrupted at any point can be completed by running it again: files
already moved are not in the temp folder anymore, originals already deleted
are reported as such, and a missing temp folder is fine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from nas_tools.cue.scanner import CueAudioPair, pending_split_files
from nas_tools.exceptions import CleanupError

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """What a promote run changed on disk."""

    moved: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    already_missing: list[Path] = field(default_factory=list)
    temp_dir_removed: bool = False


def move_split_tracks(pair: CueAudioPair, result: CleanupResult) -> dict[str, str]:
    """Move split tracks into the pair's directory.

    Every file is attempted; an existing destination is a collision and is
    left alone.

    Returns:
        Mapping of file name to failure reason, empty when all moved.
    """
    failures: dict[str, str] = {}
    for src in pending_split_files(pair.temp_dir):
        dest = pair.directory / src.name
        if dest.exists():
            failures[src.name] = f"destination already exists: {dest}"
            continue
        try:
            src.rename(dest)
        except OSError as e:
            failures[src.name] = str(e)
            continue
        logger.debug("Moved %s -> %s", src, dest)
        result.moved.append(dest)
    return failures


def remove_originals(pair: CueAudioPair, result: CleanupResult) -> None:
    """Delete the original cue sheet and audio image.

    A file that is already gone counts as handled.

    Raises:
        OSError: If an existing original cannot be deleted.
    """
    for path in (pair.cue_path, pair.audio_path):
        try:
            path.unlink()
        except FileNotFoundError:
            logger.info("Original already removed: %s", path)
            result.already_missing.append(path)
            continue
        logger.debug("Removed original %s", path)
        result.removed.append(path)


def remove_temp_dir(pair: CueAudioPair) -> bool:
    """Remove the temp folder if it is empty.

    Returns:
        True if the folder is gone afterwards.
    """
    temp_dir = pair.temp_dir
    if not temp_dir.exists():
        return True
    leftovers = sorted(p.name for p in temp_dir.iterdir())
    if leftovers:
        logger.warning(
            "Leaving %s in place, it still contains: %s", temp_dir, ", ".join(leftovers)
        )
        return False
    temp_dir.rmdir()
    return True


def promote_split(pair: CueAudioPair) -> CleanupResult:
    """Make a successful split permanent.

    Args:
        pair: The pair whose split output sits in ``__temp_split``.

    Returns:
        CleanupResult describing the moves and deletions performed.

    Raises:
        CleanupError: If any track could not be moved. Originals are kept.
        OSError: If an original or the temp folder cannot be removed.
    """
    result = CleanupResult()

    originals_present = pair.cue_path.exists() or pair.audio_path.exists()
    if not pair.temp_dir.exists() and originals_present:
        raise CleanupError(pair, {pair.temp_dir.name: "no split output to promote"})

    failures = move_split_tracks(pair, result)
    if failures:
        raise CleanupError(pair, failures)

    remove_originals(pair, result)
    result.temp_dir_removed = remove_temp_dir(pair)
    return result
