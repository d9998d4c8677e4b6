"""Cue/audio pair discovery.

Walks a directory tree looking for single-file CD rips: a ``.cue`` sheet
next to a ``.flac`` or ``.wav`` image with the same base name. Directories
that already hold split tracks are not offered again, except when a
cleanup was interrupted halfway and ``__temp_split`` still holds tracks.
With ``--ignore-failed``, directories carrying a ``__temp_split`` folder
from an earlier run are skipped as well.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from nas_tools.utils.fileops import list_dir_names

logger = logging.getLogger(__name__)

# Name of the per-directory split output folder
TEMP_SPLIT_DIR = "__temp_split"

CUE_EXTENSION = ".cue"

# Pairing precedence: a FLAC image is preferred over a WAV with the same stem
AUDIO_EXTENSIONS: tuple[str, ...] = (".flac", ".wav")

# Files worth promoting out of the temp folder
PROMOTE_EXTENSIONS = {".flac", ".wav", ".cue"}


@dataclass(frozen=True)
class CueAudioPair:
    """One candidate split job: a cue sheet and its audio image."""

    directory: Path
    cue_file: str
    audio_file: str
    # Split output is already waiting in the temp folder from an interrupted cleanup
    resume: bool = False

    @property
    def cue_path(self) -> Path:
        return self.directory / self.cue_file

    @property
    def audio_path(self) -> Path:
        return self.directory / self.audio_file

    @property
    def temp_dir(self) -> Path:
        return self.directory / TEMP_SPLIT_DIR

    @property
    def audio_suffix(self) -> str:
        return Path(self.audio_file).suffix.lower()


@dataclass(frozen=True)
class ScriptOptions:
    """Run-wide options for one fix-unsplit-cue invocation."""

    ignore_failed: bool = False
    assume_yes: bool = False
    dry_run: bool = False


def is_cue_file(name: str) -> bool:
    return name.lower().endswith(CUE_EXTENSION)


def is_audio_file(name: str) -> bool:
    return name.lower().endswith(AUDIO_EXTENSIONS)


def _stem(name: str) -> str:
    """Strip the final extension, keeping the original case of the stem."""
    return os.path.splitext(name)[0]


def _sort_audio(audio_files: list[str]) -> list[str]:
    """Order audio files by extension precedence, then by name."""

    def key(name: str) -> tuple[int, str]:
        suffix = os.path.splitext(name)[1].lower()
        return (AUDIO_EXTENSIONS.index(suffix), name)

    return sorted(audio_files, key=key)


def pending_split_files(temp_dir: Path) -> list[Path]:
    """List split output still waiting in ``temp_dir`` to be promoted."""
    if not temp_dir.is_dir():
        return []
    return sorted(
        f for f in temp_dir.iterdir() if f.is_file() and f.suffix.lower() in PROMOTE_EXTENSIONS
    )


def find_pairs_in_directory(directory: Path, names: list[str]) -> list[CueAudioPair]:
    """Match cue sheets to audio images among the entries of one directory.

    Args:
        directory: Directory the entries belong to.
        names: Entry names of ``directory``.

    Returns:
        Pairs found. Empty if the directory already holds split tracks,
        i.e. audio files whose stem matches no cue sheet, unless more split
        tracks are still waiting in ``__temp_split``. Such pairs are
        returned with ``resume`` set so their cleanup can be finished.
    """
    cue_files = sorted(n for n in names if is_cue_file(n))
    audio_files = _sort_audio([n for n in names if is_audio_file(n)])
    if not cue_files or not audio_files:
        return []

    pairs: list[CueAudioPair] = []
    for cue_file in cue_files:
        cue_stem = _stem(cue_file)
        for audio_file in audio_files:
            if _stem(audio_file) != cue_stem:
                continue
            # Entries may vanish between listing and pairing
            if not (directory / cue_file).is_file() or not (directory / audio_file).is_file():
                logger.debug("Pair disappeared during scan: %s / %s", cue_file, audio_file)
                break
            pairs.append(CueAudioPair(directory, cue_file, audio_file))
            break

    # Audio sharing a stem with a cue sheet is an image, not a split track
    cue_stems = {_stem(c) for c in cue_files}
    leftovers = [a for a in audio_files if _stem(a) not in cue_stems]
    if pairs and leftovers:
        if TEMP_SPLIT_DIR in names and pending_split_files(directory / TEMP_SPLIT_DIR):
            logger.info("Found interrupted cleanup in %s", directory)
            return [replace(pair, resume=True) for pair in pairs]
        logger.info(
            "Skipping %s: already contains %d split track(s)", directory, len(leftovers)
        )
        return []

    return pairs


def _scan_directory(directory: Path, options: ScriptOptions, found: list[CueAudioPair]) -> None:
    try:
        names = list_dir_names(directory)
    except OSError as e:
        logger.debug("Cannot read %s: %s", directory, e)
        return

    if options.ignore_failed and TEMP_SPLIT_DIR in names:
        logger.info("Skipping directory with %s: %s", TEMP_SPLIT_DIR, directory)
    else:
        found.extend(find_pairs_in_directory(directory, names))

    for name in names:
        if name == TEMP_SPLIT_DIR:
            continue
        child = directory / name
        # Symlinked directories are not followed; the library is a plain tree
        if child.is_dir() and not child.is_symlink():
            _scan_directory(child, options, found)


def scan_cue_audio_pairs(root: Path, options: ScriptOptions) -> list[CueAudioPair]:
    """Recursively find unsplit cue/audio pairs below ``root``.

    Unreadable subdirectories are skipped. An unreadable root is logged
    once and yields no pairs.

    Args:
        root: Directory to scan, included in the scan itself.
        options: Run options; ``ignore_failed`` skips directories holding
            a ``__temp_split`` folder.

    Returns:
        Pairs in depth-first, name-sorted order.
    """
    if not root.is_dir():
        logger.warning("Cannot scan %s: not a readable directory", root)
        return []
    try:
        list_dir_names(root)
    except OSError as e:
        logger.warning("Error scanning directories: %s", e)
        return []

    found: list[CueAudioPair] = []
    _scan_directory(root, options, found)
    return found
