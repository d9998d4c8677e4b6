"""Move completed downloads into the artist-organized music library.

Library layout::

    <target>/<bucket>/<Artist>/<Album>

where ``<bucket>`` is one of the alphabetical ranges below, picked by the
artist's first letter. Artists not starting with a letter go directly under
``<target>``.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from nas_tools.exceptions import MoveError
from nas_tools.library.artist import ArtistStrategy, infer_artist
from nas_tools.utils.fileops import list_dir_names, unique_path

logger = logging.getLogger(__name__)

MUSIC_EXTENSIONS = (".flac", ".mp3", ".m4a", ".wav", ".ogg")

ALPHABETICAL_RANGES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("A-D", re.compile(r"^[A-D]", re.IGNORECASE)),
    ("E-F", re.compile(r"^[E-F]", re.IGNORECASE)),
    ("G-I", re.compile(r"^[G-I]", re.IGNORECASE)),
    ("J-M", re.compile(r"^[J-M]", re.IGNORECASE)),
    ("N-Q", re.compile(r"^[N-Q]", re.IGNORECASE)),
    ("R-T", re.compile(r"^[R-T]", re.IGNORECASE)),
    ("U-Z", re.compile(r"^[U-Z]", re.IGNORECASE)),
)


@dataclass
class AlbumFolder:
    """A download folder containing music files."""

    path: Path
    music_files: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class MoveOperation:
    """A planned album move."""

    source: Path
    target: Path
    artist: str
    is_new_artist: bool

    @property
    def album_name(self) -> str:
        return self.source.name


@dataclass
class OrganizeSummary:
    """Counts reported at the end of a move-completed run."""

    total: int = 0
    moved: int = 0
    failed: int = 0

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


def is_music_file(name: str) -> bool:
    return name.lower().endswith(MUSIC_EXTENSIONS)


def scan_album_folders(source_dir: Path) -> list[AlbumFolder]:
    """Find direct subfolders of ``source_dir`` holding music files.

    Unreadable folders are skipped; an unreadable source yields nothing.
    """
    try:
        names = list_dir_names(source_dir)
    except OSError as e:
        logger.error("Error scanning source directory: %s", e)
        return []

    albums: list[AlbumFolder] = []
    for name in names:
        folder = source_dir / name
        if not folder.is_dir():
            continue
        try:
            music_files = [f for f in list_dir_names(folder) if is_music_file(f)]
        except OSError as e:
            logger.debug("Cannot read %s: %s", folder, e)
            continue
        if music_files:
            albums.append(AlbumFolder(path=folder, music_files=music_files))
    return albums


def bucket_for(artist: str) -> str | None:
    """Return the alphabetical bucket for an artist, or None."""
    first = artist[:1]
    for name, pattern in ALPHABETICAL_RANGES:
        if pattern.match(first):
            return name
    return None


def find_existing_artist_dir(artist_dir: Path) -> Path | None:
    """Find an existing artist folder, matching the name case-insensitively."""
    if artist_dir.is_dir():
        return artist_dir
    parent = artist_dir.parent
    wanted = artist_dir.name.lower()
    try:
        names = list_dir_names(parent)
    except OSError:
        return None
    for name in names:
        if name.lower() == wanted and (parent / name).is_dir():
            return parent / name
    return None


def artist_directory(artist: str, target_dir: Path) -> tuple[Path, bool]:
    """Resolve where an artist's albums live.

    Returns:
        Tuple of (artist folder, is_new_artist). An existing folder whose
        name differs only in case is reused.
    """
    bucket = bucket_for(artist)
    base = target_dir / bucket if bucket else target_dir
    candidate = base / artist
    existing = find_existing_artist_dir(candidate)
    if existing is not None:
        return existing, False
    return candidate, True


def plan_moves(
    albums: Sequence[AlbumFolder],
    target_dir: Path,
    strategies: Sequence[ArtistStrategy],
) -> tuple[list[MoveOperation], list[AlbumFolder]]:
    """Infer artists and plan a move for every album.

    Returns:
        Tuple of (planned operations, albums with no inferable artist).
    """
    operations: list[MoveOperation] = []
    unresolved: list[AlbumFolder] = []
    for album in albums:
        artist = infer_artist(album, strategies)
        if not artist:
            unresolved.append(album)
            continue
        artist_dir, is_new = artist_directory(artist, target_dir)
        operations.append(
            MoveOperation(
                source=album.path,
                target=artist_dir / album.name,
                artist=artist,
                is_new_artist=is_new,
            )
        )
    return operations, unresolved


def backup_album(source: Path, backup_dir: Path) -> Path | None:
    """Copy an album folder into the backup directory.

    Best-effort: failures are logged and None is returned.
    """
    if not source.exists():
        logger.warning("Source no longer exists: %s", source.name)
        return None
    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        dest = unique_path(backup_dir / source.name)
        shutil.copytree(source, dest)
    except (OSError, shutil.Error) as e:
        logger.warning("Backup failed for %s: %s", source.name, e)
        return None
    logger.info("Backup: %s -> %s", source.name, dest)
    return dest


def move_album(operation: MoveOperation) -> Path:
    """Move an album folder to its library location.

    An existing album with the same name gets a numbered suffix.

    Returns:
        The final album path.

    Raises:
        MoveError: If the source is gone or the move fails.
    """
    source = operation.source
    if not source.exists():
        raise MoveError(source, "source no longer exists")

    final = unique_path(operation.target)
    if final != operation.target:
        logger.warning("Album already exists, using: %s", final.name)

    try:
        final.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(final))
    except (OSError, shutil.Error) as e:
        raise MoveError(source, str(e)) from e
    return final
