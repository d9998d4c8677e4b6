"""Artist name inference for album folders.

Inference is an ordered chain of strategies. Each takes an album folder
and returns an artist name or None; the first strategy with an answer wins.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import mutagen

if TYPE_CHECKING:
    from nas_tools.library.organizer import AlbumFolder

logger = logging.getLogger(__name__)

ArtistStrategy = Callable[["AlbumFolder"], "str | None"]

# "Artist - Album (Year)", "Artist / Album", "Artist_Album", "Artist – Album"
FOLDER_NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(.+?)\s*-\s*(.+?)(?:\s*\((\d{4})\))?$"),
    re.compile(r"^(.+?)\s*/\s*(.+?)$"),
    re.compile(r"^(.+?)\s*_\s*(.+?)$"),
    re.compile(r"^(.+?)\s*–\s*(.+?)$"),
)


def artist_from_folder_name(album: AlbumFolder) -> str | None:
    """Take the artist from an ``Artist - Album`` style folder name."""
    for pattern in FOLDER_NAME_PATTERNS:
        match = pattern.match(album.name)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def read_artist_tag(path: str) -> str | None:
    """Read the ``artist`` tag of an audio file, or None if unreadable."""
    try:
        audio = mutagen.File(path, easy=True)
    except (mutagen.MutagenError, OSError) as e:
        logger.debug("Cannot read tags from %s: %s", path, e)
        return None
    if audio is None or audio.tags is None:
        return None
    values = audio.tags.get("artist") or []
    for value in values:
        if str(value).strip():
            return str(value).strip()
    return None


def artist_from_metadata(album: AlbumFolder) -> str | None:
    """Use the artist tag of the first music file that has one."""
    for music_file in album.music_files:
        artist = read_artist_tag(str(album.path / music_file))
        if artist:
            return artist
    return None


def artist_suggestions(folder_name: str) -> list[str]:
    """Candidate artist names for a prompt, most likely first."""
    suggestions = [folder_name]
    for pattern in FOLDER_NAME_PATTERNS:
        match = pattern.match(folder_name)
        if match and match.group(1):
            suggestions.append(match.group(1).strip())
    # Drop empties and duplicates, keep order
    return list(dict.fromkeys(s for s in suggestions if s.strip()))


def prompt_strategy(prompt: Callable[[str, str], str]) -> ArtistStrategy:
    """Build a strategy that asks the user for the artist name.

    Args:
        prompt: Called with (question, default) and returns the answer.
    """

    def ask(album: AlbumFolder) -> str | None:
        suggestions = artist_suggestions(album.name)
        default = suggestions[0] if suggestions else ""
        answer = prompt(f"Could not infer artist name for folder: {album.name}", default)
        return answer.strip() or None

    return ask


DEFAULT_STRATEGIES: tuple[ArtistStrategy, ...] = (
    artist_from_folder_name,
    artist_from_metadata,
)


def infer_artist(album: AlbumFolder, strategies: Sequence[ArtistStrategy]) -> str | None:
    """Run strategies in order and return the first artist found."""
    for strategy in strategies:
        artist = strategy(album)
        if artist:
            logger.debug("%s: artist %r via %s", album.name, artist, strategy.__name__)
            return artist
    return None
