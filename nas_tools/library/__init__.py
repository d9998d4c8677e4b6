"""Library organization: move completed downloads under artist folders."""

from nas_tools.library.artist import (
    DEFAULT_STRATEGIES,
    artist_from_folder_name,
    artist_from_metadata,
    infer_artist,
    prompt_strategy,
)
from nas_tools.library.organizer import (
    AlbumFolder,
    MoveOperation,
    OrganizeSummary,
    artist_directory,
    backup_album,
    bucket_for,
    move_album,
    plan_moves,
    scan_album_folders,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "AlbumFolder",
    "MoveOperation",
    "OrganizeSummary",
    "artist_directory",
    "artist_from_folder_name",
    "artist_from_metadata",
    "backup_album",
    "bucket_for",
    "infer_artist",
    "move_album",
    "plan_moves",
    "prompt_strategy",
    "scan_album_folders",
]
