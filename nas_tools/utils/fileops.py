"""File operation helpers: secure writes for config, collision-free paths."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def secure_mkdir(path: Path) -> None:
    """Create directory with 0o700 permissions (owner-only access).

    If the directory already exists, its permissions are tightened to 0o700.
    Parent directories are created as needed.
    """
    path.mkdir(parents=True, exist_ok=True)
    path.chmod(0o700)


def secure_atomic_write(path: Path, content: str) -> None:
    """Write content to *path* atomically with 0o600 permissions.

    Creates the parent directory with 0o700 if it doesn't exist.
    Uses a temporary file in the same directory and an atomic rename
    so readers never see a partially-written file.
    """
    secure_mkdir(path.parent)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".tmp")
    try:
        os.fchmod(fd, 0o600)
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise


def unique_path(path: Path) -> Path:
    """Return *path*, or the first free ``name (N)`` variant next to it.

    The counter goes after the whole name, so an album folder called
    ``Album 2.0`` becomes ``Album 2.0 (1)``.
    """
    if not path.exists():
        return path
    counter = 1
    while True:
        candidate = path.with_name(f"{path.name} ({counter})")
        if not candidate.exists():
            return candidate
        counter += 1


def list_dir_names(path: Path) -> list[str]:
    """Return the sorted entry names of a directory.

    Raises:
        OSError: If the directory cannot be read.
    """
    return sorted(os.listdir(path))
