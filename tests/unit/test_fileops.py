"""Unit tests for file operation helpers."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from nas_tools.utils.fileops import (
    list_dir_names,
    secure_atomic_write,
    secure_mkdir,
    unique_path,
)


class TestSecureMkdir:
    def test_creates_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "subdir"
        secure_mkdir(target)
        assert target.is_dir()

    def test_sets_700_permissions(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        secure_mkdir(target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o700

    def test_tightens_existing_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "loose"
        target.mkdir(mode=0o755)
        secure_mkdir(target)
        assert stat.S_IMODE(target.stat().st_mode) == 0o700


class TestSecureAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        secure_atomic_write(target, "hello world")
        assert target.read_text() == "hello world"

    def test_sets_600_permissions(self, tmp_path: Path) -> None:
        target = tmp_path / "config" / "config.toml"
        secure_atomic_write(target, "[paths]\n")
        assert stat.S_IMODE(target.stat().st_mode) == 0o600
        assert stat.S_IMODE(target.parent.stat().st_mode) == 0o700

    def test_no_partial_file_on_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "atomic.txt"
        secure_atomic_write(target, "original")

        def failing_fchmod(fd: int, mode: int) -> None:
            raise OSError("simulated failure")

        monkeypatch.setattr(os, "fchmod", failing_fchmod)
        with pytest.raises(OSError):
            secure_atomic_write(target, "should not appear")

        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["atomic.txt"]


class TestUniquePath:
    def test_free_path_unchanged(self, tmp_path: Path) -> None:
        assert unique_path(tmp_path / "cover.jpg") == tmp_path / "cover.jpg"

    def test_directory_name_with_dot(self, tmp_path: Path) -> None:
        (tmp_path / "Album 2.0").mkdir()
        assert unique_path(tmp_path / "Album 2.0") == tmp_path / "Album 2.0 (1)"

    def test_counter_skips_taken_names(self, tmp_path: Path) -> None:
        (tmp_path / "Album 2.0").mkdir()
        (tmp_path / "Album 2.0 (1)").mkdir()
        assert unique_path(tmp_path / "Album 2.0") == tmp_path / "Album 2.0 (2)"


def test_list_dir_names_sorted(tmp_path: Path) -> None:
    for name in ("b", "a", "c"):
        (tmp_path / name).touch()
    assert list_dir_names(tmp_path) == ["a", "b", "c"]


def test_list_dir_names_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        list_dir_names(tmp_path / "missing")
