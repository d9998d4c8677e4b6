"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

    from nas_tools.config import Config


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    (temp_dir / "complete").mkdir()
    (temp_dir / "library").mkdir()
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[paths]
source_dir = "{temp_dir / 'complete'}"
target_dir = "{temp_dir / 'library'}"
backup_dir = "{temp_dir / 'backup'}"
download_dir = "{temp_dir / 'downloads'}"

[download]
retries = 1
timeout_ms = 5000

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def mock_config(temp_dir: Path) -> Config:
    """Create a Config object pointing into the temp directory."""
    from nas_tools.config import Config

    return Config(
        source_dir=temp_dir / "complete",
        target_dir=temp_dir / "library",
        backup_dir=temp_dir / "backup",
        download_dir=temp_dir / "downloads",
        retries=0,
        timeout_ms=1000,
        colored_output=False,
    )
