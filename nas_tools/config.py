"""Configuration management for nas-tools."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nas_tools.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

DEFAULT_SOURCE_DIR = Path("/volmain/Download/Transmission/complete")
DEFAULT_TARGET_DIR = Path("/volmain/Public/FLAC")
DEFAULT_BACKUP_DIR = Path("/volmain/Download/Transmission/backup")
DEFAULT_DOWNLOAD_DIR = Path("/volmain/Download/ignore")
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
DEFAULT_RETRIES = 3
DEFAULT_TIMEOUT_MS = 30000


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "nas-tools" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        source_dir: Directory holding completed downloads (move-completed).
        target_dir: Root of the artist-organized music library.
        backup_dir: Where album folders are copied before being moved.
        download_dir: Default destination for the download command.
        user_agent: User-Agent header sent by the download command.
        retries: Retries after the first failed download attempt.
        timeout_ms: Per-attempt download timeout in milliseconds.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    source_dir: Path = DEFAULT_SOURCE_DIR
    target_dir: Path = DEFAULT_TARGET_DIR
    backup_dir: Path = DEFAULT_BACKUP_DIR
    download_dir: Path = DEFAULT_DOWNLOAD_DIR
    user_agent: str = DEFAULT_USER_AGENT
    retries: int = DEFAULT_RETRIES
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    colored_output: bool = True
    config_path: Path | None = field(default=None)

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        # Expand user paths
        self.source_dir = self.source_dir.expanduser()
        self.target_dir = self.target_dir.expanduser()
        self.backup_dir = self.backup_dir.expanduser()
        self.download_dir = self.download_dir.expanduser()

        if self.retries < 0:
            raise ConfigValidationError("download.retries", self.retries, "must be >= 0")
        if self.timeout_ms <= 0:
            raise ConfigValidationError("download.timeout_ms", self.timeout_ms, "must be > 0")

        # Missing library paths are warnings: the NAS volume may not be mounted yet
        if not self.source_dir.exists():
            warnings.append(f"Source directory not found: {self.source_dir}")
        if not self.target_dir.exists():
            warnings.append(f"Library directory not found: {self.target_dir}")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: nas-tools init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_path(section: dict[str, Any], section_name: str, key: str) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        raise ConfigValidationError(f"{section_name}.{key}", value, "must be a string path")
    return Path(value)


def _parse_int(section: dict[str, Any], section_name: str, key: str) -> int | None:
    if key not in section:
        return None
    value = section[key]
    # bool is a subclass of int; reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(f"{section_name}.{key}", value, "must be an integer")
    return value


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [paths] section
    paths = data.get("paths", {})
    for key in ("source_dir", "target_dir", "backup_dir", "download_dir"):
        value = _parse_path(paths, "paths", key)
        if value is not None:
            setattr(config, key, value)

    # Parse [download] section
    download = data.get("download", {})
    if "user_agent" in download:
        value = download["user_agent"]
        if not isinstance(value, str) or not value:
            raise ConfigValidationError(
                "download.user_agent", value, "must be a non-empty string"
            )
        config.user_agent = value

    retries = _parse_int(download, "download", "retries")
    if retries is not None:
        config.retries = retries

    timeout_ms = _parse_int(download, "download", "timeout_ms")
    if timeout_ms is not None:
        config.timeout_ms = timeout_ms

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config

