"""Exception hierarchy for nas-tools."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nas_tools.cue.scanner import CueAudioPair


class NasToolsError(Exception):
    """Base exception for all nas-tools errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all nas-tools errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(NasToolsError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Dependency Errors
class MissingToolError(NasToolsError):
    """Required external tools are not on PATH."""

    def __init__(self, tools: list[str]) -> None:
        self.tools = tools
        super().__init__(f"Missing required tools: {', '.join(tools)}")


# Cue Split Errors
class SplitError(NasToolsError):
    """Splitting a cue/audio pair failed."""

    def __init__(self, pair: CueAudioPair, reason: str) -> None:
        self.pair = pair
        self.reason = reason
        super().__init__(f"Failed to split {pair.cue_file}: {reason}")


class CleanupError(NasToolsError):
    """Promoting split tracks out of the temp directory failed.

    Raised before any original file is deleted, so the directory can be
    inspected and cleanup re-run.
    """

    def __init__(self, pair: CueAudioPair, failures: dict[str, str]) -> None:
        self.pair = pair
        self.failures = failures
        details = "; ".join(f"{name}: {reason}" for name, reason in failures.items())
        super().__init__(f"Could not move split tracks for {pair.cue_file}: {details}")


# Library Errors
class LibraryError(NasToolsError):
    """Library organization errors."""

    pass


class MoveError(LibraryError):
    """Failed to move an album folder into the library."""

    def __init__(self, source: Path, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to move {source.name}: {reason}")


# Network Errors
class DownloadError(NasToolsError):
    """Download failed after all retries."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Download failed for {url}: {reason}")
