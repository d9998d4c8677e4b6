"""CUE sheet splitting engine.

Splits single-file CD rips into individual tracks with cuetools/shntool:
``cuebreakpoints`` computes the track boundaries and ``shnsplit`` cuts the
image at those offsets into a ``__temp_split`` folder next to the source.
Tracks are then tagged from the cue sheet with ``cuetag`` when available.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from nas_tools.cue.scanner import CueAudioPair
from nas_tools.exceptions import MissingToolError

logger = logging.getLogger(__name__)

# shnsplit output naming: "<track number>. <title>"
TRACK_NAME_FORMAT = "%n. %t"

# Source extension -> shnsplit output format
OUTPUT_FORMATS: dict[str, str] = {
    ".flac": "flac",
    ".wav": "wav",
}

# Formats cuetag knows how to tag
TAGGABLE_EXTENSIONS = {".flac"}

REQUIRED_TOOLS = ("cuebreakpoints", "shnsplit")
OPTIONAL_TOOLS = ("cuetag",)


@dataclass
class SplitJobResult:
    """Outcome of splitting one cue/audio pair."""

    pair: CueAudioPair
    output_files: list[Path] = field(default_factory=list)
    status: str = "ok"  # ok, error
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def utf8_env() -> dict[str, str]:
    """Environment for external tools with a UTF-8 locale forced.

    Non-ASCII track titles turn into mangled filenames under the C locale.
    """
    env = os.environ.copy()
    env["LC_ALL"] = "C.UTF-8"
    env["LANG"] = "C.UTF-8"
    return env


def check_tools_available(audio_suffixes: set[str] | None = None) -> tuple[list[str], list[str]]:
    """Check that required and optional external tools are available.

    Args:
        audio_suffixes: Lower-case source extensions about to be split.
            ``flac`` becomes required when FLAC sources are present, since
            shnsplit shells out to it for FLAC output.

    Returns:
        Tuple of (missing_required, missing_optional).
    """
    required = list(REQUIRED_TOOLS)
    if audio_suffixes is None or ".flac" in audio_suffixes:
        required.append("flac")

    missing_required = [tool for tool in required if shutil.which(tool) is None]
    missing_optional = [tool for tool in OPTIONAL_TOOLS if shutil.which(tool) is None]
    return missing_required, missing_optional


def output_format_for(pair: CueAudioPair) -> str:
    """Return the shnsplit output format matching the source image."""
    try:
        return OUTPUT_FORMATS[pair.audio_suffix]
    except KeyError:
        raise ValueError(f"Unsupported format: {pair.audio_suffix}") from None


def collect_output_files(temp_dir: Path, fmt: str) -> list[Path]:
    """List the split tracks shnsplit wrote into ``temp_dir``."""
    suffix = f".{fmt}"
    return sorted(
        f for f in temp_dir.iterdir() if f.is_file() and f.suffix.lower() == suffix
    )


def split_with_shnsplit(pair: CueAudioPair, fmt: str) -> None:
    """Run ``cuebreakpoints | shnsplit`` for one pair.

    Both processes run with ``cwd`` set to the pair's directory and file
    names relative to it, so the process-wide working directory is never
    touched.

    Raises:
        subprocess.CalledProcessError: If either tool exits non-zero.
        OSError: If a tool cannot be executed.
    """
    env = utf8_env()

    bp_cmd = ["cuebreakpoints", pair.cue_file]
    logger.debug("cuebreakpoints: %s (cwd=%s)", bp_cmd, pair.directory)
    breakpoints = subprocess.run(
        bp_cmd,
        check=True,
        capture_output=True,
        text=True,
        cwd=pair.directory,
        env=env,
    )

    cmd = [
        "shnsplit",
        "-f",
        pair.cue_file,
        "-o",
        fmt,
        "-t",
        TRACK_NAME_FORMAT,
        "-d",
        pair.temp_dir.name,
        pair.audio_file,
    ]
    logger.debug("shnsplit: %s (cwd=%s)", cmd, pair.directory)
    subprocess.run(
        cmd,
        input=breakpoints.stdout,
        check=True,
        capture_output=True,
        text=True,
        cwd=pair.directory,
        env=env,
    )


def tag_tracks(pair: CueAudioPair, track_files: list[Path]) -> bool:
    """Apply cue sheet metadata to split tracks with ``cuetag``.

    Tagging is best-effort: a missing tool or a failed run is logged as a
    warning and never fails the split.

    Returns:
        True if the tracks were tagged.
    """
    taggable = [f for f in track_files if f.suffix.lower() in TAGGABLE_EXTENSIONS]
    if not taggable:
        return False

    if shutil.which("cuetag") is None:
        logger.warning("cuetag not found, skipping metadata tagging.")
        return False

    cmd = ["cuetag", pair.cue_file] + [str(f.relative_to(pair.directory)) for f in taggable]
    logger.debug("cuetag: %s", cmd)
    try:
        subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
            cwd=pair.directory,
            env=utf8_env(),
        )
    except (subprocess.CalledProcessError, OSError) as e:
        logger.warning("Tagging failed for %s: %s", pair.cue_file, _error_text(e))
        return False
    return True


def _error_text(e: Exception) -> str:
    stderr = getattr(e, "stderr", None)
    if stderr:
        return str(stderr).strip()
    return str(e)


def split_pair(pair: CueAudioPair) -> SplitJobResult:
    """Split a cue/audio pair into per-track files.

    This is the main entry point for splitting. It:
    1. Creates the ``__temp_split`` output folder
    2. Splits with ``cuebreakpoints | shnsplit``
    3. Tags the produced tracks from the cue sheet (best-effort)

    Failures are reported in the result, not raised, and are never retried.

    Args:
        pair: The cue/audio pair to split.

    Returns:
        SplitJobResult with status and the produced track files.
    """
    result = SplitJobResult(pair=pair)

    try:
        fmt = output_format_for(pair)
        pair.temp_dir.mkdir(exist_ok=True)
        split_with_shnsplit(pair, fmt)
    except (subprocess.CalledProcessError, OSError, ValueError) as e:
        result.status = "error"
        result.error = f"Split failed: {_error_text(e)}"
        return result

    result.output_files = collect_output_files(pair.temp_dir, fmt)
    if not result.output_files:
        result.status = "error"
        result.error = f"Split produced no tracks in {pair.temp_dir}"
        return result

    tag_tracks(pair, result.output_files)

    result.status = "ok"
    return result


def require_tools(audio_suffixes: set[str]) -> list[str]:
    """Ensure the tools needed to split the given source formats exist.

    Returns:
        Missing optional tools.

    Raises:
        MissingToolError: If a required tool is not on PATH.
    """
    missing_required, missing_optional = check_tools_available(audio_suffixes)
    if missing_required:
        raise MissingToolError(missing_required)
    return missing_optional
