"""Cue sheet splitting: pair discovery, splitting and cleanup."""

from nas_tools.cue.cleanup import CleanupResult, promote_split
from nas_tools.cue.driver import CueSplitDriver, RunSummary, print_summary
from nas_tools.cue.scanner import (
    TEMP_SPLIT_DIR,
    CueAudioPair,
    ScriptOptions,
    scan_cue_audio_pairs,
)
from nas_tools.cue.splitter import (
    SplitJobResult,
    check_tools_available,
    require_tools,
    split_pair,
)

__all__ = [
    "TEMP_SPLIT_DIR",
    "CleanupResult",
    "CueAudioPair",
    "CueSplitDriver",
    "RunSummary",
    "ScriptOptions",
    "SplitJobResult",
    "check_tools_available",
    "print_summary",
    "promote_split",
    "require_tools",
    "scan_cue_audio_pairs",
    "split_pair",
]
