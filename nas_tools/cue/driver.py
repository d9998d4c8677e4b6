"""Interactive driver for the fix-unsplit-cue pipeline.

Scans for pairs, lists them, asks before each step and stops at the first
failed pair. A systemic failure such as a broken tool would repeat for every
remaining pair, so the operator fixes the environment and re-runs instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from nas_tools.cue.cleanup import promote_split
from nas_tools.cue.scanner import (
    TEMP_SPLIT_DIR,
    CueAudioPair,
    ScriptOptions,
    pending_split_files,
    scan_cue_audio_pairs,
)
from nas_tools.cue.splitter import split_pair
from nas_tools.exceptions import CleanupError, NasToolsError, SplitError
from nas_tools.utils.fileops import list_dir_names
from nas_tools.utils.output import error, info, print_file, print_path, progress, success

logger = logging.getLogger(__name__)

PROCEED_PROMPT = "Do you want to proceed with splitting these files?"
CLEANUP_PROMPT = (
    "Do you want to cleanup original files and move split tracks to original directory?"
)

ConfirmFn = Callable[[str], bool]


@dataclass
class RunSummary:
    """Counts reported at the end of a run."""

    total: int = 0
    processed: int = 0
    failed: int = 0
    skipped: int = 0
    not_attempted: int = 0

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


class CueSplitDriver:
    """Runs scan, confirmation, split and cleanup for one invocation.

    Args:
        options: Run-wide options.
        confirm: Asks a yes/no question. Not called when
            ``options.assume_yes`` is set.
    """

    def __init__(self, options: ScriptOptions, confirm: ConfirmFn) -> None:
        self.options = options
        self._confirm = confirm

    def ask(self, question: str) -> bool:
        if self.options.assume_yes:
            return True
        return self._confirm(question)

    def scan(self, root: Path) -> list[CueAudioPair]:
        info(f"Scanning '{root}' for unsplit cue/audio pairs...")
        if self.options.ignore_failed:
            info(f"Ignoring directories with {TEMP_SPLIT_DIR} folders")
        return scan_cue_audio_pairs(root, self.options)

    def list_pairs(self, pairs: list[CueAudioPair]) -> None:
        info(f"Found {len(pairs)} unsplit cue/audio pair(s):")
        for pair in pairs:
            print_path(str(pair.directory), prefix="Directory:")
            print_file(f"CUE: {pair.cue_file}")
            print_file(f"Audio: {pair.audio_file}", style="music")

    def show_contents(self, pair: CueAudioPair) -> None:
        print_path(str(pair.directory), prefix="Contents of")
        try:
            names = list_dir_names(pair.directory)
        except OSError as e:
            logger.warning("Cannot list %s: %s", pair.directory, e)
            return
        for name in names:
            print_file(f"- {name}")

    def process_pair(self, pair: CueAudioPair) -> None:
        """Split one pair and, once confirmed, promote the result.

        A pair found mid-cleanup is not split again; its remaining tracks
        go straight to the cleanup prompt.

        Raises:
            SplitError: If splitting failed.
            CleanupError: If split tracks could not be moved.
            OSError: If originals or the temp folder could not be removed.
        """
        progress(f"Processing: {pair.cue_file}")
        if pair.resume:
            pending = pending_split_files(pair.temp_dir)
            info(f"Resuming cleanup of {len(pending)} split track(s) in {TEMP_SPLIT_DIR}")
        else:
            result = split_pair(pair)
            if not result.ok:
                raise SplitError(pair, result.error or "unknown error")
            info(
                f"Split {pair.audio_file} -> {len(result.output_files)} tracks in {TEMP_SPLIT_DIR}"
            )

        if self.ask(CLEANUP_PROMPT):
            cleanup = promote_split(pair)
            logger.info(
                "Moved %d track(s), removed %d original(s)",
                len(cleanup.moved),
                len(cleanup.removed),
            )
        else:
            info(f"Split tracks left in {pair.temp_dir}")

    def run(self, root: Path) -> RunSummary:
        """Drive the whole pipeline for ``root``."""
        return self.run_pairs(self.scan(root))

    def run_pairs(self, pairs: list[CueAudioPair]) -> RunSummary:
        """List, confirm and process already scanned pairs."""
        summary = RunSummary(total=len(pairs))

        if not pairs:
            info("No unsplit cue/audio pairs found.")
            return summary

        self.list_pairs(pairs)

        if self.options.dry_run:
            info("Dry run: no files were split.")
            summary.not_attempted = len(pairs)
            return summary

        if not self.ask(PROCEED_PROMPT):
            info("Operation cancelled.")
            summary.not_attempted = len(pairs)
            return summary

        progress("Processing files...")

        for index, pair in enumerate(pairs):
            self.show_contents(pair)

            if not self.ask(f"Do you want to process {pair.cue_file}?"):
                info(f"Skipped: {pair.cue_file}")
                summary.skipped += 1
                continue

            try:
                self.process_pair(pair)
            except (SplitError, CleanupError) as e:
                error(str(e))
                summary.failed += 1
            except (NasToolsError, OSError) as e:
                error(f"Failed to process {pair.cue_file}: {e}")
                summary.failed += 1
            else:
                success(f"Successfully processed: {pair.cue_file}")
                summary.processed += 1
                continue

            error("Stopping processing due to failure.")
            summary.not_attempted = len(pairs) - index - 1
            break

        return summary


def print_summary(summary: RunSummary) -> None:
    """Print the end-of-run counts."""
    info("")
    info("Summary:")
    info(f"  Processed: {summary.processed}")
    info(f"  Failed: {summary.failed}")
    info(f"  Skipped: {summary.skipped}")
    if summary.not_attempted:
        info(f"  Not attempted: {summary.not_attempted}")
    info(f"  Total: {summary.total}")
