"""Unit tests for the interactive fix-unsplit-cue driver."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock, patch

from nas_tools.cue.cleanup import CleanupResult
from nas_tools.cue.driver import CLEANUP_PROMPT, PROCEED_PROMPT, CueSplitDriver, RunSummary
from nas_tools.cue.scanner import CueAudioPair, ScriptOptions
from nas_tools.cue.splitter import SplitJobResult
from nas_tools.exceptions import CleanupError


def _make_tree(root: Path, *albums: str) -> list[CueAudioPair]:
    pairs = []
    for album in albums:
        directory = root / album
        directory.mkdir(parents=True)
        (directory / f"{album}.cue").write_text("cue")
        (directory / f"{album}.flac").write_bytes(b"image")
        pairs.append(CueAudioPair(directory, f"{album}.cue", f"{album}.flac"))
    return pairs


def _ok(pair: CueAudioPair) -> SplitJobResult:
    return SplitJobResult(pair=pair, output_files=[pair.temp_dir / "01. One.flac"])


def _failed(pair: CueAudioPair) -> SplitJobResult:
    return SplitJobResult(pair=pair, status="error", error="Split failed: boom")


class Answers:
    """Scripted confirm callback recording the questions asked."""

    def __init__(self, default: bool = True, **overrides: bool) -> None:
        self.default = default
        self.overrides = overrides
        self.asked: list[str] = []

    def __call__(self, question: str) -> bool:
        self.asked.append(question)
        for key, value in self.overrides.items():
            if key in question:
                return value
        return self.default


def test_no_pairs(tmp_path: Path) -> None:
    answers = Answers()
    summary = CueSplitDriver(ScriptOptions(), answers).run(tmp_path)

    assert summary == RunSummary()
    assert answers.asked == []


def test_all_pairs_processed(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a", "b")
    answers = Answers()

    with (
        patch("nas_tools.cue.driver.split_pair", side_effect=_ok) as mock_split,
        patch("nas_tools.cue.driver.promote_split", return_value=CleanupResult()) as mock_promote,
    ):
        summary = CueSplitDriver(ScriptOptions(), answers).run(tmp_path)

    assert summary.total == 2
    assert summary.processed == 2
    assert summary.exit_code == 0
    assert mock_split.call_count == 2
    assert mock_promote.call_count == 2
    assert answers.asked[0] == PROCEED_PROMPT
    assert answers.asked.count(CLEANUP_PROMPT) == 2


def test_declined_proceed_cancels(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a")
    answers = Answers(default=False)

    with patch("nas_tools.cue.driver.split_pair") as mock_split:
        summary = CueSplitDriver(ScriptOptions(), answers).run(tmp_path)

    mock_split.assert_not_called()
    assert summary.processed == 0
    assert summary.not_attempted == 1
    assert summary.exit_code == 0


def test_declined_pair_is_skipped(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a", "b")
    answers = Answers(**{"process a.cue": False})

    with (
        patch("nas_tools.cue.driver.split_pair", side_effect=_ok) as mock_split,
        patch("nas_tools.cue.driver.promote_split", return_value=CleanupResult()),
    ):
        summary = CueSplitDriver(ScriptOptions(), answers).run(tmp_path)

    assert summary.skipped == 1
    assert summary.processed == 1
    assert mock_split.call_args.args[0].cue_file == "b.cue"


def test_split_failure_stops_run(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a", "b", "c")

    with (
        patch("nas_tools.cue.driver.split_pair", side_effect=_failed) as mock_split,
        patch("nas_tools.cue.driver.promote_split") as mock_promote,
    ):
        summary = CueSplitDriver(ScriptOptions(), Answers()).run(tmp_path)

    assert mock_split.call_count == 1
    mock_promote.assert_not_called()
    assert summary.failed == 1
    assert summary.not_attempted == 2
    assert summary.exit_code == 1


def test_cleanup_failure_stops_run(tmp_path: Path) -> None:
    pairs = _make_tree(tmp_path, "a", "b")
    error = CleanupError(pairs[0], {"01. One.flac": "destination already exists"})

    with (
        patch("nas_tools.cue.driver.split_pair", side_effect=_ok),
        patch("nas_tools.cue.driver.promote_split", side_effect=error),
    ):
        summary = CueSplitDriver(ScriptOptions(), Answers()).run(tmp_path)

    assert summary.failed == 1
    assert summary.processed == 0
    assert summary.not_attempted == 1


def test_declined_cleanup_counts_as_processed(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a")
    answers = Answers(**{"cleanup": False})

    with (
        patch("nas_tools.cue.driver.split_pair", side_effect=_ok),
        patch("nas_tools.cue.driver.promote_split") as mock_promote,
    ):
        summary = CueSplitDriver(ScriptOptions(), answers).run(tmp_path)

    mock_promote.assert_not_called()
    assert summary.processed == 1


def test_assume_yes_never_prompts(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a")
    confirm = MagicMock()

    with (
        patch("nas_tools.cue.driver.split_pair", side_effect=_ok),
        patch("nas_tools.cue.driver.promote_split", return_value=CleanupResult()),
    ):
        summary = CueSplitDriver(ScriptOptions(assume_yes=True), confirm).run(tmp_path)

    confirm.assert_not_called()
    assert summary.processed == 1


def test_dry_run_splits_nothing(tmp_path: Path) -> None:
    _make_tree(tmp_path, "a")
    confirm = MagicMock()

    with patch("nas_tools.cue.driver.split_pair") as mock_split:
        summary = CueSplitDriver(ScriptOptions(dry_run=True), confirm).run(tmp_path)

    mock_split.assert_not_called()
    confirm.assert_not_called()
    assert summary.not_attempted == 1


def test_resumed_pair_is_not_split_again(tmp_path: Path) -> None:
    (pair,) = _make_tree(tmp_path, "a")
    (pair.directory / "01. One.flac").write_bytes(b"track 1")
    pair.temp_dir.mkdir()
    (pair.temp_dir / "02. Two.flac").write_bytes(b"track 2")
    answers = Answers()

    with (
        patch("nas_tools.cue.driver.split_pair") as mock_split,
        patch("nas_tools.cue.driver.promote_split", return_value=CleanupResult()) as mock_promote,
    ):
        summary = CueSplitDriver(ScriptOptions(), answers).run(tmp_path)

    mock_split.assert_not_called()
    mock_promote.assert_called_once_with(replace(pair, resume=True))
    assert CLEANUP_PROMPT in answers.asked
    assert summary.processed == 1
