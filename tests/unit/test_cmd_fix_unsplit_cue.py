"""Unit tests for the fix-unsplit-cue CLI command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from nas_tools.commands.fix_unsplit_cue import EXIT_MISSING_DEPS, cli
from nas_tools.cue.cleanup import CleanupResult
from nas_tools.cue.splitter import SplitJobResult
from nas_tools.exceptions import MissingToolError


def _album(root: Path, name: str = "album") -> Path:
    directory = root / name
    directory.mkdir(parents=True)
    (directory / f"{name}.cue").write_text("cue")
    (directory / f"{name}.flac").write_bytes(b"image")
    return directory


def test_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "--ignore-failed" in result.output
    assert "--yes" in result.output
    assert "--dry-run" in result.output


def test_missing_folder_is_usage_error(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, [str(tmp_path / "missing")])
    assert result.exit_code == 2


@patch("nas_tools.commands.fix_unsplit_cue.require_tools")
def test_nothing_found_skips_tool_check(mock_check: MagicMock, tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, [str(tmp_path)])
    assert result.exit_code == 0
    assert "No unsplit" in result.output
    mock_check.assert_not_called()


@patch("nas_tools.commands.fix_unsplit_cue.require_tools")
def test_missing_tools_exit_2(mock_check: MagicMock, tmp_path: Path) -> None:
    _album(tmp_path)
    mock_check.side_effect = MissingToolError(["shnsplit"])
    runner = CliRunner()
    result = runner.invoke(cli, ["-y", str(tmp_path)])
    assert result.exit_code == EXIT_MISSING_DEPS
    assert "shnsplit" in result.output


@patch("nas_tools.commands.fix_unsplit_cue.require_tools")
def test_dry_run_lists_pairs(mock_check: MagicMock, tmp_path: Path) -> None:
    _album(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["--dry-run", str(tmp_path)])
    assert result.exit_code == 0
    assert "album.cue" in result.output
    assert "Dry run" in result.output
    mock_check.assert_not_called()


@patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[])
def test_cancel_at_first_prompt(mock_check: MagicMock, tmp_path: Path) -> None:
    _album(tmp_path)
    runner = CliRunner()
    with patch("nas_tools.cue.driver.split_pair") as mock_split:
        result = runner.invoke(cli, [str(tmp_path)], input="n\n")
    assert result.exit_code == 0
    assert "cancelled" in result.output
    mock_split.assert_not_called()


@patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[])
def test_yes_processes_everything(mock_check: MagicMock, tmp_path: Path) -> None:
    _album(tmp_path, "a")
    _album(tmp_path, "b")
    runner = CliRunner()
    with (
        patch(
            "nas_tools.cue.driver.split_pair",
            side_effect=lambda pair: SplitJobResult(pair, [pair.temp_dir / "01. X.flac"]),
        ),
        patch("nas_tools.cue.driver.promote_split", return_value=CleanupResult()),
    ):
        result = runner.invoke(cli, ["--yes", str(tmp_path)])
    assert result.exit_code == 0
    assert "Processed: 2" in result.output


@patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[])
def test_failure_exit_1(mock_check: MagicMock, tmp_path: Path) -> None:
    _album(tmp_path)
    runner = CliRunner()
    with patch(
        "nas_tools.cue.driver.split_pair",
        side_effect=lambda pair: SplitJobResult(pair, status="error", error="boom"),
    ):
        result = runner.invoke(cli, ["-y", str(tmp_path)])
    assert result.exit_code == 1
    assert "Stopping processing" in result.output


@patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=["cuetag"])
def test_optional_tool_warning(mock_check: MagicMock, tmp_path: Path) -> None:
    _album(tmp_path)
    runner = CliRunner()
    with patch("nas_tools.cue.driver.split_pair"):
        result = runner.invoke(cli, [str(tmp_path)], input="n\n")
    assert "cuetag" in result.output
