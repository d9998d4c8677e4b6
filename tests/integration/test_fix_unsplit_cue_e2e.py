"""End-to-end test of fix-unsplit-cue with the external tools stubbed."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from nas_tools.cli import cli

CUE = """\
PERFORMER "Test Artist"
TITLE "Test Album"
FILE "album.flac" WAVE
  TRACK 01 AUDIO
    TITLE "Opening"
    INDEX 01 00:00:00
  TRACK 02 AUDIO
    TITLE "Closing"
    INDEX 01 03:00:00
"""


def _fake_tools(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
    cwd = Path(str(kwargs["cwd"]))
    if cmd[0] == "cuebreakpoints":
        return subprocess.CompletedProcess(cmd, 0, stdout="3:00.00\n", stderr="")
    if cmd[0] == "shnsplit":
        out_dir = cwd / cmd[cmd.index("-d") + 1]
        (out_dir / "01. Opening.flac").write_bytes(b"track 1")
        (out_dir / "02. Closing.flac").write_bytes(b"track 2")
    return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


def _make_album(root: Path) -> Path:
    album = root / "Test Artist" / "Test Album"
    album.mkdir(parents=True)
    (album / "album.cue").write_text(CUE)
    (album / "album.flac").write_bytes(b"image")
    (album / "folder.jpg").write_bytes(b"jpg")
    return album


def test_split_and_cleanup(temp_dir: Path) -> None:
    library = temp_dir / "library"
    album = _make_album(library)

    runner = CliRunner()
    with (
        patch("nas_tools.cue.splitter.subprocess.run", side_effect=_fake_tools),
        patch("nas_tools.cue.splitter.shutil.which", return_value=None),
        patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[]),
    ):
        result = runner.invoke(
            cli, ["--config", str(temp_dir / "none.toml"), "fix-unsplit-cue", "-y", str(library)]
        )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in album.iterdir()) == [
        "01. Opening.flac",
        "02. Closing.flac",
        "folder.jpg",
    ]


def test_second_run_finds_nothing(temp_dir: Path) -> None:
    library = temp_dir / "library"
    _make_album(library)

    runner = CliRunner()
    args = ["--config", str(temp_dir / "none.toml"), "fix-unsplit-cue", "-y", str(library)]
    with (
        patch("nas_tools.cue.splitter.subprocess.run", side_effect=_fake_tools),
        patch("nas_tools.cue.splitter.shutil.which", return_value=None),
        patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[]),
    ):
        runner.invoke(cli, args)
        result = runner.invoke(cli, args)

    assert result.exit_code == 0
    assert "No unsplit" in result.output


def test_declined_cleanup_leaves_temp_split(temp_dir: Path) -> None:
    library = temp_dir / "library"
    album = _make_album(library)

    runner = CliRunner()
    with (
        patch("nas_tools.cue.splitter.subprocess.run", side_effect=_fake_tools),
        patch("nas_tools.cue.splitter.shutil.which", return_value=None),
        patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[]),
    ):
        # proceed, process pair, decline cleanup
        result = runner.invoke(
            cli,
            ["--config", str(temp_dir / "none.toml"), "fix-unsplit-cue", str(library)],
            input="y\ny\nn\n",
        )

    assert result.exit_code == 0, result.output
    assert (album / "album.cue").exists()
    assert (album / "__temp_split" / "01. Opening.flac").exists()


def test_rerun_finishes_interrupted_cleanup(temp_dir: Path) -> None:
    library = temp_dir / "library"
    album = _make_album(library)
    # First track already promoted, second still waiting in the temp folder
    (album / "01. Opening.flac").write_bytes(b"track 1")
    (album / "__temp_split").mkdir()
    (album / "__temp_split" / "02. Closing.flac").write_bytes(b"track 2")

    runner = CliRunner()
    with (
        patch("nas_tools.cue.splitter.subprocess.run", side_effect=_fake_tools) as mock_run,
        patch("nas_tools.cue.splitter.shutil.which", return_value=None),
        patch("nas_tools.commands.fix_unsplit_cue.require_tools", return_value=[]) as mock_req,
    ):
        result = runner.invoke(
            cli, ["--config", str(temp_dir / "none.toml"), "fix-unsplit-cue", "-y", str(library)]
        )

    assert result.exit_code == 0, result.output
    assert "Resuming cleanup" in result.output
    mock_run.assert_not_called()
    mock_req.assert_not_called()
    assert sorted(p.name for p in album.iterdir()) == [
        "01. Opening.flac",
        "02. Closing.flac",
        "folder.jpg",
    ]
    assert (album / "02. Closing.flac").read_bytes() == b"track 2"
