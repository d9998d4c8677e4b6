"""download command: fetch a URL to disk."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nas_tools.cli import Context, pass_context
from nas_tools.exceptions import DownloadError
from nas_tools.net.downloader import DownloadOptions, download_file
from nas_tools.utils.output import error


@click.command("download")
@click.argument("url")
@click.option(
    "--dest",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination directory (default: from config)",
)
@click.option("--referer", "-r", default=None, help="Referer header")
@click.option("--cookie", "-c", default=None, help="Cookie header")
@click.option("--ua", "-u", "user_agent", default=None, help="User-Agent header")
@click.option(
    "--retries",
    type=click.IntRange(min=0),
    default=None,
    help="Retries after a failed attempt (default: from config)",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Per-attempt timeout in milliseconds (default: from config)",
)
@pass_context
def cli(
    ctx: Context,
    url: str,
    dest: Path | None,
    referer: str | None,
    cookie: str | None,
    user_agent: str | None,
    retries: int | None,
    timeout: int | None,
) -> None:
    """Download URL into the destination directory.

    The file name comes from the Content-Disposition header when the
    server sends one, otherwise from the URL.

    Examples:

    \b
      nas-tools download https://example.com/album.zip -d ~/Downloads
    """
    config = ctx.config
    options = DownloadOptions(
        dest=(dest or config.download_dir).expanduser(),
        referer=referer,
        cookie=cookie,
        user_agent=user_agent or config.user_agent,
        retries=config.retries if retries is None else retries,
        timeout=config.timeout_ms if timeout is None else timeout,
    )

    try:
        download_file(url, options)
    except DownloadError as e:
        error(str(e))
        sys.exit(1)
