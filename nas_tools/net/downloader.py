"""Single-file HTTP downloads with retries.

The whole response body is read into memory and written in one go; partial
downloads are not resumed.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

import requests

from nas_tools.config import DEFAULT_RETRIES, DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT
from nas_tools.exceptions import DownloadError
from nas_tools.utils.output import info, progress, success

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "download.bin"
_BACKOFF_STEP = 0.5

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
_ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# filename*=UTF-8''na%C3%AFve.txt
_FILENAME_STAR_RE = re.compile(r"filename\*\s*=\s*(?:[\w-]+'[\w-]*')?([^;]+)", re.IGNORECASE)
# filename="cover.jpg" or filename=cover.jpg
_FILENAME_RE = re.compile(r'filename\s*=\s*("?)([^";]+)\1', re.IGNORECASE)


@dataclass(frozen=True)
class DownloadOptions:
    """Options for one download.

    Attributes:
        dest: Destination directory, created if missing.
        referer: Optional ``Referer`` header.
        cookie: Optional ``Cookie`` header.
        user_agent: ``User-Agent`` header.
        retries: Retries after the first failed attempt.
        timeout: Per-attempt timeout in milliseconds.
    """

    dest: Path
    referer: str | None = None
    cookie: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    retries: int = DEFAULT_RETRIES
    timeout: int = DEFAULT_TIMEOUT_MS


def build_headers(options: DownloadOptions) -> dict[str, str]:
    headers = {
        "User-Agent": options.user_agent,
        "Accept": _ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
    }
    if options.referer:
        headers["Referer"] = options.referer
    if options.cookie:
        headers["Cookie"] = options.cookie
    return headers


def _basename(name: str) -> str:
    # Both separators, the server does not decide where files land
    return PurePosixPath(name.replace("\\", "/")).name


def filename_from_headers(url: str, headers: Mapping[str, str]) -> str:
    """Pick the file name for a response.

    ``Content-Disposition`` wins (``filename*`` over ``filename``), then
    the last URL path segment, then ``download.bin``. Only the final path
    component of any candidate is used.
    """
    disposition = headers.get("Content-Disposition") or headers.get("content-disposition")
    if disposition:
        star = _FILENAME_STAR_RE.search(disposition)
        if star:
            name = _basename(unquote(star.group(1).strip().strip("\"'")))
            if name:
                return name
        plain = _FILENAME_RE.search(disposition)
        if plain:
            name = _basename(unquote(plain.group(2).strip()))
            if name:
                return name

    name = _basename(unquote(urlparse(url).path))
    return name or DEFAULT_FILENAME


def download_file(url: str, options: DownloadOptions) -> Path:
    """Download ``url`` into ``options.dest``.

    Connection errors, timeouts and non-2xx responses are retried up to
    ``options.retries`` times, sleeping ``n * 0.5`` seconds before retry n.

    Returns:
        Path of the written file.

    Raises:
        DownloadError: If every attempt failed or the file cannot be written.
    """
    headers = build_headers(options)
    timeout = options.timeout / 1000

    try:
        options.dest.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DownloadError(url, f"cannot create {options.dest}: {e}") from e

    last_error: Exception | None = None
    for attempt in range(options.retries + 1):
        if attempt > 0:
            info(f"Retry {attempt}/{options.retries}...")
            time.sleep(attempt * _BACKOFF_STEP)
        progress(f"GET {url}")
        try:
            resp = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning(
                "Download failed (attempt %d/%d): %s", attempt + 1, options.retries + 1, e
            )
            last_error = e
            continue

        path = options.dest / filename_from_headers(url, resp.headers)
        info(f"Saving as {path}")
        try:
            path.write_bytes(resp.content)
        except OSError as e:
            raise DownloadError(url, f"cannot write {path}: {e}") from e
        success("Done")
        return path

    raise DownloadError(url, f"failed after {options.retries} retries: {last_error}")
