"""Network helpers: plain HTTP file downloads."""

from nas_tools.net.downloader import DownloadOptions, download_file, filename_from_headers

__all__ = ["DownloadOptions", "download_file", "filename_from_headers"]
