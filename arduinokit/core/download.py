"""
Network download for release archives.

This module provides a streaming HTTP fetcher with:
- Finite connect/read timeouts
- Exactly one explicit redirect hop
- Fixed-size chunked writes
- Progress reporting (bytes, percentage, speed, ETA)

There are no retries: a failed fetch surfaces as DownloadError and the
caller decides whether to try again.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urljoin

import requests
from requests.exceptions import RequestException

from arduinokit.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 15
READ_TIMEOUT = 60
CHUNK_SIZE = 8192

REDIRECT_CODES = frozenset({301, 302, 307, 308})

try:
    from importlib.metadata import version

    USER_AGENT = f"arduinokit/{version('arduinokit')}"
except Exception:
    USER_AGENT = "arduinokit"


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


def fetch(
    url: str,
    dest_dir: Path,
    archive_name: str,
    connect_timeout: float = CONNECT_TIMEOUT,
    read_timeout: float = READ_TIMEOUT,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> Path:
    """
    Download a release archive into a directory.

    Args:
        url: URL to download from
        dest_dir: Directory to write the archive into
        archive_name: File name of the archive inside dest_dir
        connect_timeout: Connection timeout in seconds
        read_timeout: Read timeout in seconds
        progress_callback: Optional callback for progress updates

    Returns:
        Path to the downloaded archive

    Raises:
        DownloadError: On a non-200 status after at most one redirect,
            or on any transport failure

    Example:
        >>> archive = fetch(
        ...     "https://github.com/arduino/arduino-cli/releases/download/"
        ...     "v0.35.2/arduino-cli_0.35.2_Linux_64bit.tar.gz",
        ...     Path("cache"),
        ...     "arduino-cli.tar.gz",
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    destination = Path(dest_dir) / archive_name
    timeout = (connect_timeout, read_timeout)

    logger.info(f"Downloading from {url}")

    try:
        response = _open(url, timeout)
        try:
            if response.status_code in REDIRECT_CODES:
                response = _follow_redirect(response, url, timeout)

            if response.status_code != 200:
                raise DownloadError(
                    f"Download failed with HTTP {response.status_code}: "
                    f"{response.url or url}",
                    url=response.url or url,
                    status_code=response.status_code,
                )

            _stream_to_file(response, destination, progress_callback)
        finally:
            response.close()

    except RequestException as e:
        raise DownloadError(f"Failed to download {url}: {e}", url=url) from e
    except OSError as e:
        raise DownloadError(
            f"Failed to write {destination} while downloading {url}: {e}", url=url
        ) from e

    logger.info(f"Download complete: {destination}")
    return destination


def _open(url: str, timeout) -> requests.Response:
    # Redirects are handled by the caller, one hop only
    return requests.get(
        url,
        headers={"User-Agent": USER_AGENT},
        stream=True,
        timeout=timeout,
        allow_redirects=False,
    )


def _follow_redirect(
    response: requests.Response, url: str, timeout
) -> requests.Response:
    """
    Follow a single redirect response.

    The second response is returned as-is, even if it is another redirect;
    the caller treats anything but 200 as a failure.
    """
    location = response.headers.get("Location")
    status = response.status_code
    response.close()

    if not location:
        raise DownloadError(
            f"HTTP {status} redirect without Location header: {url}",
            url=url,
            status_code=status,
        )

    target = urljoin(url, location)
    logger.debug(f"Following redirect to {target}")
    return _open(target, timeout)


def _stream_to_file(
    response: requests.Response,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
) -> None:
    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if not chunk:
                continue

            f.write(chunk)
            downloaded += len(chunk)

            # Report progress (max once per 0.5 seconds to avoid spam)
            current_time = time.time()
            if current_time - last_progress_time >= 0.5 or downloaded == total_size:
                elapsed = current_time - start_time
                speed = downloaded / elapsed if elapsed > 0 else 0
                remaining = total_size - downloaded if total_size > 0 else 0
                eta = remaining / speed if speed > 0 else 0

                progress = DownloadProgress(
                    bytes_downloaded=downloaded,
                    total_bytes=total_size if total_size > 0 else downloaded,
                    percentage=(downloaded / total_size * 100)
                    if total_size > 0
                    else 0,
                    speed_bps=speed,
                    eta_seconds=eta,
                )
                logger.debug(f"  {progress}")
                if progress_callback:
                    progress_callback(progress)
                last_progress_time = current_time


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Args:
        progress: Download progress information

    Returns:
        Formatted progress string

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0 and progress.percentage > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        # Unknown total size
        return f"{mb_downloaded:.1f} MB " f"at {speed_mbps:.1f} MB/s"


__all__ = [
    "fetch",
    "format_progress",
    "DownloadProgress",
    "DownloadError",
    "REDIRECT_CODES",
]
