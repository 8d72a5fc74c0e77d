"""
Archive extraction for release artifacts.

Release archives carry a single CLI binary plus a few text files (LICENSE,
README). Only the binary is materialized; every other entry is skipped
without being held in memory.

The tar reader handles plain ustar entries: 512-byte headers, name at
offset 0 (100 bytes), size as ASCII octal at offset 124 (12 bytes), two
all-zero blocks marking the end. Long-name extension headers, sparse files
and multi-volume archives are not supported.
"""

import gzip
import logging
import re
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from arduinokit.core.exceptions import ExtractionError
from arduinokit.core.platform import Platform

logger = logging.getLogger(__name__)

BLOCK_SIZE = 512
NAME_OFFSET = 0
NAME_LENGTH = 100
SIZE_OFFSET = 124
SIZE_LENGTH = 12

BUFFER_SIZE = 8192

_ZERO_BLOCK = bytes(BLOCK_SIZE)
_OCTAL_DIGITS = re.compile(r"[0-7]+")


@dataclass(frozen=True)
class TarHeader:
    """Decoded fields of a tar header block."""

    name: str
    size: int

    @property
    def is_directory(self) -> bool:
        return self.name.endswith("/")

    @property
    def basename(self) -> str:
        return PurePosixPath(self.name).name

    @property
    def padded_size(self) -> int:
        """Size of the entry body rounded up to the block boundary."""
        return _padded(self.size)


def _padded(size: int) -> int:
    return size + (BLOCK_SIZE - size % BLOCK_SIZE) % BLOCK_SIZE


def _field(block: bytes, offset: int, length: int) -> str:
    raw = block[offset : offset + length].split(b"\0", 1)[0]
    return raw.decode("utf-8", errors="replace").strip()


def decode_tar_header(block: bytes) -> TarHeader:
    """
    Decode the name and size fields of a tar header block.

    Args:
        block: Exactly BLOCK_SIZE bytes

    Returns:
        TarHeader with the NUL-terminated, trimmed name and the octal size

    Raises:
        ValueError: If block is not BLOCK_SIZE bytes long
        ExtractionError: If the size field is not an octal number

    Example:
        >>> block = b"bin/tool".ljust(124, b"\\0") + b"00000000012\\0".ljust(388, b"\\0")
        >>> decode_tar_header(block)
        TarHeader(name='bin/tool', size=10)
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Tar header must be {BLOCK_SIZE} bytes, got {len(block)}")

    name = _field(block, NAME_OFFSET, NAME_LENGTH)
    size_text = _field(block, SIZE_OFFSET, SIZE_LENGTH)

    if not size_text:
        return TarHeader(name=name, size=0)

    if not _OCTAL_DIGITS.fullmatch(size_text):
        raise ExtractionError(f"Malformed size field in tar header for '{name}'")

    return TarHeader(name=name, size=int(size_text, 8))


def _read_block(stream: BinaryIO) -> bytes:
    """Read up to one block, looping over short reads."""
    chunks = []
    remaining = BLOCK_SIZE
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _skip(stream: BinaryIO, count: int) -> None:
    remaining = count
    while remaining > 0:
        chunk = stream.read(min(BUFFER_SIZE, remaining))
        if not chunk:
            return
        remaining -= len(chunk)


def _copy(stream: BinaryIO, destination: Path, size: int, archive: Path) -> None:
    remaining = size
    with open(destination, "wb") as out:
        while remaining > 0:
            chunk = stream.read(min(BUFFER_SIZE, remaining))
            if not chunk:
                raise ExtractionError(
                    f"Truncated entry in {archive}: {remaining} of {size} bytes missing",
                    archive=archive,
                )
            out.write(chunk)
            remaining -= len(chunk)


def extract_tar_gz(archive: Path, dest_dir: Path, executable_name: str) -> Path:
    """
    Extract the single entry named executable_name from a .tar.gz archive.

    Scanning stops at the first matching entry; later entries are never read.

    Args:
        archive: Path to the .tar.gz archive
        dest_dir: Directory to write the executable into
        executable_name: Base file name of the entry to extract

    Returns:
        Path to the extracted executable

    Raises:
        ExtractionError: If the archive ends without a matching entry,
            or is corrupt
    """
    destination = Path(dest_dir) / executable_name

    try:
        with gzip.open(archive, "rb") as stream:
            while True:
                block = _read_block(stream)
                if len(block) < BLOCK_SIZE:
                    break

                if block == _ZERO_BLOCK:
                    following = _read_block(stream)
                    if len(following) < BLOCK_SIZE or following == _ZERO_BLOCK:
                        break
                    block = following

                header = decode_tar_header(block)

                if not header.name or header.is_directory or header.size == 0:
                    _skip(stream, header.padded_size)
                    continue

                if header.basename != executable_name:
                    logger.debug(f"Skipping tar entry {header.name}")
                    _skip(stream, header.padded_size)
                    continue

                logger.debug(f"Extracting {header.name} ({header.size} bytes)")
                _copy(stream, destination, header.size, archive)
                _skip(stream, header.padded_size - header.size)
                return destination

    except (OSError, EOFError, zlib.error) as e:
        raise ExtractionError(f"Failed to read {archive}: {e}", archive=archive) from e

    raise ExtractionError(
        f"No entry named '{executable_name}' found in {archive}", archive=archive
    )


def extract_zip(archive: Path, dest_dir: Path, tool: str) -> Path:
    """
    Extract the first entry whose base name starts with tool from a .zip archive.

    Args:
        archive: Path to the .zip archive
        dest_dir: Directory to write the executable into
        tool: Tool name prefix of the entry to extract

    Returns:
        Path to the extracted file

    Raises:
        ExtractionError: If no entry matches, or the archive is corrupt
    """
    try:
        with zipfile.ZipFile(archive, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue

                basename = PurePosixPath(info.filename).name
                if not basename.startswith(tool):
                    logger.debug(f"Skipping zip entry {info.filename}")
                    continue

                destination = Path(dest_dir) / basename
                logger.debug(f"Extracting {info.filename} ({info.file_size} bytes)")
                with zf.open(info) as src, open(destination, "wb") as out:
                    while chunk := src.read(BUFFER_SIZE):
                        out.write(chunk)
                return destination

    except (zipfile.BadZipFile, OSError, zlib.error) as e:
        raise ExtractionError(f"Failed to read {archive}: {e}", archive=archive) from e

    raise ExtractionError(
        f"No entry starting with '{tool}' found in {archive}", archive=archive
    )


def extract_executable(
    archive: Path, dest_dir: Path, tool: str, platform: Platform
) -> Path:
    """
    Extract the tool's executable from a release archive.

    Dispatches on the archive's extension: '.tar.gz' uses the tar reader,
    anything else the zip reader.

    Args:
        archive: Downloaded release archive
        dest_dir: Directory to write the executable into
        tool: Tool name
        platform: Platform the archive was built for

    Returns:
        Path to the extracted file
    """
    logger.debug(f"Extracting {archive}")

    if archive.name.endswith(".tar.gz"):
        return extract_tar_gz(archive, dest_dir, platform.executable_name(tool))
    return extract_zip(archive, dest_dir, tool)


__all__ = [
    "TarHeader",
    "decode_tar_header",
    "extract_tar_gz",
    "extract_zip",
    "extract_executable",
    "BLOCK_SIZE",
]
