"""
FileBridge archive extraction.

Streams ZIP entries into an output directory, refusing any entry whose
path would land outside it, and decompresses single GZip files.
"""

import gzip
import logging
import lzma
import os
import shutil
import zipfile
import zlib
from typing import List, Optional

from fsbridge.shared.bridge import BridgeLogger

from .models import BridgeResult
from .operations import COPY_CHUNK_SIZE, error_message, open_for_write
from .security import PathResolver, PathSecurityError, resolve_entry_path


_log = BridgeLogger.get("FileBridge.archive")

# zipfile raises RuntimeError for encrypted entries and NotImplementedError
# for unsupported compression methods
ZIP_ERRORS = (
    OSError,
    EOFError,
    zlib.error,
    lzma.LZMAError,
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    RuntimeError,
    NotImplementedError,
)

GZIP_ERRORS = (OSError, EOFError, zlib.error)

GZIP_MAGIC = b"\x1f\x8b"

# MS-DOS attribute bit marking a read-only file
_DOS_READ_ONLY = 0x01
_UNIX_SYSTEM = 3


def entry_mode(info: zipfile.ZipInfo) -> int:
    """Permission bits an extracted entry should be created with."""
    if info.create_system == _UNIX_SYSTEM:
        bits = (info.external_attr >> 16) & 0o777
        if bits:
            return bits
    if info.external_attr & _DOS_READ_ONLY:
        return 0o444
    return 0o666


class ExtractionLog:
    """
    Records what a single extraction put on disk.

    Only paths this extraction created are recorded, so a rollback never
    touches files or directories that were there before.
    """

    def __init__(self):
        self.files: List[str] = []
        self.dirs: List[str] = []

    def make_dirs(self, path: str) -> None:
        """Create a directory and its missing ancestors, recording each."""
        missing = []
        current = path
        while current and not os.path.lexists(current):
            missing.append(current)
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        self.dirs.extend(reversed(missing))
        os.makedirs(path, exist_ok=True)

    def rollback(self, logger: logging.Logger) -> None:
        """Remove recorded files, then recorded directories deepest first."""
        for path in reversed(self.files):
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Rollback could not remove {path}: {e}")

        for path in sorted(self.dirs, key=len, reverse=True):
            try:
                os.rmdir(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Rollback left directory {path}: {e}")

        self.files.clear()
        self.dirs.clear()


def _extract_entry(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    target: str,
    chunk_size: int,
    written: ExtractionLog
) -> None:
    created = not os.path.lexists(target)
    with open_for_write(target, entry_mode(info)) as dest:
        if created:
            written.files.append(target)
        with archive.open(info) as source:
            shutil.copyfileobj(source, dest, chunk_size)


def extract_zip(
    resolver: PathResolver,
    archive_path: str,
    output_dir: str,
    chunk_size: int = COPY_CHUNK_SIZE,
    cleanup_on_failure: bool = False,
    logger: Optional[logging.Logger] = None
) -> BridgeResult:
    """
    Extract a ZIP archive into a directory.

    Entries are processed in the order of the archive index. The first
    entry whose path escapes ``output_dir`` stops the extraction, as does
    the first I/O or decompression error. Whatever was extracted before
    that stays on disk unless ``cleanup_on_failure`` is set.

    Args:
        resolver: Path resolver
        archive_path: ZIP file to read
        output_dir: Directory to extract into
        chunk_size: Buffer size for copying entry data
        cleanup_on_failure: Remove what this call created if it fails
        logger: Logger for security warnings

    Returns:
        BridgeResult with "Success", or the error that stopped extraction
    """
    logger = logger or _log
    archive_path = resolver.resolve(archive_path)
    output_dir = resolver.resolve(output_dir)
    written = ExtractionLog()

    try:
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                target = resolve_entry_path(output_dir, info.filename)

                if info.is_dir():
                    written.make_dirs(target)
                    continue

                written.make_dirs(os.path.dirname(target))
                _extract_entry(archive, info, target, chunk_size, written)
    except PathSecurityError as e:
        logger.warning(f"extract_zip: {e}")
        result = BridgeResult.failure(str(e))
    except ZIP_ERRORS as e:
        result = BridgeResult.failure(error_message(e))
    except BaseException:
        if cleanup_on_failure:
            written.rollback(logger)
        raise
    else:
        return BridgeResult.success()

    if cleanup_on_failure:
        written.rollback(logger)
    return result


def extract_gzip(
    resolver: PathResolver,
    input_path: str,
    output_path: str,
    chunk_size: int = COPY_CHUNK_SIZE
) -> BridgeResult:
    """
    Decompress a GZip file into an output file.

    The output file is created or truncated; its parent directory must
    already exist. The input must start with a GZip header, so an empty
    input is an error, and it may not be the output file itself.

    Args:
        resolver: Path resolver
        input_path: Compressed file
        output_path: Destination for the decompressed bytes
        chunk_size: Buffer size for copying

    Returns:
        BridgeResult with "Success", or the open/decompress/write error
    """
    input_path = resolver.resolve(input_path)
    output_path = resolver.resolve(output_path)

    try:
        with open(input_path, "rb") as compressed:
            header = compressed.read(len(GZIP_MAGIC))
            if not header:
                return BridgeResult.failure("unexpected EOF")
            if header != GZIP_MAGIC:
                return BridgeResult.failure("invalid gzip header")
            if os.path.exists(output_path) and os.path.samefile(input_path, output_path):
                return BridgeResult.failure("input and output are the same file")
            compressed.seek(0)

            with open(output_path, "wb") as output:
                with gzip.GzipFile(fileobj=compressed, mode="rb") as reader:
                    shutil.copyfileobj(reader, output, chunk_size)
    except GZIP_ERRORS as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success()
