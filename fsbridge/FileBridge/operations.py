"""
FileBridge file operations.

Provides write, read, move, remove, copy, mkdir, list, absolute path and
existence checks. Every path goes through the resolver first, and every
failure comes back as a failed BridgeResult.
"""

import base64
import os
import shutil
import stat
from typing import BinaryIO, List, Optional

from .models import BridgeResult, DirEntry, IOMode, IOOptions
from .security import PathResolver


DEFAULT_ENCODING = "utf-8"
COPY_CHUNK_SIZE = 64 * 1024
WRITE_FILE_MODE = 0o644


def error_message(exc: BaseException) -> str:
    """Human readable description of an exception."""
    return str(exc) or exc.__class__.__name__


def open_for_write(path: str, mode_bits: int = 0o666) -> BinaryIO:
    """
    Open a file for binary writing, creating or truncating it.

    A newly created file gets ``mode_bits`` (subject to the umask);
    an existing file keeps its permissions.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0), mode_bits)
    return os.fdopen(fd, "wb")


def write_file(
    resolver: PathResolver,
    path: str,
    content: str,
    options: Optional[IOOptions] = None,
    encoding: str = DEFAULT_ENCODING
) -> BridgeResult:
    """
    Write content to a file, creating parent directories as needed.

    Args:
        resolver: Path resolver
        path: File path
        content: Text, or base64 when the mode is Binary
        options: I/O options
        encoding: Text encoding for Text mode

    Returns:
        BridgeResult with "Success" on success
    """
    try:
        options = IOOptions.coerce(options)
    except ValueError as e:
        return BridgeResult.failure(f"Invalid I/O options: {e}")

    path = resolver.resolve(path)

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    try:
        if options.mode == IOMode.BINARY:
            data = base64.b64decode(content, validate=True)
        else:
            data = content.encode(encoding)
    except ValueError as e:
        # binascii.Error and UnicodeEncodeError are both ValueErrors
        return BridgeResult.failure(error_message(e))

    try:
        with open_for_write(path, WRITE_FILE_MODE) as f:
            f.write(data)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success()


def read_file(
    resolver: PathResolver,
    path: str,
    options: Optional[IOOptions] = None,
    encoding: str = DEFAULT_ENCODING
) -> BridgeResult:
    """
    Read a file's contents.

    Args:
        resolver: Path resolver
        path: File path
        options: I/O options
        encoding: Text encoding for Text mode

    Returns:
        BridgeResult with the text, or base64 in Binary mode
    """
    try:
        options = IOOptions.coerce(options)
    except ValueError as e:
        return BridgeResult.failure(f"Invalid I/O options: {e}")

    path = resolver.resolve(path)

    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    if options.mode == IOMode.BINARY:
        return BridgeResult.success(base64.b64encode(data).decode("ascii"))
    return BridgeResult.success(data.decode(encoding, errors="replace"))


def move_file(resolver: PathResolver, source: str, target: str) -> BridgeResult:
    """Rename source to target, replacing target where the OS allows it."""
    source = resolver.resolve(source)
    target = resolver.resolve(target)

    try:
        os.replace(source, target)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success()


def remove_file(resolver: PathResolver, path: str) -> BridgeResult:
    """
    Remove a file or a whole directory tree.

    A path that does not exist counts as removed.
    """
    path = resolver.resolve(path)

    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.remove(path)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success()


def copy_file(
    resolver: PathResolver,
    src: str,
    dst: str,
    chunk_size: int = COPY_CHUNK_SIZE
) -> BridgeResult:
    """
    Copy file contents from src to dst.

    The destination is created or truncated; its parent directory must
    already exist.
    """
    src = resolver.resolve(src)
    dst = resolver.resolve(dst)

    try:
        with open(src, "rb") as source, open(dst, "wb") as dest:
            shutil.copyfileobj(source, dest, chunk_size)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success()


def make_directory(resolver: PathResolver, path: str) -> BridgeResult:
    """Create a directory and any missing parents."""
    path = resolver.resolve(path)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success()


def read_directory(resolver: PathResolver, path: str) -> BridgeResult:
    """
    List a directory.

    Returns:
        BridgeResult whose message holds ``name,size,isDir`` records joined
        by ``|``, sorted by name. Entries that cannot be stat'ed are left out.
    """
    path = resolver.resolve(path)

    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    records: List[str] = []
    for entry in entries:
        try:
            st = entry.stat(follow_symlinks=False)
        except OSError:
            continue
        records.append(DirEntry(
            name=entry.name,
            size=st.st_size,
            is_dir=stat.S_ISDIR(st.st_mode)
        ).to_record())

    return BridgeResult.success("|".join(records))


def absolute_path(resolver: PathResolver, path: str) -> BridgeResult:
    """Resolve a path. Always succeeds."""
    return BridgeResult.success(resolver.resolve(path))


def file_exists(resolver: PathResolver, path: str) -> BridgeResult:
    """
    Check whether a path exists.

    Returns:
        BridgeResult with "true" or "false"; fails only when the path
        cannot be stat'ed for a reason other than not existing
    """
    path = resolver.resolve(path)

    try:
        os.stat(path)
    except FileNotFoundError:
        return BridgeResult.success("false")
    except OSError as e:
        return BridgeResult.failure(error_message(e))

    return BridgeResult.success("true")
