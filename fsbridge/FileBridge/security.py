"""
FileBridge security module.

Provides path resolution and the containment check that keeps archive
entries inside their output directory.
"""

import os
from typing import Optional


class PathSecurityError(Exception):
    """Raised when a path fails security validation."""
    pass


def normalize_path(path: str, base_path: Optional[str] = None) -> str:
    """
    Turn a path into a normalized absolute path.

    Args:
        path: Raw path string
        base_path: Directory relative paths are resolved against
            (the working directory when None)

    Returns:
        Normalized absolute path
    """
    path = os.path.expanduser(path)
    if base_path is not None and not os.path.isabs(path):
        path = os.path.join(base_path, path)
    # abspath also collapses . and .. segments and fixes separators
    return os.path.abspath(path)


class PathResolver:
    """
    Resolves caller-supplied paths against a fixed base directory.

    Resolution is idempotent and never raises: a value that cannot be
    resolved is handed back unchanged, and the OS call that receives it
    reports the problem.
    """

    def __init__(self, base_path: Optional[str] = None):
        if base_path:
            self.base_path = normalize_path(base_path)
        else:
            self.base_path = os.getcwd()

    def resolve(self, raw: str) -> str:
        """
        Resolve a path.

        Args:
            raw: Absolute or relative path, possibly starting with ~

        Returns:
            Absolute normalized path, or ``raw`` if it cannot be resolved
        """
        try:
            return normalize_path(raw, self.base_path)
        except (TypeError, ValueError):
            return raw

    __call__ = resolve

    def __repr__(self) -> str:
        return f"PathResolver(base_path={self.base_path!r})"


def is_within_directory(candidate: str, root: str) -> bool:
    """
    Check that a path lies strictly inside a directory.

    Both sides are normalized first. The directory itself does not count
    as being inside itself.

    Args:
        candidate: Path to check
        root: Directory that must contain it

    Returns:
        True if candidate is below root
    """
    root_prefix = os.path.join(os.path.normpath(root), "")
    return os.path.normpath(candidate).startswith(root_prefix)


def resolve_entry_path(output_dir: str, entry_name: str) -> str:
    """
    Compute where an archive entry lands inside the output directory.

    Args:
        output_dir: Resolved extraction root
        entry_name: Name stored in the archive

    Returns:
        Normalized target path

    Raises:
        PathSecurityError: If the entry would land outside output_dir
    """
    target = os.path.normpath(os.path.join(output_dir, entry_name))
    if not is_within_directory(target, output_dir):
        raise PathSecurityError(f"invalid file path: {entry_name}")
    return target
