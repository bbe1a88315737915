"""
FileBridge - Uniform file system bridge for host applications.

Provides:
- Text and base64 binary file reads/writes
- Move, copy, remove, mkdir, directory listing, existence checks
- Path resolution against a configured base directory
- ZIP extraction with path traversal (Zip-Slip) protection
- GZip decompression

Every operation returns a BridgeResult (ok flag + message) instead of
raising, so the bridge can be driven across a process boundary.

Usage:
    from fsbridge import FileBridge

    # Explicit instance
    bridge = FileBridge.FileBridge(BridgeConfig(base_path="/srv/data"))
    result = bridge.extract_zip("upload.zip", "unpacked")

    # Or the module-level default bridge
    FileBridge.initialize()
    result = FileBridge.read_file("notes.txt")
"""

import logging
import os
from typing import Optional, List, Dict, Any, Union

from fsbridge.shared.bridge import (
    BridgeLogger,
    BridgeErrorHandler,
    ConfigLoader,
    PathUtils,
    build_health_status,
)

from .models import (
    SUCCESS,
    BridgeConfig,
    BridgeResult,
    DirEntry,
    IOMode,
    IOOptions,
)
from .security import (
    PathResolver,
    PathSecurityError,
    is_within_directory,
)
from .operations import (
    error_message,
    write_file as op_write_file,
    read_file as op_read_file,
    move_file as op_move_file,
    remove_file as op_remove_file,
    copy_file as op_copy_file,
    make_directory as op_make_directory,
    read_directory as op_read_directory,
    absolute_path as op_absolute_path,
    file_exists as op_file_exists,
)
from .archive import (
    extract_zip as op_extract_zip,
    extract_gzip as op_extract_gzip,
)

OptionsArg = Union[IOOptions, IOMode, str, Dict[str, Any], None]

# Module-level state
_bridge: Optional["FileBridge"] = None
_initialized: bool = False
_config_path: Optional[str] = None

# Default paths
DEFAULT_CONFIG_PATH = "data/config/bridge.json"


def _failed(exc: Exception) -> BridgeResult:
    return BridgeResult.failure(error_message(exc))


class FileBridge:
    """
    File system bridge bound to one configuration.

    Holds the path resolver built from ``config.base_path`` and the logger
    every call is reported to. Pass your own logger to redirect or silence
    the call log.
    """

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.config = config or BridgeConfig()
        self.logger = logger or BridgeLogger.get("FileBridge")
        self.resolver = PathResolver(self.config.base_path)

    def __repr__(self) -> str:
        return f"FileBridge(base_path={self.resolver.base_path!r})"

    # ==================== File Operations ====================

    @BridgeErrorHandler.wrap("write_file", _failed)
    def write_file(self, path: str, content: str, options: OptionsArg = None) -> BridgeResult:
        """
        Write content to a file, creating parent directories.

        Args:
            path: File path
            content: Text, or base64 in Binary mode
            options: IOOptions, IOMode, "Text"/"Binary" or {"mode": ...}

        Returns:
            BridgeResult with "Success"
        """
        self.logger.info(f"write_file [{_mode_name(options)}]: {path}")
        return op_write_file(self.resolver, path, content, options, self.config.text_encoding)

    @BridgeErrorHandler.wrap("read_file", _failed)
    def read_file(self, path: str, options: OptionsArg = None) -> BridgeResult:
        """
        Read a file.

        Args:
            path: File path
            options: IOOptions, IOMode, "Text"/"Binary" or {"mode": ...}

        Returns:
            BridgeResult with the content (base64 in Binary mode)
        """
        self.logger.info(f"read_file [{_mode_name(options)}]: {path}")
        return op_read_file(self.resolver, path, options, self.config.text_encoding)

    @BridgeErrorHandler.wrap("move_file", _failed)
    def move_file(self, source: str, target: str) -> BridgeResult:
        """Move (rename) a file."""
        self.logger.info(f"move_file: {source} -> {target}")
        return op_move_file(self.resolver, source, target)

    @BridgeErrorHandler.wrap("remove_file", _failed)
    def remove_file(self, path: str) -> BridgeResult:
        """Remove a file or directory tree. Missing paths count as removed."""
        self.logger.info(f"remove_file: {path}")
        return op_remove_file(self.resolver, path)

    @BridgeErrorHandler.wrap("copy_file", _failed)
    def copy_file(self, src: str, dst: str) -> BridgeResult:
        """Copy a file's bytes to a new or truncated destination."""
        self.logger.info(f"copy_file: {src} -> {dst}")
        return op_copy_file(self.resolver, src, dst, self.config.copy_chunk_size)

    @BridgeErrorHandler.wrap("make_dir", _failed)
    def make_dir(self, path: str) -> BridgeResult:
        """Create a directory and its parents."""
        self.logger.info(f"make_dir: {path}")
        return op_make_directory(self.resolver, path)

    @BridgeErrorHandler.wrap("read_dir", _failed)
    def read_dir(self, path: str) -> BridgeResult:
        """
        List a directory.

        Returns:
            BridgeResult with ``name,size,isDir`` records joined by ``|``.
            Use DirEntry.parse_listing() to decode it.
        """
        self.logger.info(f"read_dir: {path}")
        return op_read_directory(self.resolver, path)

    @BridgeErrorHandler.wrap("absolute_path", _failed)
    def absolute_path(self, path: str) -> BridgeResult:
        """Resolve a path against the configured base path."""
        self.logger.info(f"absolute_path: {path}")
        return op_absolute_path(self.resolver, path)

    @BridgeErrorHandler.wrap("file_exists", _failed)
    def file_exists(self, path: str) -> BridgeResult:
        """Check existence; message is "true" or "false"."""
        self.logger.info(f"file_exists: {path}")
        return op_file_exists(self.resolver, path)

    # ==================== Archives ====================

    @BridgeErrorHandler.wrap("extract_zip", _failed)
    def extract_zip(self, archive_path: str, output_dir: str) -> BridgeResult:
        """
        Extract a ZIP archive into output_dir.

        Entries that would land outside output_dir abort the extraction.

        Args:
            archive_path: ZIP file
            output_dir: Destination directory

        Returns:
            BridgeResult with "Success", or the reason extraction stopped
        """
        self.logger.info(f"extract_zip: {archive_path} -> {output_dir}")
        return op_extract_zip(
            self.resolver,
            archive_path,
            output_dir,
            chunk_size=self.config.copy_chunk_size,
            cleanup_on_failure=self.config.cleanup_partial_extraction,
            logger=self.logger,
        )

    @BridgeErrorHandler.wrap("extract_gzip", _failed)
    def extract_gzip(self, input_path: str, output_path: str) -> BridgeResult:
        """Decompress a GZip file into output_path."""
        self.logger.info(f"extract_gzip: {input_path} -> {output_path}")
        return op_extract_gzip(
            self.resolver,
            input_path,
            output_path,
            chunk_size=self.config.copy_chunk_size,
        )

    # ==================== Health Checks ====================

    def is_healthy(self) -> bool:
        """Check that the base path is a readable directory."""
        base = self.resolver.base_path
        return os.path.isdir(base) and os.access(base, os.R_OK)

    def get_health_status(self) -> Dict[str, Any]:
        """Get detailed health information."""
        base = self.resolver.base_path
        checks = {
            "base_path_exists": os.path.isdir(base),
            "base_path_readable": os.access(base, os.R_OK),
            "base_path_writable": os.access(base, os.W_OK),
        }
        details = {
            "base_path": base,
            "text_encoding": self.config.text_encoding,
            "cleanup_partial_extraction": self.config.cleanup_partial_extraction,
        }
        return build_health_status(
            component="FileBridge",
            initialized=True,
            dependencies=self.get_dependencies(),
            checks=checks,
            details=details,
        )

    @staticmethod
    def get_dependencies() -> List[str]:
        """List external dependencies."""
        return ["filesystem"]


def _mode_name(options: OptionsArg) -> str:
    """Mode label for the call log; never fails."""
    if options is None:
        return IOMode.TEXT.value
    if isinstance(options, IOOptions):
        return options.mode.value
    if isinstance(options, IOMode):
        return options.value
    if isinstance(options, dict):
        return str(options.get("mode", IOMode.TEXT.value))
    return str(options)


# ==================== Module-level default bridge ====================

def initialize(
    config_path: Optional[str] = None,
    base_path: Optional[str] = None,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Create the default bridge from a JSON config file.

    A default config is written if the file does not exist yet.

    Args:
        config_path: Path to config file (default: data/config/bridge.json)
        base_path: Overrides the configured base path
        logger: Logger for the call log

    Returns:
        True if initialization successful
    """
    global _bridge, _initialized, _config_path
    log = BridgeLogger.get("FileBridge")

    _config_path = config_path or DEFAULT_CONFIG_PATH

    try:
        PathUtils.ensure_dirs(_config_path)
    except OSError as e:
        log.error(f"Initialization failed: {e}")
        return False

    existed = os.path.exists(_config_path)
    config = ConfigLoader.load(_config_path, BridgeConfig, create_default=True)
    if config is None:
        log.error(f"Initialization failed: unreadable config {_config_path}")
        return False

    if not existed:
        ConfigLoader.save(_config_path, config)

    if base_path is not None:
        config = config.model_copy(update={"base_path": base_path})

    _bridge = FileBridge(config, logger)
    _initialized = True
    log.info(f"Initialized (base path: {_bridge.resolver.base_path})")
    return True


def is_initialized() -> bool:
    """Check if the default bridge exists."""
    return _initialized


def get_bridge() -> FileBridge:
    """Get the default bridge, initializing it if needed."""
    if _bridge is None:
        if not initialize():
            raise RuntimeError("FileBridge initialization failed. Check config path and permissions.")
    return _bridge


def write_file(path: str, content: str, options: OptionsArg = None) -> BridgeResult:
    """Write a file."""
    return get_bridge().write_file(path, content, options)


def read_file(path: str, options: OptionsArg = None) -> BridgeResult:
    """Read a file."""
    return get_bridge().read_file(path, options)


def move_file(source: str, target: str) -> BridgeResult:
    """Move a file."""
    return get_bridge().move_file(source, target)


def remove_file(path: str) -> BridgeResult:
    """Remove a file or directory tree."""
    return get_bridge().remove_file(path)


def copy_file(src: str, dst: str) -> BridgeResult:
    """Copy a file."""
    return get_bridge().copy_file(src, dst)


def make_dir(path: str) -> BridgeResult:
    """Create a directory."""
    return get_bridge().make_dir(path)


def read_dir(path: str) -> BridgeResult:
    """List a directory."""
    return get_bridge().read_dir(path)


def absolute_path(path: str) -> BridgeResult:
    """Resolve a path."""
    return get_bridge().absolute_path(path)


def file_exists(path: str) -> BridgeResult:
    """Check whether a path exists."""
    return get_bridge().file_exists(path)


def extract_zip(archive_path: str, output_dir: str) -> BridgeResult:
    """Extract a ZIP archive."""
    return get_bridge().extract_zip(archive_path, output_dir)


def extract_gzip(input_path: str, output_path: str) -> BridgeResult:
    """Decompress a GZip file."""
    return get_bridge().extract_gzip(input_path, output_path)


def get_health_status() -> Dict[str, Any]:
    """Get health information for the default bridge."""
    if not _initialized:
        return build_health_status(
            component="FileBridge",
            initialized=False,
            dependencies=FileBridge.get_dependencies(),
            checks={},
        )
    return _bridge.get_health_status()


def get_info() -> dict:
    """
    Get documentation for FileBridge.

    Returns the operation catalogue with call formats and result semantics.
    """
    path_arg = {"type": "string", "required": True, "description": "Absolute, or relative to the base path"}
    options_arg = {"type": "object", "required": False, "default": {"mode": "Text"}, "description": "mode: Text or Binary (base64)"}

    return {
        "component": "FileBridge",
        "version": "1.0",
        "purpose": "Synchronous file system bridge. Every operation returns {ok, message} instead of raising.",

        "concepts": {
            "result": "ok tells success from failure; message is an error description or the operation's payload",
            "base_path": "Relative paths resolve against the configured base path",
            "mode": "Text passes content through unchanged, Binary carries bytes as standard padded base64",
        },

        "tools": {
            "write_file": {
                "call_format": {"path": path_arg, "content": {"type": "string", "required": True}, "options": options_arg},
                "success_message": SUCCESS,
            },
            "read_file": {
                "call_format": {"path": path_arg, "options": options_arg},
                "success_message": "File content (base64 in Binary mode)",
            },
            "move_file": {
                "call_format": {"source": path_arg, "target": path_arg},
                "success_message": SUCCESS,
            },
            "remove_file": {
                "call_format": {"path": path_arg},
                "success_message": SUCCESS,
                "note": "Removes directories recursively; a missing path is not an error",
            },
            "copy_file": {
                "call_format": {"src": path_arg, "dst": path_arg},
                "success_message": SUCCESS,
            },
            "make_dir": {
                "call_format": {"path": path_arg},
                "success_message": SUCCESS,
            },
            "read_dir": {
                "call_format": {"path": path_arg},
                "success_message": "name,size,isDir records joined by |",
            },
            "absolute_path": {
                "call_format": {"path": path_arg},
                "success_message": "Resolved absolute path",
                "note": "Never fails",
            },
            "file_exists": {
                "call_format": {"path": path_arg},
                "success_message": "true or false",
            },
            "extract_zip": {
                "call_format": {"archive_path": path_arg, "output_dir": path_arg},
                "success_message": SUCCESS,
                "note": "Stops at the first entry whose path escapes output_dir",
            },
            "extract_gzip": {
                "call_format": {"input_path": path_arg, "output_path": path_arg},
                "success_message": SUCCESS,
            },
        },

        "security": {
            "zip_slip": "Every ZIP entry must resolve strictly inside the output directory",
            "partial_extraction": "Entries written before a failure stay on disk unless cleanup_partial_extraction is enabled",
        },
    }


__all__ = [
    # Class
    "FileBridge",
    # Default bridge
    "initialize",
    "is_initialized",
    "get_bridge",
    "get_health_status",
    # Operations
    "write_file",
    "read_file",
    "move_file",
    "remove_file",
    "copy_file",
    "make_dir",
    "read_dir",
    "absolute_path",
    "file_exists",
    "extract_zip",
    "extract_gzip",
    # Models
    "BridgeConfig",
    "BridgeResult",
    "DirEntry",
    "IOMode",
    "IOOptions",
    # Paths
    "PathResolver",
    "PathSecurityError",
    "is_within_directory",
    # Documentation
    "get_info",
]
