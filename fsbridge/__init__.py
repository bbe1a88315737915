"""
fsbridge - synchronous file system bridge.

Exposes file reads/writes, directory management and safe archive
extraction through a uniform {ok, message} result.
"""

from fsbridge import FileBridge
from fsbridge.FileBridge import BridgeConfig, BridgeResult, IOMode, IOOptions

__version__ = "1.0.0"

__all__ = [
    "FileBridge",
    "BridgeConfig",
    "BridgeResult",
    "IOMode",
    "IOOptions",
    "__version__",
]
