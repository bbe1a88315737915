"""
Shared utilities for fsbridge.

Provides the logging, error handling and config helpers used across the
bridge components.
"""

from fsbridge.shared.bridge import (
    BridgeLogger,
    BridgeErrorHandler,
    ConfigLoader,
    PathUtils,
    build_health_status,
    get_logger,
)

__all__ = [
    "BridgeLogger",
    "BridgeErrorHandler",
    "ConfigLoader",
    "PathUtils",
    "build_health_status",
    "get_logger",
]
