"""
Shared bridge utilities for fsbridge.

Provides the patterns every bridge component relies on:
- BridgeLogger: Namespaced logging with Python's logging module
- BridgeErrorHandler: Decorator turning escaped exceptions into failed results
- build_health_status: Standard health payload
- ConfigLoader: JSON config loading/saving into pydantic models
- PathUtils: Common path operations
"""

from __future__ import annotations

import json
import logging
from functools import wraps
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
)


# =============================================================================
# BridgeLogger - Namespaced logging
# =============================================================================


class BridgeLogger:
    """
    Namespaced logging for bridge components.

    Each component gets its own logger under the ``fsbridge`` root, so a
    host application can raise, lower or silence the whole tree at once.
    """

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def _ensure_configured(cls):
        """Ensure basic logging is configured."""
        if cls._configured:
            return

        root_logger = logging.getLogger("fsbridge")
        if not root_logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "[%(name)s] %(levelname)s: %(message)s"
            )
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)
            root_logger.setLevel(logging.INFO)

        cls._configured = True

    @classmethod
    def get(cls, component: str) -> logging.Logger:
        """
        Get a logger for a bridge component.

        Args:
            component: Name of the component (e.g., "FileBridge", "ConfigLoader")

        Returns:
            Logger instance for the component
        """
        cls._ensure_configured()

        logger_name = f"fsbridge.{component}"
        if logger_name not in cls._loggers:
            cls._loggers[logger_name] = logging.getLogger(logger_name)

        return cls._loggers[logger_name]


# =============================================================================
# BridgeErrorHandler - Boundary error handling
# =============================================================================


class BridgeErrorHandler:
    """
    Error handling at the bridge boundary.

    Operations convert the errors they expect into failed results themselves.
    The wrapper here catches whatever slips past them, logs it, and hands the
    caller a failed result built by ``on_error``.
    """

    @staticmethod
    def handle(
        logger: logging.Logger,
        operation: str,
        exception: Exception,
        log_level: int = logging.ERROR,
    ) -> None:
        """
        Log a failed bridge operation.

        Args:
            logger: Logger to report through
            operation: Operation that failed
            exception: The exception that occurred
            log_level: Logging level to use
        """
        logger.log(log_level, f"{operation} failed: {exception}")

    @staticmethod
    def wrap(
        operation: str,
        on_error: Callable[[Exception], Any],
        log_level: int = logging.ERROR,
    ):
        """
        Decorator for bridge methods.

        The wrapped method's instance must expose a ``logger`` attribute.

        Args:
            operation: Operation name for logging
            on_error: Builds the return value from the caught exception
            log_level: Logging level to use

        Returns:
            Decorator function
        """
        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(self, *args, **kwargs):
                try:
                    return func(self, *args, **kwargs)
                except Exception as e:
                    BridgeErrorHandler.handle(self.logger, operation, e, log_level)
                    return on_error(e)
            return wrapper
        return decorator


# =============================================================================
# Health
# =============================================================================


def build_health_status(
    component: str,
    initialized: bool,
    dependencies: List[str],
    checks: Dict[str, bool],
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a standardized health status dict.

    Args:
        component: Name of the component
        initialized: Whether the component is initialized
        dependencies: List of dependency names
        checks: Dict of check name -> passed
        details: Additional details

    Returns:
        Standardized health status dict
    """
    all_checks_passed = all(checks.values()) if checks else True

    return {
        "component": component,
        "healthy": initialized and all_checks_passed,
        "initialized": initialized,
        "dependencies": dependencies,
        "checks": checks,
        "details": details or {},
    }


# =============================================================================
# ConfigLoader - JSON config loading
# =============================================================================


ConfigT = TypeVar("ConfigT")


class ConfigLoader:
    """Loads and saves JSON config files for pydantic config models."""

    @staticmethod
    def load(
        path: Union[str, Path],
        model_class: Type[ConfigT],
        create_default: bool = True,
    ) -> Optional[ConfigT]:
        """
        Load a JSON config file into a model class.

        Args:
            path: Path to the config file
            model_class: Class with from_dict() or model_validate()
            create_default: If True and file doesn't exist, return model_class()

        Returns:
            Instance of model_class, or None if the file is missing or invalid
        """
        path = Path(path)

        if not path.exists():
            if create_default:
                return model_class()
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

            if hasattr(model_class, "from_dict"):
                return model_class.from_dict(data)
            return model_class.model_validate(data)

        except (OSError, ValueError) as e:
            # pydantic's ValidationError and JSONDecodeError are ValueErrors
            logger = BridgeLogger.get("ConfigLoader")
            logger.error(f"Failed to load config from {path}: {e}")
            return None

    @staticmethod
    def save(
        path: Union[str, Path],
        config: Any,
        create_dirs: bool = True,
    ) -> bool:
        """
        Save a config object to a JSON file.

        Args:
            path: Path to save the config
            config: Config object with to_dict() or model_dump() method
            create_dirs: Create parent directories if needed

        Returns:
            True if successful
        """
        path = Path(path)

        try:
            if create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)

            if hasattr(config, "to_dict"):
                data = config.to_dict()
            else:
                data = config.model_dump(mode="json")

            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)

            return True

        except (OSError, TypeError) as e:
            logger = BridgeLogger.get("ConfigLoader")
            logger.error(f"Failed to save config to {path}: {e}")
            return False


# =============================================================================
# PathUtils - Common path operations
# =============================================================================


class PathUtils:
    """Common path utilities."""

    @staticmethod
    def ensure_dirs(*paths: Union[str, Path]) -> None:
        """
        Ensure directories exist for the given paths.

        For file paths, creates the parent directory.
        For directory paths, creates the directory.
        """
        for path in paths:
            path = Path(path)
            if path.suffix:
                # Looks like a file path, create parent
                path.parent.mkdir(parents=True, exist_ok=True)
            else:
                path.mkdir(parents=True, exist_ok=True)


def get_logger(component: str) -> logging.Logger:
    """Shortcut for BridgeLogger.get()."""
    return BridgeLogger.get(component)
