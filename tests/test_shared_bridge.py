"""
Tests for shared bridge utilities.
"""

import json
import logging
import pytest
from pathlib import Path

from fsbridge.shared.bridge import (
    BridgeLogger,
    BridgeErrorHandler,
    build_health_status,
    ConfigLoader,
    PathUtils,
    get_logger,
)
from fsbridge.FileBridge.models import BridgeConfig


class TestBridgeLogger:
    """Tests for BridgeLogger."""

    def test_get_returns_namespaced_logger(self):
        logger = BridgeLogger.get("TestComponent")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "fsbridge.TestComponent"

    def test_get_same_logger_for_same_name(self):
        assert BridgeLogger.get("Same") is BridgeLogger.get("Same")

    def test_get_logger_shortcut(self):
        assert get_logger("Shortcut") is BridgeLogger.get("Shortcut")


class TestBridgeErrorHandler:
    """Tests for BridgeErrorHandler."""

    def test_wrap_converts_exception(self, caplog):
        class Thing:
            logger = BridgeLogger.get("WrapTest")

            @BridgeErrorHandler.wrap("explode", lambda e: f"failed: {e}")
            def explode(self):
                raise ValueError("kaboom")

        with caplog.at_level(logging.ERROR):
            result = Thing().explode()

        assert result == "failed: kaboom"
        assert "explode failed: kaboom" in caplog.text

    def test_wrap_passes_through_return_value(self):
        class Thing:
            logger = BridgeLogger.get("WrapTest")

            @BridgeErrorHandler.wrap("fine", lambda e: None)
            def fine(self, value):
                return value * 2

        assert Thing().fine(21) == 42


class TestBuildHealthStatus:
    """Tests for build_health_status."""

    def test_healthy_when_checks_pass(self):
        status = build_health_status("C", True, ["filesystem"], {"a": True})

        assert status["healthy"] is True
        assert status["component"] == "C"

    def test_unhealthy_when_a_check_fails(self):
        status = build_health_status("C", True, [], {"a": True, "b": False})

        assert status["healthy"] is False

    def test_unhealthy_when_not_initialized(self):
        assert build_health_status("C", False, [], {})["healthy"] is False


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load_missing_returns_default(self, temp_dir):
        config = ConfigLoader.load(temp_dir / "none.json", BridgeConfig)

        assert isinstance(config, BridgeConfig)
        assert config.base_path is None

    def test_load_missing_without_default(self, temp_dir):
        assert ConfigLoader.load(temp_dir / "none.json", BridgeConfig, create_default=False) is None

    def test_save_then_load(self, temp_dir):
        path = temp_dir / "nested" / "bridge.json"
        config = BridgeConfig(base_path="/srv/data", copy_chunk_size=4096)

        assert ConfigLoader.save(path, config) is True
        loaded = ConfigLoader.load(path, BridgeConfig)

        assert loaded == config
        assert json.loads(path.read_text())["copy_chunk_size"] == 4096

    def test_load_invalid_values_returns_none(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text('{"copy_chunk_size": 0}')

        assert ConfigLoader.load(path, BridgeConfig) is None


class TestPathUtils:
    """Tests for PathUtils."""

    def test_ensure_dirs_for_file_and_directory(self, temp_dir):
        PathUtils.ensure_dirs(temp_dir / "cfg" / "x.json", temp_dir / "plain_dir")

        assert (temp_dir / "cfg").is_dir()
        assert not (temp_dir / "cfg" / "x.json").exists()
        assert (temp_dir / "plain_dir").is_dir()
