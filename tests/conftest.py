"""
Pytest configuration and fixtures for fsbridge tests.
"""

import gzip
import os
import shutil
import sys
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, Generator, Union

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from fsbridge.FileBridge import BridgeConfig, FileBridge


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup; restore permissions tests may have removed
    for root, dirs, _ in os.walk(temp_path):
        for d in dirs:
            os.chmod(os.path.join(root, d), 0o755)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def temp_data_dir(temp_dir: Path) -> Path:
    """Create a temporary data directory structure."""
    data_dir = temp_dir / "data"
    (data_dir / "config").mkdir(parents=True, exist_ok=True)
    return data_dir


@pytest.fixture
def sample_folder(temp_dir: Path) -> Path:
    """Create a sample folder with test files."""
    folder = temp_dir / "sample_folder"
    folder.mkdir(parents=True, exist_ok=True)

    (folder / "readme.txt").write_text("Hello World")
    (folder / "data.json").write_text('{"key": "value"}')

    subfolder = folder / "subfolder"
    subfolder.mkdir()
    (subfolder / "nested.txt").write_text("Nested content")

    return folder


@pytest.fixture
def bridge(sample_folder: Path) -> FileBridge:
    """Bridge whose relative paths resolve inside the sample folder."""
    return FileBridge(BridgeConfig(base_path=str(sample_folder)))


@pytest.fixture
def make_zip(temp_dir: Path):
    """
    Build a ZIP archive from a name -> content mapping.

    A content of None makes a directory entry. Entries keep insertion order.
    """
    def _make(name: str, entries: Dict[str, Union[bytes, str, None]]) -> Path:
        path = temp_dir / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry_name, content in entries.items():
                if content is None:
                    zf.writestr(entry_name if entry_name.endswith("/") else entry_name + "/", b"")
                else:
                    zf.writestr(entry_name, content)
        return path
    return _make


@pytest.fixture
def make_gzip(temp_dir: Path):
    """Write gzip-compressed bytes to a file."""
    def _make(name: str, data: bytes) -> Path:
        path = temp_dir / name
        path.write_bytes(gzip.compress(data))
        return path
    return _make


@pytest.fixture
def umask_022():
    """Run with a predictable umask."""
    old = os.umask(0o022)
    yield
    os.umask(old)


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset module-level state between tests."""
    yield
    import fsbridge.FileBridge as file_bridge
    file_bridge._bridge = None
    file_bridge._initialized = False
    file_bridge._config_path = None


