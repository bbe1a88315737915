"""
Tests for the HTTP portal in front of FileBridge.
"""

import base64
import io
import zipfile
import pytest
from pathlib import Path

from fastapi.testclient import TestClient

from fsbridge.FileBridge import FileBridge, BridgeConfig
from portal.run import create_app


@pytest.fixture
def client(sample_folder: Path) -> TestClient:
    bridge = FileBridge(BridgeConfig(base_path=str(sample_folder)))
    return TestClient(create_app(bridge))


class TestFileRoutes:
    """Tests for /api/bridge routes."""

    def test_write_then_read_binary(self, client, sample_folder):
        payload = base64.b64encode(b"\x00\x01\xff").decode("ascii")

        write = client.post("/api/bridge/write_file", json={
            "path": "bin.dat", "content": payload, "options": {"mode": "Binary"},
        })
        read = client.post("/api/bridge/read_file", json={"path": "bin.dat", "options": "Binary"})

        assert write.status_code == 200
        assert write.json() == {"ok": True, "message": "Success"}
        assert read.json() == {"ok": True, "message": payload}
        assert (sample_folder / "bin.dat").read_bytes() == b"\x00\x01\xff"

    def test_failure_is_not_an_http_error(self, client):
        response = client.post("/api/bridge/read_file", json={"path": "missing.txt"})

        assert response.status_code == 200
        assert response.json()["ok"] is False

    def test_unknown_mode_reported_in_envelope(self, client):
        response = client.post("/api/bridge/write_file", json={
            "path": "x.txt", "content": "x", "options": {"mode": "Hex"},
        })

        assert response.status_code == 200
        assert response.json()["ok"] is False

    def test_file_exists_and_read_dir(self, client):
        exists = client.post("/api/bridge/file_exists", json={"path": "readme.txt"}).json()
        listing = client.post("/api/bridge/read_dir", json={"path": ""}).json()

        assert exists == {"ok": True, "message": "true"}
        assert listing["ok"] is True
        assert "subfolder," in listing["message"]

    def test_copy_move_remove(self, client, sample_folder):
        assert client.post("/api/bridge/copy_file", json={"src": "readme.txt", "dst": "c.txt"}).json()["ok"]
        assert client.post("/api/bridge/move_file", json={"source": "c.txt", "target": "m.txt"}).json()["ok"]
        assert client.post("/api/bridge/make_dir", json={"path": "made"}).json()["ok"]
        assert client.post("/api/bridge/remove_file", json={"path": "m.txt"}).json()["ok"]

        assert (sample_folder / "made").is_dir()
        assert not (sample_folder / "c.txt").exists()
        assert not (sample_folder / "m.txt").exists()

    def test_absolute_path(self, client, sample_folder):
        response = client.post("/api/bridge/absolute_path", json={"path": "readme.txt"}).json()

        assert response["ok"] is True
        assert Path(response["message"]) == Path(str(sample_folder)).absolute() / "readme.txt"

    def test_extract_zip_rejects_traversal(self, client, sample_folder):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("../evil.txt", b"x")
        (sample_folder / "evil.zip").write_bytes(buffer.getvalue())

        response = client.post("/api/bridge/extract_zip", json={
            "archive_path": "evil.zip", "output_dir": "out",
        }).json()

        assert response["ok"] is False
        assert not (sample_folder / "evil.txt").exists()

    def test_extract_gzip(self, client, sample_folder):
        import gzip
        (sample_folder / "a.gz").write_bytes(gzip.compress(b"abc"))

        response = client.post("/api/bridge/extract_gzip", json={
            "input_path": "a.gz", "output_path": "a.txt",
        }).json()

        assert response == {"ok": True, "message": "Success"}
        assert (sample_folder / "a.txt").read_bytes() == b"abc"

    def test_info(self, client):
        info = client.get("/api/bridge/info").json()

        assert info["component"] == "FileBridge"
        assert "extract_zip" in info["tools"]


class TestHealthRoute:
    """Tests for /api/health."""

    def test_healthy(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["healthy"] is True

    def test_missing_base_path_is_unhealthy(self, temp_dir):
        bridge = FileBridge(BridgeConfig(base_path=str(temp_dir / "gone")))
        client = TestClient(create_app(bridge))

        response = client.get("/api/health")

        assert response.status_code == 503
        assert response.json()["healthy"] is False


class TestDefaultApp:
    """Tests for building the app from the environment."""

    def test_env_configures_default_bridge(self, temp_dir, sample_folder, monkeypatch):
        monkeypatch.setenv("FSBRIDGE_CONFIG_PATH", str(temp_dir / "cfg" / "bridge.json"))
        monkeypatch.setenv("FSBRIDGE_BASE_PATH", str(sample_folder))

        client = TestClient(create_app())
        response = client.post("/api/bridge/read_file", json={"path": "readme.txt"}).json()

        assert response == {"ok": True, "message": "Hello World"}
