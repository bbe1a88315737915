from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from pydantic import BaseModel


OptionsBody = Dict[str, Any] | str | None


class PathRequest(BaseModel):
    """Body for operations taking a single path."""
    path: str


class WriteRequest(BaseModel):
    """Body for writing a file."""
    path: str
    content: str
    options: OptionsBody = None


class ReadRequest(BaseModel):
    """Body for reading a file."""
    path: str
    options: OptionsBody = None


class MoveRequest(BaseModel):
    source: str
    target: str


class CopyRequest(BaseModel):
    src: str
    dst: str


class ZipRequest(BaseModel):
    archive_path: str
    output_dir: str


class GzipRequest(BaseModel):
    input_path: str
    output_path: str


def create_router(bridge) -> APIRouter:
    """
    Expose a FileBridge over HTTP.

    Every operation answers 200 with the bridge's {ok, message} envelope;
    failures are reported through ``ok``, not through HTTP status codes.
    Handlers are plain functions so FastAPI runs the blocking I/O in its
    threadpool.
    """
    router = APIRouter(prefix="/api/bridge")

    @router.post("/write_file")
    def api_write_file(data: WriteRequest):
        """Write a file (Text or base64 Binary)."""
        return bridge.write_file(data.path, data.content, data.options).to_dict()

    @router.post("/read_file")
    def api_read_file(data: ReadRequest):
        """Read a file (Text or base64 Binary)."""
        return bridge.read_file(data.path, data.options).to_dict()

    @router.post("/move_file")
    def api_move_file(data: MoveRequest):
        return bridge.move_file(data.source, data.target).to_dict()

    @router.post("/remove_file")
    def api_remove_file(data: PathRequest):
        return bridge.remove_file(data.path).to_dict()

    @router.post("/copy_file")
    def api_copy_file(data: CopyRequest):
        return bridge.copy_file(data.src, data.dst).to_dict()

    @router.post("/make_dir")
    def api_make_dir(data: PathRequest):
        return bridge.make_dir(data.path).to_dict()

    @router.post("/read_dir")
    def api_read_dir(data: PathRequest):
        """List a directory as name,size,isDir records joined by |."""
        return bridge.read_dir(data.path).to_dict()

    @router.post("/absolute_path")
    def api_absolute_path(data: PathRequest):
        return bridge.absolute_path(data.path).to_dict()

    @router.post("/file_exists")
    def api_file_exists(data: PathRequest):
        return bridge.file_exists(data.path).to_dict()

    @router.post("/extract_zip")
    def api_extract_zip(data: ZipRequest):
        """Extract a ZIP archive; unsafe entry paths abort the extraction."""
        return bridge.extract_zip(data.archive_path, data.output_dir).to_dict()

    @router.post("/extract_gzip")
    def api_extract_gzip(data: GzipRequest):
        return bridge.extract_gzip(data.input_path, data.output_path).to_dict()

    @router.get("/info")
    def api_bridge_info():
        """Operation catalogue."""
        from fsbridge.FileBridge import get_info
        return get_info()

    return router


__all__ = ["create_router"]
