"""
HTTP portal for FileBridge.

Serve the default bridge with an ASGI server's factory mode, e.g.

    uvicorn portal.run:create_app --factory

FSBRIDGE_CONFIG_PATH and FSBRIDGE_BASE_PATH (read from the environment or
a .env file) choose the config file and the directory relative paths
resolve against.
"""

import os
from typing import Optional

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI

from fsbridge import FileBridge
from fsbridge.shared.bridge import get_logger
from portal.api import files as files_api
from portal.api import health as health_api

_log = get_logger("portal")


def create_app(bridge: Optional[FileBridge.FileBridge] = None) -> FastAPI:
    """
    Build the FastAPI app serving a bridge.

    Without an explicit bridge the module-level default bridge is used,
    configured from FSBRIDGE_CONFIG_PATH and FSBRIDGE_BASE_PATH.
    """
    if bridge is None:
        config_path = os.environ.get("FSBRIDGE_CONFIG_PATH")
        base_path = os.environ.get("FSBRIDGE_BASE_PATH")
        if not FileBridge.initialize(config_path, base_path):
            raise RuntimeError("FileBridge initialization failed")
        bridge = FileBridge.get_bridge()

    app = FastAPI(title="fsbridge")
    app.include_router(files_api.create_router(bridge))
    app.include_router(health_api.create_router(bridge))

    _log.info(f"Serving {bridge!r}")
    return app
