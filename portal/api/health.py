"""
Health check API endpoint.

Reports the health of the bridge served by this app.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Response


def create_router(bridge) -> APIRouter:
    router = APIRouter()

    @router.get("/api/health")
    def api_health(response: Response) -> Dict[str, Any]:
        """
        Get bridge health.

        Returns 200 when healthy, 503 when unhealthy.

        Health semantics:
        - initialized: the bridge exists in this process
        - healthy: initialized + base path exists and is readable/writable
        """
        status = bridge.get_health_status()

        if not status.get("healthy", False):
            response.status_code = 503

        return {
            "healthy": status.get("healthy", False),
            "components": {"FileBridge": status},
        }

    return router


__all__ = ["create_router"]
