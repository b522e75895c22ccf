"""Liveness and readiness endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from apptsync.healthchecks import check_remote_service

router = APIRouter()

__all__ = ["router"]


@router.get("/health", summary="Liveness check", operation_id="health")
async def health() -> dict[str, str]:
    """Liveness: app process is running."""
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check", operation_id="ready")
async def ready(request: Request) -> JSONResponse:
    """Readiness: remote appointment service reachable.

    Returns 200 when it answers, 503 otherwise.
    """
    settings = request.app.state.settings
    remote = await check_remote_service(settings.remote_url)
    return JSONResponse(
        status_code=200 if remote else 503,
        content={"ready": remote, "checks": {"remote_service": remote}},
    )
