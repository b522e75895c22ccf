"""Health check for the remote appointment service."""

from __future__ import annotations

import logging

import httpx

__all__ = ["check_remote_service"]

logger = logging.getLogger(__name__)

_TIMEOUT = 2  # seconds — fast-fail for readiness


async def check_remote_service(base_url: str) -> bool:
    """GET the appointment list once. Returns False on any failure.

    An empty ``base_url`` means the in-memory service, which is always ready.
    """
    if not base_url:
        return True
    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=_TIMEOUT) as client:
            resp = await client.get("/api/appointment")
            return resp.status_code == 200  # noqa: TRY300
    except Exception:
        logger.warning("Remote appointment service health-check failed", exc_info=True)
        return False
