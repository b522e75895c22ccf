"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from apptsync.api.routes import appointments, health
from apptsync.errors import RemoteWriteError
from apptsync.errors import ValidationError as SyncValidationError
from apptsync.logging import configure_logging, new_correlation_id, use_correlation_id
from apptsync.remote.http_client import HttpAppointmentService
from apptsync.remote.service import InMemoryAppointmentService, RemoteAppointmentService
from apptsync.settings import Settings
from apptsync.store.container import AppointmentStore
from apptsync.sync import AppointmentSync
from apptsync.view import AppointmentView

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

__all__ = ["build_state", "create_app"]

logger = logging.getLogger(__name__)

_ERROR_CODE_BY_STATUS: dict[int, str] = {
    502: "UPSTREAM_ERROR",
}


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Inject correlation_id and request duration headers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        cid = use_correlation_id(request.headers.get("x-correlation-id"))
        request.state.request_id = cid

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        response.headers["x-correlation-id"] = cid
        response.headers["x-request-duration-ms"] = f"{duration * 1000:.1f}"
        return response


def _resolve_request_id(request: Request) -> str:
    state_request_id = getattr(request.state, "request_id", "")
    if state_request_id:
        return state_request_id
    header_request_id = request.headers.get("x-correlation-id", "")
    if header_request_id:
        request.state.request_id = header_request_id
        return header_request_id
    generated = new_correlation_id()
    request.state.request_id = generated
    return generated


def _error_payload(error_code: str, message: str, request_id: str, *, details: Any = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "error_code": error_code,
        "message": message,
        "request_id": request_id,
    }
    if details is not None:
        payload["details"] = details
    return payload


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    request_id = _resolve_request_id(request)
    status_code = exc.status_code

    if status_code in _ERROR_CODE_BY_STATUS:
        error_code = _ERROR_CODE_BY_STATUS[status_code]
    elif 400 <= status_code < 500:
        error_code = "INVALID_REQUEST"
    else:
        error_code = "INTERNAL_ERROR"

    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(error_code, message, request_id),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    request_id = _resolve_request_id(request)
    return JSONResponse(
        status_code=422,
        content=_error_payload(
            "INVALID_REQUEST",
            "Request validation failed",
            request_id,
            details=exc.errors(),
        ),
    )


async def _sync_validation_handler(request: Request, exc: SyncValidationError) -> JSONResponse:
    request_id = _resolve_request_id(request)
    return JSONResponse(
        status_code=422,
        content=_error_payload("INVALID_REQUEST", str(exc), request_id),
    )


async def _remote_write_handler(request: Request, exc: RemoteWriteError) -> JSONResponse:
    request_id = _resolve_request_id(request)
    return JSONResponse(
        status_code=502,
        content=_error_payload("UPSTREAM_ERROR", str(exc), request_id),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _resolve_request_id(request)
    logger.exception("Unhandled application exception", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_payload("INTERNAL_ERROR", "Internal server error", request_id),
    )


def _build_remote(settings: Settings) -> RemoteAppointmentService:
    if not settings.remote_url:
        logger.info("No remote_url configured — using in-memory appointment service")
        return InMemoryAppointmentService()
    return HttpAppointmentService(
        base_url=settings.remote_url,
        timeout=settings.request_timeout,
    )


def build_state(
    app: FastAPI,
    settings: Settings,
    remote: RemoteAppointmentService | None = None,
) -> None:
    """Wire settings, store, sync layer and view onto ``app.state``."""
    tz = settings.resolve_timezone()
    store = AppointmentStore()
    remote = remote if remote is not None else _build_remote(settings)
    sync = AppointmentSync(store, remote, tz=tz)

    app.state.settings = settings
    app.state.store = store
    app.state.remote = remote
    app.state.view = AppointmentView(store, sync, tz=tz)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Startup
    settings = Settings()
    configure_logging(json_output=settings.log_json, level=settings.log_level)
    build_state(app, settings)

    yield

    # Shutdown: the store is dropped with the app
    app.state.store.close()
    await app.state.remote.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Appointment Sync",
        version="0.1.0",
        description="Appointment state kept in step with a remote appointment service.",
        lifespan=lifespan,
    )
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SyncValidationError, _sync_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RemoteWriteError, _remote_write_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)
    app.add_middleware(ObservabilityMiddleware)
    app.include_router(health.router, tags=["health"])
    app.include_router(appointments.router, tags=["appointments"])
    return app


app = create_app()
