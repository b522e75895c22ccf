"""Appointment endpoints backed by the shared AppointmentView."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

router = APIRouter()

__all__ = ["router"]

logger = logging.getLogger(__name__)


class AppointmentIn(BaseModel):
    """Appointment as edited in a form (UI shape, without id)."""

    name: str
    date: str = ""  # YYYY-MM-DD, empty = now
    time: str = ""  # HH:MM, empty = midnight
    description: str = ""
    attendee: str = ""


class AppointmentOut(BaseModel):
    id: int | str | None
    name: str
    date: str
    time: str
    description: str | None = ""
    attendee: str | None = ""


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentOut]
    loading: bool
    error: str | None = None


def _resolve_id(raw: str, request: Request) -> Any:
    """Map a path segment onto the id of a stored record.

    Path ids arrive as text while the service may hand out ints or strings,
    so the stored ids decide. Unknown numeric segments fall back to int.
    """
    for record in request.app.state.store.state.appointments:
        if str(record.get("id")) == raw:
            return record.get("id")
    return int(raw) if raw.isdigit() else raw


@router.get(
    "/appointments",
    response_model=AppointmentListResponse,
    summary="Current appointments, normalized",
    operation_id="list_appointments",
)
async def list_appointments(request: Request) -> dict[str, Any]:
    return request.app.state.view.snapshot()  # type: ignore[no-any-return]


@router.post(
    "/appointments/sync",
    response_model=AppointmentListResponse,
    summary="Reload appointments from the remote service",
    operation_id="sync_appointments",
)
async def sync_appointments(request: Request) -> dict[str, Any]:
    """Fetch failures are reported in ``error``, never as an HTTP error."""
    view = request.app.state.view
    await view.fetch_appointments()
    return view.snapshot()  # type: ignore[no-any-return]


@router.post(
    "/appointments",
    response_model=AppointmentOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create an appointment",
    operation_id="create_appointment",
)
async def create_appointment(appointment: AppointmentIn, request: Request) -> dict[str, Any]:
    record = await request.app.state.view.add_appointment(appointment.model_dump())
    logger.info("Appointment %s created", record["id"])
    return record  # type: ignore[no-any-return]


@router.put(
    "/appointments/{appointment_id}",
    response_model=AppointmentOut,
    summary="Replace an appointment",
    operation_id="update_appointment",
)
async def update_appointment(
    appointment_id: str, appointment: AppointmentIn, request: Request
) -> dict[str, Any]:
    payload = {"id": _resolve_id(appointment_id, request), **appointment.model_dump()}
    return await request.app.state.view.update_appointment(payload)  # type: ignore[no-any-return]


@router.delete(
    "/appointments/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an appointment",
    operation_id="delete_appointment",
)
async def delete_appointment(appointment_id: str, request: Request) -> Response:
    await request.app.state.view.delete_appointment(_resolve_id(appointment_id, request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
