"""Remote appointment service — protocol + in-memory implementation."""

from __future__ import annotations

import itertools
from typing import Any, Protocol

from apptsync.errors import RemoteWriteError

__all__ = ["InMemoryAppointmentService", "RemoteAppointmentService"]


class RemoteAppointmentService(Protocol):
    """Contract of the service that owns appointments. Ids are assigned here."""

    async def list_appointments(self) -> list[dict[str, Any]]:
        """Return every appointment in wire shape. Raises FetchError."""
        ...

    async def create_appointment(self, wire: dict[str, Any]) -> dict[str, Any]:
        """Store a new appointment (no ``id``) and return it with its id. Raises RemoteWriteError."""
        ...

    async def update_appointment(
        self, appointment_id: Any, wire: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Replace an appointment; may return nothing. Raises RemoteWriteError."""
        ...

    async def delete_appointment(self, appointment_id: Any) -> None:
        """Remove an appointment. Raises RemoteWriteError."""
        ...

    async def close(self) -> None: ...


# ── In-memory implementation (dev / tests) ──────────────


class InMemoryAppointmentService:
    """Service backed by a plain dict, assigning sequential integer ids."""

    def __init__(self, seed: list[dict[str, Any]] | None = None) -> None:
        self._records: dict[Any, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        for record in seed or []:
            self._records[record["id"]] = dict(record)

    def _next_id(self) -> int:
        candidate = next(self._ids)
        while candidate in self._records:
            candidate = next(self._ids)
        return candidate

    async def list_appointments(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._records.values()]

    async def create_appointment(self, wire: dict[str, Any]) -> dict[str, Any]:
        record = {k: v for k, v in wire.items() if k != "id"}
        record["id"] = self._next_id()
        self._records[record["id"]] = record
        return dict(record)

    async def update_appointment(
        self, appointment_id: Any, wire: dict[str, Any]
    ) -> dict[str, Any] | None:
        if appointment_id not in self._records:
            raise RemoteWriteError(f"Appointment {appointment_id!r} not found")
        record = dict(wire)
        record["id"] = appointment_id
        self._records[appointment_id] = record
        return dict(record)

    async def delete_appointment(self, appointment_id: Any) -> None:
        if self._records.pop(appointment_id, None) is None:
            raise RemoteWriteError(f"Appointment {appointment_id!r} not found")

    async def close(self) -> None:
        self._records.clear()
