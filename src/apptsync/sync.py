"""Synchronization operations: remote call, then store dispatch."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import tzinfo
from typing import TYPE_CHECKING, Any

from apptsync.errors import RemoteWriteError, ValidationError
from apptsync.logging import get_logger
from apptsync.store.actions import (
    AppointmentAdded,
    AppointmentDeleted,
    AppointmentUpdated,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
)
from apptsync.transcoder import decode_from_wire, encode_for_wire

if TYPE_CHECKING:
    from apptsync.remote.service import RemoteAppointmentService
    from apptsync.store.container import AppointmentStore

__all__ = ["AppointmentSync"]

log = get_logger("sync")


class AppointmentSync:
    """The four operations that keep the store in step with the remote service.

    Each operation dispatches only after its own remote call settles, so the
    store sees outcomes in resolve order, not call order. Operations never
    look at each other's progress.
    """

    def __init__(
        self,
        store: AppointmentStore,
        remote: RemoteAppointmentService,
        tz: tzinfo | None = None,
    ) -> None:
        self._store = store
        self._remote = remote
        self._tz = tz

    async def fetch_appointments(self) -> None:
        """Replace the store contents with the remote list.

        Failures end up in ``state.error``; nothing is raised.
        """
        self._store.dispatch(FetchStarted())
        try:
            data = await self._remote.list_appointments()
            self._store.dispatch(FetchSucceeded(appointments=tuple(data)))
        except Exception as exc:
            log.warning("fetch_failed", error=str(exc))
            self._store.dispatch(FetchFailed(message=str(exc)))
            return
        log.info("fetch_succeeded", count=len(data))

    async def add_appointment(self, ui_input: Mapping[str, Any]) -> dict[str, Any]:
        """Create remotely and append the server's record, decoded to UI shape.

        The service assigns the id; any ``id`` on the input is dropped.
        """
        with self._write_guard("add"):
            wire = encode_for_wire(ui_input, self._tz)
            wire.pop("id", None)
            created = await self._remote.create_appointment(wire)
            try:
                record = decode_from_wire(created, self._tz)
            except Exception as exc:
                raise RemoteWriteError(f"Create returned an unreadable appointment: {exc}") from exc

        self._store.dispatch(AppointmentAdded(record=record))
        log.info("appointment_added", appointment_id=record["id"])
        return record

    async def update_appointment(self, ui_input: Mapping[str, Any]) -> dict[str, Any]:
        """Replace remotely, then store the caller's record as given."""
        with self._write_guard("update"):
            if ui_input.get("id") is None:
                raise ValidationError("update_appointment requires an id")
            wire = encode_for_wire(ui_input, self._tz)
            await self._remote.update_appointment(ui_input["id"], wire)

        record = dict(ui_input)
        self._store.dispatch(AppointmentUpdated(record=record))
        log.info("appointment_updated", appointment_id=record["id"])
        return record

    async def delete_appointment(self, appointment_id: Any) -> None:
        with self._write_guard("delete"):
            await self._remote.delete_appointment(appointment_id)

        self._store.dispatch(AppointmentDeleted(appointment_id=appointment_id))
        log.info("appointment_deleted", appointment_id=appointment_id)

    @contextmanager
    def _write_guard(self, operation: str) -> Iterator[None]:
        """Record a failed write in the store, then re-raise it to the caller.

        Typed errors propagate as-is; anything else becomes RemoteWriteError.
        """
        try:
            yield
        except (RemoteWriteError, ValidationError) as exc:
            self._record_failure(operation, exc)
            raise
        except Exception as exc:
            self._record_failure(operation, exc)
            raise RemoteWriteError(str(exc)) from exc

    def _record_failure(self, operation: str, exc: Exception) -> None:
        log.warning("write_failed", operation=operation, error=str(exc))
        self._store.dispatch(FetchFailed(message=str(exc)))
