"""Read projection handed to consumers."""

from __future__ import annotations

from datetime import tzinfo
from typing import TYPE_CHECKING, Any

from apptsync.transcoder import normalize_for_display

if TYPE_CHECKING:
    from apptsync.store.container import AppointmentStore
    from apptsync.sync import AppointmentSync

__all__ = ["AppointmentView"]


class AppointmentView:
    """Normalized, read-only view over an AppointmentStore.

    ``appointments`` is recomputed from the current state on every access and
    is always in UI shape, whatever shape the store holds. The four
    operations are the sync layer's, unmodified.
    """

    def __init__(
        self,
        store: AppointmentStore,
        sync: AppointmentSync,
        tz: tzinfo | None = None,
    ) -> None:
        self._store = store
        self._tz = tz
        self.fetch_appointments = sync.fetch_appointments
        self.add_appointment = sync.add_appointment
        self.update_appointment = sync.update_appointment
        self.delete_appointment = sync.delete_appointment

    @property
    def appointments(self) -> list[dict[str, Any]]:
        return [normalize_for_display(r, self._tz) for r in self._store.state.appointments]

    @property
    def loading(self) -> bool:
        return self._store.state.loading

    @property
    def error(self) -> str | None:
        return self._store.state.error

    def snapshot(self) -> dict[str, Any]:
        state = self._store.state
        return {
            "appointments": [normalize_for_display(r, self._tz) for r in state.appointments],
            "loading": state.loading,
            "error": state.error,
        }
