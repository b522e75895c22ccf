"""Appointment store — state holder around the pure reducer."""

from __future__ import annotations

from collections.abc import Callable

from apptsync.logging import get_logger
from apptsync.store.actions import Action
from apptsync.store.reducer import reduce
from apptsync.store.state import AppointmentState

__all__ = ["AppointmentStore", "Listener"]

log = get_logger("store")

Listener = Callable[[AppointmentState], None]


class AppointmentStore:
    """Single mutation path for appointment state.

    Built once per owning context (the API app lifespan) and handed to every
    consumer explicitly. ``close()`` ends its life: later dispatches, e.g. from
    operations still in flight, are logged and dropped.
    """

    def __init__(self, initial: AppointmentState | None = None) -> None:
        self._state = initial or AppointmentState()
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def state(self) -> AppointmentState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, action: Action) -> AppointmentState:
        """Apply ``action`` and notify listeners. Returns the resulting state."""
        if self._closed:
            log.warning("dispatch_after_close", action=type(action).__name__)
            return self._state

        self._state = reduce(self._state, action)
        log.debug(
            "action_applied",
            action=action.type.value,
            appointments=len(self._state.appointments),
            loading=self._state.loading,
        )
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()
        self._state = AppointmentState()
