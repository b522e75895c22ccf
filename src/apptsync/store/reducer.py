"""
Pure appointment reducer.

(state, action) -> new_state

Rules:
- Pure: never mutates its input, no IO, no clocks.
- Deterministic: output depends only on inputs.
- Total over known actions; anything else raises ValidationError.
- Survivors of UPDATE/DELETE keep their positions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any

from apptsync.errors import ValidationError
from apptsync.store.actions import (
    Action,
    AppointmentAdded,
    AppointmentDeleted,
    AppointmentUpdated,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
)
from apptsync.store.state import AppointmentState

__all__ = ["reduce"]


def _fetch_started(state: AppointmentState, action: FetchStarted) -> AppointmentState:
    return replace(state, loading=True)


def _fetch_succeeded(state: AppointmentState, action: FetchSucceeded) -> AppointmentState:
    return replace(
        state,
        loading=False,
        appointments=tuple(dict(r) for r in action.appointments),
    )


def _fetch_failed(state: AppointmentState, action: FetchFailed) -> AppointmentState:
    return replace(state, loading=False, error=action.message)


def _added(state: AppointmentState, action: AppointmentAdded) -> AppointmentState:
    return replace(state, appointments=(*state.appointments, dict(action.record)))


def _deleted(state: AppointmentState, action: AppointmentDeleted) -> AppointmentState:
    return replace(
        state,
        appointments=tuple(
            r for r in state.appointments if r.get("id") != action.appointment_id
        ),
    )


def _updated(state: AppointmentState, action: AppointmentUpdated) -> AppointmentState:
    target = action.record.get("id")
    return replace(
        state,
        appointments=tuple(
            dict(action.record) if r.get("id") == target else r
            for r in state.appointments
        ),
    )


_HANDLERS: dict[type, Callable[[AppointmentState, Any], AppointmentState]] = {
    FetchStarted: _fetch_started,
    FetchSucceeded: _fetch_succeeded,
    FetchFailed: _fetch_failed,
    AppointmentAdded: _added,
    AppointmentDeleted: _deleted,
    AppointmentUpdated: _updated,
}


def reduce(state: AppointmentState, action: Action) -> AppointmentState:
    """Apply one action and return the next state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise ValidationError(f"Unrecognized action: {action!r}")
    return handler(state, action)
