"""Typed errors raised by the sync layer."""

from __future__ import annotations

__all__ = [
    "AppointmentSyncError",
    "FetchError",
    "RemoteWriteError",
    "ValidationError",
]


class AppointmentSyncError(Exception):
    """Base class for every error raised by apptsync."""


class ValidationError(AppointmentSyncError):
    """Input could not be interpreted (bad date/time, missing id, unknown action)."""


class FetchError(AppointmentSyncError):
    """Listing appointments from the remote service failed."""


class RemoteWriteError(AppointmentSyncError):
    """A create, update or delete against the remote service failed."""
