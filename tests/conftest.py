"""Shared fixtures for unit tests."""

from __future__ import annotations

from datetime import UTC, tzinfo
from typing import Any

import pytest

from apptsync.remote.service import InMemoryAppointmentService
from apptsync.store.container import AppointmentStore
from apptsync.sync import AppointmentSync
from apptsync.view import AppointmentView


@pytest.fixture()
def tz() -> tzinfo:
    """Pin conversions to UTC so results don't depend on the host zone."""
    return UTC


@pytest.fixture()
def wire_appointment() -> dict[str, Any]:
    """Appointment as the remote service returns it."""
    return {
        "id": 1,
        "title": "Dentist",
        "date": "2024-05-01T09:30:00Z",
        "description": "",
        "attendee": "",
    }


@pytest.fixture()
def ui_appointment() -> dict[str, Any]:
    """Appointment as a form submits it."""
    return {
        "name": "Demo",
        "date": "2024-06-01",
        "time": "14:00",
        "description": "",
        "attendee": "Bob",
    }


@pytest.fixture()
def store() -> AppointmentStore:
    return AppointmentStore()


@pytest.fixture()
def memory_service() -> InMemoryAppointmentService:
    return InMemoryAppointmentService()


@pytest.fixture()
def sync(
    store: AppointmentStore, memory_service: InMemoryAppointmentService, tz: tzinfo
) -> AppointmentSync:
    return AppointmentSync(store, memory_service, tz=tz)


@pytest.fixture()
def view(store: AppointmentStore, sync: AppointmentSync, tz: tzinfo) -> AppointmentView:
    return AppointmentView(store, sync, tz=tz)
