"""Action values understood by the appointment reducer.

Actions describe facts that have occurred; they carry data only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

__all__ = [
    "Action",
    "ActionType",
    "AppointmentAdded",
    "AppointmentDeleted",
    "AppointmentUpdated",
    "FetchFailed",
    "FetchStarted",
    "FetchSucceeded",
]


class ActionType(str, Enum):
    FETCH_START = "FETCH_START"
    FETCH_SUCCESS = "FETCH_SUCCESS"
    FETCH_ERROR = "FETCH_ERROR"
    ADD = "ADD"
    DELETE = "DELETE"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class FetchStarted:
    type: ClassVar[ActionType] = ActionType.FETCH_START


@dataclass(frozen=True)
class FetchSucceeded:
    appointments: tuple[dict[str, Any], ...]
    type: ClassVar[ActionType] = ActionType.FETCH_SUCCESS


@dataclass(frozen=True)
class FetchFailed:
    """Recorded for failed fetches and failed writes alike."""

    message: str
    type: ClassVar[ActionType] = ActionType.FETCH_ERROR


@dataclass(frozen=True)
class AppointmentAdded:
    record: dict[str, Any]
    type: ClassVar[ActionType] = ActionType.ADD


@dataclass(frozen=True)
class AppointmentDeleted:
    appointment_id: Any
    type: ClassVar[ActionType] = ActionType.DELETE


@dataclass(frozen=True)
class AppointmentUpdated:
    record: dict[str, Any]
    type: ClassVar[ActionType] = ActionType.UPDATE


Action = (
    FetchStarted
    | FetchSucceeded
    | FetchFailed
    | AppointmentAdded
    | AppointmentDeleted
    | AppointmentUpdated
)
