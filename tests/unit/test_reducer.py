"""Tests for the pure appointment reducer."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from apptsync.errors import ValidationError
from apptsync.store.actions import (
    AppointmentAdded,
    AppointmentDeleted,
    AppointmentUpdated,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
)
from apptsync.store.reducer import reduce
from apptsync.store.state import AppointmentState


def _rec(appointment_id: Any, name: str) -> dict[str, Any]:
    return {"id": appointment_id, "name": name, "date": "2024-01-01", "time": "10:00"}


A, B, C, D = _rec(1, "a"), _rec(2, "b"), _rec(3, "c"), _rec(4, "d")


class TestFetchActions:
    def test_start_sets_loading(self) -> None:
        state = reduce(AppointmentState(), FetchStarted())
        assert state.loading is True
        assert state.appointments == ()

    def test_start_keeps_previous_error(self) -> None:
        state = reduce(AppointmentState(error="old"), FetchStarted())
        assert state.loading is True
        assert state.error == "old"

    def test_success_replaces_list(self) -> None:
        prior = AppointmentState(appointments=(D,), loading=True)
        state = reduce(prior, FetchSucceeded(appointments=(A, B, C)))
        assert state.loading is False
        assert state.appointments == (A, B, C)

    def test_error_records_message(self) -> None:
        prior = AppointmentState(appointments=(A,), loading=True)
        state = reduce(prior, FetchFailed(message="boom"))
        assert state.loading is False
        assert state.error == "boom"
        assert state.appointments == (A,)
        assert state.is_errored

    def test_only_latest_error_kept(self) -> None:
        state = reduce(AppointmentState(), FetchFailed(message="first"))
        state = reduce(state, FetchFailed(message="second"))
        assert state.error == "second"


class TestListActions:
    def test_add_after_fetch_preserves_order(self) -> None:
        state = reduce(AppointmentState(), FetchSucceeded(appointments=(A, B, C)))
        state = reduce(state, AppointmentAdded(record=D))
        assert state.appointments == (A, B, C, D)

    def test_delete_removes_match(self) -> None:
        state = reduce(AppointmentState(appointments=(A, B, C)), AppointmentDeleted(appointment_id=2))
        assert state.appointments == (A, C)

    def test_delete_unknown_id_is_noop(self) -> None:
        prior = AppointmentState(appointments=(A, B, C))
        state = reduce(prior, AppointmentDeleted(appointment_id=99))
        assert state.appointments == (A, B, C)

    def test_delete_uses_strict_id_equality(self) -> None:
        state = reduce(AppointmentState(appointments=(A,)), AppointmentDeleted(appointment_id="1"))
        assert state.appointments == (A,)

    def test_update_replaces_only_match_in_place(self) -> None:
        replacement = _rec(2, "b2")
        state = reduce(AppointmentState(appointments=(A, B, C)), AppointmentUpdated(record=replacement))
        assert state.appointments == (A, replacement, C)

    def test_update_unknown_id_is_noop(self) -> None:
        state = reduce(AppointmentState(appointments=(A, B)), AppointmentUpdated(record=_rec(9, "z")))
        assert state.appointments == (A, B)


class TestPurity:
    @pytest.mark.parametrize(
        "action",
        [
            FetchStarted(),
            FetchSucceeded(appointments=(D,)),
            FetchFailed(message="x"),
            AppointmentAdded(record=D),
            AppointmentDeleted(appointment_id=1),
            AppointmentUpdated(record=_rec(2, "b2")),
        ],
    )
    def test_same_input_same_output_and_input_untouched(self, action: Any) -> None:
        prior = AppointmentState(appointments=(A, B, C))
        before = copy.deepcopy(prior)

        first = reduce(prior, action)
        second = reduce(prior, action)

        assert first == second
        assert first is not prior
        assert prior == before

    def test_stored_records_are_copies(self) -> None:
        record = _rec(5, "e")
        state = reduce(AppointmentState(), AppointmentAdded(record=record))
        record["name"] = "mutated"
        assert state.appointments[0]["name"] == "e"


class TestUnknownAction:
    def test_rejected_with_validation_error(self) -> None:
        with pytest.raises(ValidationError, match="Unrecognized action"):
            reduce(AppointmentState(), object())  # type: ignore[arg-type]
