"""Shared fixtures for contract tests.

Contract tests validate that what this service emits conforms to the
schemas in ``specs/contracts/``: the error payload of the HTTP surface and
the wire appointment body sent to the remote service.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

_CONTRACTS = Path(__file__).resolve().parents[2] / "specs" / "contracts"


def _load_schema(name: str) -> dict[str, Any]:
    candidate = _CONTRACTS / name
    if not candidate.is_file():
        msg = f"Schema '{name}' not found in: {_CONTRACTS}"
        raise FileNotFoundError(msg)
    return json.loads(candidate.read_text(encoding="utf-8"))  # type: ignore[no-any-return]


@pytest.fixture()
def error_schema() -> dict[str, Any]:
    return _load_schema("error.schema.json")


@pytest.fixture()
def wire_appointment_schema() -> dict[str, Any]:
    return _load_schema("wire_appointment.schema.json")
