"""Shared fixtures for integration tests.

These tests exercise the real stack end-to-end:
    HTTP surface → view → sync → httpx client → remote service

No mocks on internal components. The remote appointment service is a small
fake backend mounted on an httpx MockTransport, so CI stays offline.
"""

from __future__ import annotations

import itertools
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from apptsync.api.app import build_state, create_app
from apptsync.remote.http_client import HttpAppointmentService
from apptsync.settings import Settings


class FakeBackend:
    """Server-side rules of the remote service: it assigns ids, PUT answers 204.

    With ``string_ids`` set, ids are handed out and matched as strings.
    """

    def __init__(self) -> None:
        self.records: dict[int | str, dict[str, Any]] = {}
        self.requests: list[tuple[str, str]] = []
        self.fail_writes = False
        self.string_ids = False
        self._ids = itertools.count(100)

    def seed(self, *records: dict[str, Any]) -> None:
        for record in records:
            self.records[record["id"]] = dict(record)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        parts = request.url.path.rstrip("/").split("/")
        if parts[1:3] != ["api", "appointment"]:
            return httpx.Response(404)
        item_id: int | str | None = None
        if len(parts) > 3:
            item_id = parts[3] if self.string_ids else int(parts[3])

        if request.method == "GET" and item_id is None:
            return httpx.Response(200, json=list(self.records.values()))
        if self.fail_writes:
            return httpx.Response(503, json={"detail": "maintenance"})
        if request.method == "POST" and item_id is None:
            new_id = next(self._ids)
            record = {**json.loads(request.content), "id": str(new_id) if self.string_ids else new_id}
            self.records[record["id"]] = record
            return httpx.Response(201, json=record)
        if item_id not in self.records:
            return httpx.Response(404)
        if request.method == "PUT":
            self.records[item_id] = {**json.loads(request.content), "id": item_id}
            return httpx.Response(204)
        if request.method == "DELETE":
            del self.records[item_id]
            return httpx.Response(200)
        return httpx.Response(405)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
async def client(backend: FakeBackend) -> AsyncIterator[AsyncClient]:
    """ASGI client against the real app, wired to the fake backend over HTTP."""
    app = create_app()
    remote = HttpAppointmentService(
        base_url="http://remote.test",
        transport=httpx.MockTransport(backend),
    )
    build_state(app, Settings(remote_url="http://remote.test", timezone="UTC"), remote=remote)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.state.store.close()
    await remote.close()
