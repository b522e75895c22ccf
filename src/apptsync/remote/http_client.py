"""HTTP client for the remote appointment service, with typed errors."""

from __future__ import annotations

from typing import Any

import httpx

from apptsync.errors import FetchError, RemoteWriteError

__all__ = ["HttpAppointmentService"]

_RESOURCE = "/api/appointment"


class HttpAppointmentService:
    """JSON over HTTP against ``{base_url}/api/appointment``.

    ``timeout=None`` leaves requests unbounded; pass a number of seconds to
    cap them. ``transport`` is forwarded to httpx (used to plug in a
    MockTransport).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5137",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def list_appointments(self) -> list[dict[str, Any]]:
        """GET the full list.

        Raises FetchError if the service is unreachable, answers with an
        error status, or returns something other than a JSON array of objects.
        """
        try:
            resp = await self._client.get(_RESOURCE)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise FetchError(f"Appointment list failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Appointment list is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise FetchError(f"Appointment list must be a JSON array, got {type(data).__name__}")
        if not all(isinstance(item, dict) for item in data):
            raise FetchError("Appointment list must contain only JSON objects")
        return data

    async def create_appointment(self, wire: dict[str, Any]) -> dict[str, Any]:
        resp = await self._write("POST", _RESOURCE, json=wire)
        try:
            return resp.json()  # type: ignore[no-any-return]
        except ValueError as e:
            raise RemoteWriteError(f"Create returned invalid JSON: {e}") from e

    async def update_appointment(
        self, appointment_id: Any, wire: dict[str, Any]
    ) -> dict[str, Any] | None:
        resp = await self._write("PUT", f"{_RESOURCE}/{appointment_id}", json=wire)
        if resp.status_code == httpx.codes.NO_CONTENT or not resp.content:
            return None
        try:
            return resp.json()  # type: ignore[no-any-return]
        except ValueError as e:
            raise RemoteWriteError(f"Update returned invalid JSON: {e}") from e

    async def delete_appointment(self, appointment_id: Any) -> None:
        await self._write("DELETE", f"{_RESOURCE}/{appointment_id}")

    async def _write(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteWriteError(f"{method} {url} failed: {e}") from e
        return resp

    async def close(self) -> None:
        await self._client.aclose()
