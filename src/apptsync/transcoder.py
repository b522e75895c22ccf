"""Conversion between the wire and UI appointment shapes.

Wire shape (remote service)::

    {"id", "title", "date": "<ISO-8601 timestamp>", "description", "attendee"}

UI shape (forms and read views)::

    {"id", "name", "date": "YYYY-MM-DD", "time": "HH:MM", "description", "attendee"}

Every function takes an optional ``tz``. ``None`` means the process's local
timezone. Combining local date/time fields into a UTC timestamp and splitting
it back is only lossless while ``tz`` stays the same between the two calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime, tzinfo
from typing import Any

from apptsync.errors import ValidationError
from apptsync.logging import get_logger

__all__ = [
    "combine_date_time",
    "decode_from_wire",
    "encode_for_wire",
    "format_date",
    "format_time",
    "normalize_for_display",
]

log = get_logger("transcoder")

_DATE_TIME_SEPARATOR = "T"


def _localize(naive: datetime, tz: tzinfo | None) -> datetime:
    """Attach ``tz`` (or the system zone) to a naive wall-clock datetime."""
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def _to_local(moment: datetime, tz: tzinfo | None) -> datetime:
    if moment.tzinfo is None:
        moment = _localize(moment, tz)
    return moment.astimezone(tz)


def _parse_timestamp(value: str | datetime, tz: tzinfo | None) -> datetime:
    """Parse a date or datetime into an aware datetime.

    Naive input (including a bare ``YYYY-MM-DD``) is read as local wall time.
    """
    if isinstance(value, datetime):
        moment = value
    elif not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}")
    else:
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid date: {value!r}") from exc
    if moment.tzinfo is None:
        moment = _localize(moment, tz)
    return moment


def _parse_time(value: str) -> tuple[int, int]:
    parts = value.strip().split(":")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except (IndexError, ValueError) as exc:
        raise ValidationError(f"Invalid time: {value!r}") from exc
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValidationError(f"Invalid time: {value!r}")
    return hours, minutes


def _format_timestamp(moment: datetime) -> str:
    """UTC, millisecond precision, ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def combine_date_time(date_str: str | None, time_str: str | None, tz: tzinfo | None = None) -> str:
    """Merge a UI date and time into one UTC timestamp string.

    An empty date means "now". A time overrides the hour and minute of the
    parsed date in local time; without one the date's own time (midnight for
    a bare date) is kept.
    """
    if not date_str:
        return _format_timestamp(datetime.now(UTC))

    moment = _parse_timestamp(date_str, tz)
    if time_str:
        hours, minutes = _parse_time(time_str)
        wall = _to_local(moment, tz).replace(tzinfo=None, hour=hours, minute=minutes)
        moment = _localize(wall, tz)
    return _format_timestamp(moment)


def format_date(value: str | datetime | None, tz: tzinfo | None = None) -> str:
    """Local calendar date (``YYYY-MM-DD``) of a timestamp, or ``""``."""
    if not value:
        return ""
    return _to_local(_parse_timestamp(value, tz), tz).date().isoformat()


def format_time(value: str | datetime | None, tz: tzinfo | None = None) -> str:
    """Local ``HH:MM`` of a timestamp, or ``""``."""
    if not value:
        return ""
    local = _to_local(_parse_timestamp(value, tz), tz)
    return f"{local.hour:02d}:{local.minute:02d}"


def encode_for_wire(ui: Mapping[str, Any], tz: tzinfo | None = None) -> dict[str, Any]:
    """UI shape → wire shape. ``id`` is carried only when the input has one."""
    wire: dict[str, Any] = {}
    if ui.get("id") is not None:
        wire["id"] = ui["id"]
    wire["title"] = ui.get("name", "")
    wire["date"] = combine_date_time(ui.get("date"), ui.get("time"), tz)
    wire["description"] = ui.get("description", "")
    wire["attendee"] = ui.get("attendee") or ""
    return wire


def decode_from_wire(wire: Mapping[str, Any], tz: tzinfo | None = None) -> dict[str, Any]:
    """Wire shape → UI shape."""
    return {
        "id": wire.get("id"),
        "name": wire.get("title", ""),
        "date": format_date(wire.get("date"), tz),
        "time": format_time(wire.get("date"), tz),
        "description": wire.get("description", ""),
        "attendee": wire.get("attendee", ""),
    }


def _is_combined(value: Any) -> bool:
    if isinstance(value, datetime):
        return True
    return isinstance(value, str) and _DATE_TIME_SEPARATOR in value


def normalize_for_display(record: Mapping[str, Any], tz: tzinfo | None = None) -> dict[str, Any]:
    """Project a stored record, in either shape, onto the UI shape.

    A ``date`` holding a combined timestamp is split; otherwise ``date`` and
    ``time`` are taken as already separate. An explicit ``time`` wins over the
    split one. Idempotent.
    """
    raw_date = record.get("date")
    date_part = raw_date or ""
    split_time = ""
    if _is_combined(raw_date):
        try:
            date_part = format_date(raw_date, tz)
            split_time = format_time(raw_date, tz)
        except ValidationError:
            log.warning("unparseable_timestamp", record_id=record.get("id"), date=raw_date)
            date_part = raw_date

    return {
        "id": record.get("id"),
        "name": record.get("name") or record.get("title") or "",
        "date": date_part,
        "time": record.get("time") or split_time,
        "description": record.get("description", ""),
        "attendee": record.get("attendee", ""),
    }
