"""Immutable snapshot of the appointment store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["AppointmentState"]


@dataclass(frozen=True)
class AppointmentState:
    """Store contents.

    ``appointments`` may hold wire-shaped records (straight from a fetch) and
    UI-shaped records (echoed by writes) side by side; readers go through
    ``normalize_for_display``. ``loading``/``error`` give the phase:
    idle (False, None), fetching (True, ...), errored (False, message).
    """

    appointments: tuple[dict[str, Any], ...] = ()
    loading: bool = False
    error: str | None = None

    @property
    def is_idle(self) -> bool:
        return not self.loading and self.error is None

    @property
    def is_errored(self) -> bool:
        return not self.loading and self.error is not None
