"""Application settings via environment variables."""

from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings"]


class Settings(BaseSettings):
    """Central configuration — all values from environment."""

    model_config = SettingsConfigDict(env_prefix="APPTSYNC_")

    # Remote appointment service; empty means the in-memory service
    remote_url: str = "http://localhost:5137"

    # Seconds; None waits for the remote service indefinitely
    request_timeout: float | None = None

    # IANA zone used to split/combine date and time; empty = process local
    timezone: str = ""

    # Logging
    log_json: bool = True
    log_level: str = "INFO"

    def resolve_timezone(self) -> tzinfo | None:
        """Resolve ``timezone`` to a tzinfo, or None for the local zone."""
        if not self.timezone:
            return None
        return ZoneInfo(self.timezone)
