"""
Station monitor data models.

Shared by the monitor, the text views, the CLI and the web API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from collector.metar_fetcher import MetarReading


class MonitorState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


# Outbound display status (tri-state)
DISPLAY_LOADING = "loading"
DISPLAY_ERROR = "error"
DISPLAY_DATA = "data"


@dataclass(frozen=True)
class MonitorSnapshot:
    """
    Immutable view of the monitor at one point in time.
    A new snapshot replaces the old one on every transition.
    """
    state: MonitorState
    station_id: str
    reading: Optional[MetarReading] = None
    error: Optional[str] = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_status(self) -> str:
        # Idle only lasts until the initial load starts, so it shows as loading.
        if self.state in (MonitorState.IDLE, MonitorState.LOADING):
            return DISPLAY_LOADING
        if self.state == MonitorState.FAILED:
            return DISPLAY_ERROR
        return DISPLAY_DATA

    @property
    def can_refresh(self) -> bool:
        return self.state != MonitorState.LOADING

    def to_dict(self) -> Dict[str, Any]:
        reading = self.reading
        return {
            "status": self.display_status,
            "state": self.state.value,
            "station_id": self.station_id,
            "temperature_c": reading.temperature_c if reading else None,
            "observation_time": (
                reading.observation_time.isoformat()
                if reading and reading.observation_time else None
            ),
            "raw_metar": reading.raw_metar if reading else None,
            "error": self.error,
            "updated_at": self.updated_at.isoformat(),
        }
