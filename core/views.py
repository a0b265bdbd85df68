"""
Text views for the station monitor: loading, error and result.
"""

from __future__ import annotations

from typing import List

from .models import DISPLAY_ERROR, DISPLAY_LOADING, MonitorSnapshot

LOADING_TEXT = "Fetching Weather Data..."
RESULT_TITLE = "Current Temperature at Station"


def format_temperature(temperature_c: int) -> str:
    return f"{temperature_c}°C"


def format_observation_time(snapshot: MonitorSnapshot) -> str:
    """'Last updated' line, empty when the report had no day/time group."""
    reading = snapshot.reading
    if reading is None or reading.observation_time is None:
        return ""
    return f"Last updated: {reading.observation_time.strftime('%Y-%m-%d %H:%M')} UTC"


def render_text(snapshot: MonitorSnapshot) -> str:
    status = snapshot.display_status
    if status == DISPLAY_LOADING:
        return LOADING_TEXT

    if status == DISPLAY_ERROR:
        return f"Error\n{snapshot.error}"

    lines: List[str] = [
        RESULT_TITLE,
        snapshot.station_id,
        format_temperature(snapshot.reading.temperature_c),
    ]
    updated = format_observation_time(snapshot)
    if updated:
        lines.append(updated)
    return "\n".join(lines)
