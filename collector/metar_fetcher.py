"""
Station Temperature - METAR Fetcher
Fetches the station bulletin and extracts temperature and observation time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from datetime import datetime, timezone
import logging

from config import StationConfig
from collector.metar.errors import TemperatureParseError
from collector.metar.temperature_parser import TEMPERATURE_NOT_FOUND_MESSAGE, extract_temperature
from collector.metar.tgftp_fetcher import fetch_metar_tgftp, latest_report_line
from collector.metar.timestamp_parser import extract_observation_time

logger = logging.getLogger("metar_fetcher")


@dataclass(frozen=True)
class MetarReading:
    """Temperature reading decoded from one bulletin."""
    station_id: str
    temperature_c: int
    observation_time: Optional[datetime]  # None when the DDHHMMZ group is missing
    raw_metar: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "station_id": self.station_id,
            "temperature_c": self.temperature_c,
            "observation_time": self.observation_time.isoformat() if self.observation_time else None,
            "raw_metar": self.raw_metar,
            "fetched_at": self.fetched_at.isoformat(),
        }


def parse_metar_reading(station_id: str, raw_text: str, now: Optional[datetime] = None) -> MetarReading:
    """
    Decode a bulletin into a MetarReading.

    Raises TemperatureParseError when the temperature group is missing.
    A missing timestamp only leaves observation_time empty.
    """
    temperature_c = extract_temperature(raw_text)
    if temperature_c is None:
        raise TemperatureParseError(TEMPERATURE_NOT_FOUND_MESSAGE)

    observation_time = extract_observation_time(raw_text, now)
    if observation_time is None:
        logger.debug(f"No day/time group in METAR for {station_id}")

    return MetarReading(
        station_id=station_id,
        temperature_c=temperature_c,
        observation_time=observation_time,
        raw_metar=latest_report_line(raw_text),
        fetched_at=now or datetime.now(timezone.utc),
    )


async def fetch_metar(config: StationConfig, now: Optional[datetime] = None) -> MetarReading:
    """
    Fetch and decode the current METAR for the configured station.

    Raises MetarFetchError or TemperatureParseError.
    """
    raw_text = await fetch_metar_tgftp(config)
    reading = parse_metar_reading(config.icao_id, raw_text, now)
    logger.info(
        "METAR %s: %d°C (obs %s)",
        config.icao_id,
        reading.temperature_c,
        reading.observation_time.isoformat() if reading.observation_time else "n/a",
    )
    return reading
