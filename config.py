"""
Station Temperature - Configuration
Central configuration for the weather station and the METAR endpoint.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from typing import Dict, Optional
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()

# ============================================================================
# API ENDPOINTS
# ============================================================================

# NOAA TG-FTP plain-text station bulletins
TGFTP_METAR_URL = "https://tgftp.nws.noaa.gov/data/observations/metar/stations/{station_id}.TXT"

# Pass-through relay used by browser clients; `{url}` is replaced by the
# URL-encoded bulletin URL. Not needed server-side, so off by default.
ALLORIGINS_RELAY_URL = "https://api.allorigins.win/raw?url={url}"

# ============================================================================
# STATION CONFIGURATION
# ============================================================================

DEFAULT_STATION = "UAAA"

_ICAO_RE = re.compile(r"^[A-Z0-9]{4}$")


@dataclass(frozen=True)
class StationConfig:
    """Weather station configuration with fetch settings."""
    icao_id: str
    name: str
    metar_url: str
    relay_url: Optional[str] = None
    fetch_timeout_s: Optional[float] = None  # None = wait indefinitely

    @property
    def request_url(self) -> str:
        """URL actually requested, wrapped in the relay when one is set."""
        if not self.relay_url:
            return self.metar_url
        return self.relay_url.replace("{url}", quote(self.metar_url, safe=""))


STATIONS: Dict[str, StationConfig] = {
    "UAAA": StationConfig(
        icao_id="UAAA",
        name="Almaty International",
        metar_url=TGFTP_METAR_URL.format(station_id="UAAA"),
    ),
}


def normalize_station_id(station_id: str) -> str:
    """Upper-case and validate a 4-character ICAO identifier."""
    sid = (station_id or "").strip().upper()
    if not _ICAO_RE.match(sid):
        raise ValueError(f"Invalid station ID: {station_id!r}")
    return sid


def _env_timeout() -> Optional[float]:
    raw = os.getenv("METAR_FETCH_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"METAR_FETCH_TIMEOUT must be a number of seconds, got {raw!r}")
    return value if value > 0 else None


def get_station_config(
    station_id: Optional[str] = None,
    metar_url: Optional[str] = None,
    relay_url: Optional[str] = None,
) -> StationConfig:
    """
    Build the station configuration.

    Explicit arguments win over environment variables (METAR_STATION,
    METAR_URL, METAR_RELAY_URL, METAR_FETCH_TIMEOUT), which win over defaults.
    Stations missing from STATIONS use the TG-FTP URL template.
    """
    sid = normalize_station_id(station_id or os.getenv("METAR_STATION") or DEFAULT_STATION)

    config = STATIONS.get(sid) or StationConfig(
        icao_id=sid,
        name=sid,
        metar_url=TGFTP_METAR_URL.format(station_id=sid),
    )

    url = metar_url or os.getenv("METAR_URL")
    relay = relay_url or os.getenv("METAR_RELAY_URL")
    if url:
        config = replace(config, metar_url=url)
    if relay:
        config = replace(config, relay_url=relay)

    timeout = _env_timeout()
    if timeout is not None:
        config = replace(config, fetch_timeout_s=timeout)

    return config
