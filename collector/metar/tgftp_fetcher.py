"""
NOAA TG-FTP (Text) Source
Fetches the plain-text METAR bulletin for one station.
"""

from __future__ import annotations

import httpx
from typing import Optional
import logging

from config import StationConfig
from collector.metar.errors import MetarFetchError

logger = logging.getLogger("metar_tgftp")


async def fetch_metar_tgftp(
    config: StationConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Fetch the station bulletin as text.
    URL: https://tgftp.nws.noaa.gov/data/observations/metar/stations/{station_id}.TXT

    Format is:
        2024/06/25 05:00
        UAAA 250500Z 15004MPS 9999 BKN030 15/09 Q1015 NOSIG

    Raises MetarFetchError on a non-success status or a transport failure.
    """
    url = config.request_url
    logger.debug(f"Fetching METAR for {config.icao_id}: {url}")

    try:
        async with httpx.AsyncClient(
            timeout=config.fetch_timeout_s,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        raise MetarFetchError(str(e) or f"Failed to fetch: {type(e).__name__}") from e

    if not response.is_success:
        raise MetarFetchError(f"Failed to fetch: {response.status_code} {response.reason_phrase}")

    return response.text


def latest_report_line(text: str) -> str:
    """Return the METAR line of a bulletin (last non-empty line)."""
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return lines[-1] if lines else ""
