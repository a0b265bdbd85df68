"""
Station Temperature - Collector Module
METAR fetching and decoding for a single station.
"""

from .metar_fetcher import fetch_metar, parse_metar_reading, MetarReading
from .metar.errors import MetarError, MetarFetchError, TemperatureParseError

__all__ = [
    "fetch_metar", "parse_metar_reading",
    "MetarReading",
    "MetarError", "MetarFetchError", "TemperatureParseError",
]
