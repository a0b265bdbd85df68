"""
Errors raised while fetching and decoding a station METAR.
"""

from __future__ import annotations


class MetarError(Exception):
    """Base class; the message is shown to the user as is."""


class MetarFetchError(MetarError):
    """Non-success HTTP status or transport failure."""


class TemperatureParseError(MetarError):
    """The bulletin has no temperature/dewpoint group."""
