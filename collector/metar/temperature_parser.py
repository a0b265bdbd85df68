"""
Utilities to decode METAR temperature from raw text.

Key rule:
- Only the main temp/dewpoint group is read (e.g. 15/09, M05/M09, 02/).
- The dewpoint half is matched but discarded.
- Values are whole degrees Celsius; there is no T-group precision here.
"""

from __future__ import annotations

import re
from typing import Optional


TEMPERATURE_NOT_FOUND_MESSAGE = "Could not parse temperature from the METAR data."

# The group must be whitespace-delimited; a report ending right after the group
# still counts.
_MAIN_TEMP_RE = re.compile(r"\s(M?\d{2})/(M?\d{2})?(?=\s|$)")


def decode_metar_temperature(token: str) -> int:
    """Decode a signed METAR temperature token (`15`, `05`, `M05`)."""
    token = token.strip().upper()
    if token.startswith("M"):
        return -int(token[1:])
    return int(token)


def extract_temperature(raw_metar: str) -> Optional[int]:
    """
    Find the temperature group in a raw METAR and return whole degrees C.

    Returns None when no group is present. The first group in scan order wins.
    """
    match = _MAIN_TEMP_RE.search(raw_metar or "")
    if not match:
        return None
    return decode_metar_temperature(match.group(1))
