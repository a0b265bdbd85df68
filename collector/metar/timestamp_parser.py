"""
Reconstruct the observation instant from the METAR day/time group.

The group (e.g. 250500Z) only carries day-of-month, hour and minute in UTC.
Year and month are taken from `now`; a candidate later than `now` belongs to
an earlier month, since reports never come from the future.
"""

from __future__ import annotations

import calendar
import re
from datetime import datetime, timezone
from typing import Optional, Tuple


_DAY_TIME_RE = re.compile(r"\b(\d{2})(\d{2})(\d{2})Z\b")

# A day-of-month 1..31 exists in at least one of any two consecutive months,
# so this is only a guard against bad input.
_MAX_MONTHS_BACK = 12


def _previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def resolve_day_time(day: int, hour: int, minute: int, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Anchor a (day, hour, minute) triple to the latest matching instant <= now.

    Months where `day` does not exist (e.g. 31 in April) are skipped.
    Returns None for out-of-range fields.
    """
    if not (1 <= day <= 31 and 0 <= hour <= 23 and 0 <= minute <= 59):
        return None

    now_utc = _as_utc(now)
    year, month = now_utc.year, now_utc.month

    for _ in range(_MAX_MONTHS_BACK):
        if day <= calendar.monthrange(year, month)[1]:
            candidate = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
            if candidate <= now_utc:
                return candidate
        year, month = _previous_month(year, month)

    return None


def extract_observation_time(raw_metar: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Find the DDHHMMZ group in a raw METAR and return an aware UTC datetime.

    Missing or unparseable groups give None; this is not an error.
    """
    match = _DAY_TIME_RE.search(raw_metar or "")
    if not match:
        return None
    day, hour, minute = (int(g) for g in match.groups())
    return resolve_day_time(day, hour, minute, now)
