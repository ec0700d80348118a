"""Import operating hours from a Google Places ``opening_hours`` payload."""

from __future__ import annotations

import logging
import re
from typing import Any

from merchant_admin.hours.normalizer import (
    OPEN_ALL_DAY,
    PLACES_SPACES,
    format_hours,
    normalize_hours,
)
from merchant_admin.models.hours import HoursOfWeek, Weekday

logger = logging.getLogger(__name__)

# Places numbers days from Sunday
_PLACES_DAYS = (
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
)
_DAY_NAMES = {day.label: day for day in Weekday}
_BARE_TIME = re.compile(r"^\d{1,2}:\d{2}$")
_PERIOD = re.compile(r"([AP]M)$", re.IGNORECASE)
_HHMM = re.compile(r"^(\d{2})(\d{2})$")


def _from_descriptions(descriptions: list[str]) -> dict[Weekday, str]:
    """Parse "Monday: 9:00 AM – 5:00 PM" lines."""
    found: dict[Weekday, str] = {}
    for line in descriptions:
        name, sep, text = line.partition(":")
        if not sep:
            continue
        day = _DAY_NAMES.get(name.strip())
        if day is None:
            continue
        shifts = [_bounds(part) for part in text.translate(PLACES_SPACES).split(",")]
        if all(shifts):
            # split shifts keep the outer span
            text = f"{shifts[0][0]} - {shifts[-1][1]}"
        value = normalize_hours(text)
        if value is not None:
            found[day] = value
    return found


def _bounds(shift: str) -> tuple[str, str] | None:
    """Split "7:00 – 11:00 AM" into its sides, sharing the period Google omits."""
    for dash in ("–", "-"):
        if dash in shift:
            opening, _, closing = (side.strip() for side in shift.partition(dash))
            break
    else:
        return None
    if _BARE_TIME.match(opening) and (period := _PERIOD.search(closing)):
        opening = f"{opening} {period.group(1)}"
    return opening, closing


def _clock(point: dict[str, Any]) -> str:
    # the legacy API sends "time": "0930" instead of hour/minute
    if match := _HHMM.match(str(point.get("time", ""))):
        return f"{match.group(1)}:{match.group(2)}"
    return f"{int(point.get('hour', 0)):02d}:{int(point.get('minute', 0)):02d}"


def _from_periods(periods: list[dict[str, Any]]) -> dict[Weekday, str]:
    """Build hours from structured ``periods``; several shifts span first open to last close."""
    if len(periods) == 1 and not periods[0].get("close"):
        return dict.fromkeys(Weekday, OPEN_ALL_DAY)

    spans: dict[Weekday, tuple[str, str]] = {}
    for period in periods:
        opening = period.get("open") or {}
        day_index = opening.get("day")
        if not isinstance(day_index, int) or not 0 <= day_index <= 6:
            continue
        day = _PLACES_DAYS[day_index]
        closing = period.get("close")
        if not closing:
            spans[day] = ("00:00", "23:59")
            continue
        open_time, close_time = _clock(opening), _clock(closing)
        if day in spans:
            open_time = spans[day][0]
        spans[day] = (open_time, close_time)

    return {day: format_hours(True, start, end) for day, (start, end) in spans.items()}


def hours_from_google(opening_hours: dict[str, Any] | None) -> HoursOfWeek | None:
    """Convert a Places opening-hours object into canonical week hours.

    Reads ``weekday_text`` (legacy API) or ``weekdayDescriptions`` (Places
    API v1) first and falls back to ``periods``. Returns ``None`` when the
    payload carries nothing usable.
    """
    if not opening_hours:
        return None

    descriptions = opening_hours.get("weekday_text") or opening_hours.get("weekdayDescriptions")
    found: dict[Weekday, str] = {}
    if descriptions:
        found = _from_descriptions(descriptions)
    if not found and opening_hours.get("periods"):
        found = _from_periods(opening_hours["periods"])

    if not found:
        logger.info("Google opening hours payload had no usable days")
        return None
    return HoursOfWeek().with_days(found)
