"""Single-day hours normalization — canonical string <-> structured value.

Canonical strings are ``Closed``, ``24 Hours`` or ``HH:MM-HH:MM`` in
zero-padded 24-hour time. Legacy 12-hour ranges ("9:00 AM - 5:00 PM") and
unpadded 24-hour ranges are still accepted on input and normalized on the
next save.
"""

from __future__ import annotations

import logging
import re

from merchant_admin.models.hours import DayHours

logger = logging.getLogger(__name__)

CLOSED = "Closed"
OPEN_ALL_DAY = "24 Hours"
DEFAULT_OPEN = "09:00"
DEFAULT_CLOSE = "17:00"
DAY_START = "00:00"
DAY_END = "23:59"
NO_HOURS = "—"

_CANONICAL_RANGE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)-([01]\d|2[0-3]):([0-5]\d)$")
_LEGACY_12_HOUR = re.compile(
    r"^(\d{1,2}):(\d{2})\s*(AM|PM)\s*[-–]\s*(\d{1,2}):(\d{2})\s*(AM|PM)$",
    re.IGNORECASE,
)
_LEGACY_24_HOUR = re.compile(r"^(\d{1,2}):(\d{2})\s*[-–]\s*(\d{1,2}):(\d{2})$")
_ALL_DAY_ALIASES = frozenset({"24 hours", "open 24 hours"})
# Google Places pads times with thin and narrow no-break spaces
PLACES_SPACES = str.maketrans({"\u202f": " ", "\u2009": " ", "\xa0": " "})


def to_24_hour(hour: int, minute: int, period: str) -> str:
    """Convert a 12-hour clock reading to zero-padded ``HH:MM``."""
    period = period.upper()
    if period == "AM" and hour == 12:
        hour = 0
    elif period == "PM" and hour != 12:
        hour += 12
    return f"{hour:02d}:{minute:02d}"


def to_12_hour(value: str) -> str:
    """Render ``HH:MM`` as ``h:MM AM``."""
    hour_text, minute_text = value.split(":")
    hour = int(hour_text)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute_text} {period}"


def _closed() -> DayHours:
    return DayHours(is_open=False, open=DEFAULT_OPEN, close=DEFAULT_CLOSE)


def _parse_12_hour(match: re.Match[str]) -> DayHours | None:
    open_h, open_m, open_p, close_h, close_m, close_p = match.groups()
    readings = ((int(open_h), int(open_m)), (int(close_h), int(close_m)))
    if any(not 1 <= hour <= 12 or minute > 59 for hour, minute in readings):
        return None
    return DayHours(
        is_open=True,
        open=to_24_hour(int(open_h), int(open_m), open_p),
        close=to_24_hour(int(close_h), int(close_m), close_p),
    )


def _parse_unpadded(match: re.Match[str]) -> DayHours | None:
    open_h, open_m, close_h, close_m = (int(part) for part in match.groups())
    if open_h > 23 or close_h > 23 or open_m > 59 or close_m > 59:
        return None
    return DayHours(
        is_open=True,
        open=f"{open_h:02d}:{open_m:02d}",
        close=f"{close_h:02d}:{close_m:02d}",
    )


def parse_hours(raw: str | None) -> DayHours:
    """Parse a stored hours string into an editing value.

    Unrecognized input is assumed open 09:00–17:00 so the business is not
    silently shown as closed; a warning is logged so the guess is visible.
    """
    if raw is None or not raw.strip():
        return _closed()

    text = raw.translate(PLACES_SPACES).strip()
    lowered = text.lower()
    if lowered == "closed":
        return _closed()
    if lowered in _ALL_DAY_ALIASES:
        return DayHours(is_open=True, open=DAY_START, close=DAY_END)

    match = _CANONICAL_RANGE.match(text)
    if match:
        open_h, open_m, close_h, close_m = match.groups()
        return DayHours(is_open=True, open=f"{open_h}:{open_m}", close=f"{close_h}:{close_m}")

    parsed: DayHours | None = None
    if match := _LEGACY_12_HOUR.match(text):
        parsed = _parse_12_hour(match)
    elif match := _LEGACY_24_HOUR.match(text):
        parsed = _parse_unpadded(match)
    if parsed is not None:
        return parsed

    logger.warning("Unrecognized hours value %r — assuming %s-%s", raw, DEFAULT_OPEN, DEFAULT_CLOSE)
    return DayHours(is_open=True, open=DEFAULT_OPEN, close=DEFAULT_CLOSE)


def format_hours(is_open: bool, open_time: str, close_time: str) -> str:
    """Build the canonical string for one day. Inverted ranges are kept as given."""
    if not is_open:
        return CLOSED
    if open_time == DAY_START and close_time == DAY_END:
        return OPEN_ALL_DAY
    return f"{open_time}-{close_time}"


def format_day(day: DayHours) -> str:
    return format_hours(day.is_open, day.open, day.close)


def normalize_hours(raw: str | None) -> str | None:
    """Rewrite a present value in canonical form; absent stays absent."""
    if raw is None or not raw.strip():
        return None
    return format_day(parse_hours(raw))


def format_hours_display(raw: str | None) -> str:
    """Human-readable hours for one day, e.g. ``9:00 AM – 5:00 PM``."""
    if raw is None or not raw.strip():
        return NO_HOURS
    day = parse_hours(raw)
    if not day.is_open:
        return CLOSED
    if day.open == DAY_START and day.close == DAY_END:
        return OPEN_ALL_DAY
    return f"{to_12_hour(day.open)} – {to_12_hour(day.close)}"
