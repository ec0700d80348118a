"""Bulk operations over a week of hours.

Every function is pure: it returns a new ``HoursOfWeek`` and leaves the
argument untouched.
"""

from __future__ import annotations

from typing import NamedTuple

from merchant_admin.hours.normalizer import (
    CLOSED,
    OPEN_ALL_DAY,
    format_hours_display,
    normalize_hours,
)
from merchant_admin.models.hours import WORKWEEK, HoursOfWeek, Weekday


class HoursPreset(NamedTuple):
    label: str
    value: str


HOURS_PRESETS: tuple[HoursPreset, ...] = (
    HoursPreset("9:00 AM - 5:00 PM", "09:00-17:00"),
    HoursPreset("10:00 AM - 6:00 PM", "10:00-18:00"),
    HoursPreset("10:00 AM - 9:00 PM", "10:00-21:00"),
    HoursPreset("8:00 AM - 8:00 PM", "08:00-20:00"),
    HoursPreset(OPEN_ALL_DAY, OPEN_ALL_DAY),
    HoursPreset(CLOSED, CLOSED),
)


def update_day(hours: HoursOfWeek, day: Weekday, value: str | None) -> HoursOfWeek:
    """Set one day; a blank value unsets it."""
    if value is not None and not value.strip():
        value = None
    return hours.with_days({day: value})


def clear_day(hours: HoursOfWeek, day: Weekday) -> HoursOfWeek:
    return hours.with_days({day: None})


def apply_to_weekdays(hours: HoursOfWeek) -> HoursOfWeek:
    """Copy Monday's hours to Tuesday through Friday."""
    monday = hours.monday
    if not monday:
        return hours
    return hours.with_days({day: monday for day in WORKWEEK})


def copy_to_all(hours: HoursOfWeek) -> HoursOfWeek:
    """Copy Monday's hours to every day of the week."""
    monday = hours.monday
    if not monday:
        return hours
    return hours.with_days({day: monday for day in Weekday})


def apply_preset(hours: HoursOfWeek, preset: str | HoursPreset) -> HoursOfWeek:
    """Put one preset, in canonical form, on all seven days."""
    raw = preset.value if isinstance(preset, HoursPreset) else preset
    value = normalize_hours(raw)
    return hours.with_days({day: value for day in Weekday})


def set_all_closed(hours: HoursOfWeek) -> HoursOfWeek:
    return hours.with_days({day: CLOSED for day in Weekday})


def normalize_week(hours: HoursOfWeek) -> HoursOfWeek:
    """Rewrite every present day in canonical form."""
    return hours.with_days({day: normalize_hours(hours.get(day)) for day in Weekday})


def week_display(hours: HoursOfWeek) -> list[tuple[str, str]]:
    """Ordered ``(label, display)`` rows for the hours table."""
    return [(day.label, format_hours_display(hours.get(day))) for day in Weekday]
