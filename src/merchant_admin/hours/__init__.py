"""Operating-hours parsing, formatting and week-level bulk edits."""

from merchant_admin.hours.google import hours_from_google
from merchant_admin.hours.normalizer import (
    CLOSED,
    OPEN_ALL_DAY,
    format_day,
    format_hours,
    format_hours_display,
    normalize_hours,
    parse_hours,
    to_12_hour,
    to_24_hour,
)
from merchant_admin.hours.week import (
    HOURS_PRESETS,
    HoursPreset,
    apply_preset,
    apply_to_weekdays,
    clear_day,
    copy_to_all,
    normalize_week,
    set_all_closed,
    update_day,
    week_display,
)

__all__ = [
    "CLOSED",
    "HOURS_PRESETS",
    "OPEN_ALL_DAY",
    "HoursPreset",
    "apply_preset",
    "apply_to_weekdays",
    "clear_day",
    "copy_to_all",
    "format_day",
    "format_hours",
    "format_hours_display",
    "hours_from_google",
    "normalize_hours",
    "normalize_week",
    "parse_hours",
    "set_all_closed",
    "to_12_hour",
    "to_24_hour",
    "update_day",
    "week_display",
]
