"""Operating-hours models — one canonical string per weekday."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Weekday(StrEnum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def label(self) -> str:
        return self.value.capitalize()


WORKWEEK = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)


class DayHours(BaseModel):
    """Structured editing value for a single day."""

    model_config = ConfigDict(frozen=True)

    is_open: bool
    open: str
    close: str


class HoursOfWeek(BaseModel):
    """Canonical hours strings keyed by weekday; ``None`` means unset."""

    model_config = ConfigDict(frozen=True)

    monday: str | None = None
    tuesday: str | None = None
    wednesday: str | None = None
    thursday: str | None = None
    friday: str | None = None
    saturday: str | None = None
    sunday: str | None = None

    def get(self, day: Weekday) -> str | None:
        return getattr(self, day.value)

    def with_days(self, values: dict[Weekday, str | None]) -> HoursOfWeek:
        """Return a copy with the given days replaced."""
        return self.model_copy(update={day.value: value for day, value in values.items()})

    def is_empty(self) -> bool:
        return all(self.get(day) is None for day in Weekday)
