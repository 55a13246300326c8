"""
Interval helpers for the planner: working windows and free-slot search.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from weekplan.core.exceptions import ConfigurationError
from weekplan.models.profile import WEEKDAY_NAMES, WorkingHours
from weekplan.utils.datetime_utils import at_clock_time, ensure_utc


@dataclass(frozen=True)
class TimeSlot:
    """Half-open interval [start, end).

    Arithmetic on slots is only exact in UTC; use ``in_utc`` before adding
    durations to a zone-local slot.
    """

    start: datetime
    end: datetime

    @property
    def minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "TimeSlot") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeSlot") -> bool:
        return self.start <= other.start and other.end <= self.end

    def in_utc(self) -> "TimeSlot":
        return TimeSlot(ensure_utc(self.start), ensure_utc(self.end))


def resolve_working_window(
    day: date,
    working_hours: WorkingHours,
    tz: ZoneInfo,
) -> Optional[TimeSlot]:
    """
    Working interval of a calendar day in UTC, or None on a day off.

    Raises:
        ConfigurationError: If the day's end is not after its start
    """
    hours = working_hours.for_weekday(day.weekday())
    if hours is None:
        return None
    start = ensure_utc(at_clock_time(day, hours.start, tz))
    end = ensure_utc(at_clock_time(day, hours.end, tz))
    if end <= start:
        raise ConfigurationError(
            f"Working hours for {WEEKDAY_NAMES[day.weekday()]} end before they start",
            details={"start": hours.start, "end": hours.end},
        )
    return TimeSlot(start, end)


def compute_free_slots(
    window: TimeSlot,
    busy: Iterable[TimeSlot],
    buffer_min: int,
) -> list[TimeSlot]:
    """
    Subtract busy intervals, each followed by a buffer, from a working window.

    Busy intervals may be unsorted and may overlap each other or the window
    edges. The cursor only moves forward, so the result is ordered, disjoint,
    inside the window and clear of every busy interval plus its buffer.
    Slots are returned in UTC.
    """
    if buffer_min < 0:
        raise ValueError("buffer_min must be >= 0")
    buffer = timedelta(minutes=buffer_min)
    window = window.in_utc()
    free: list[TimeSlot] = []
    cursor = window.start

    busy_utc = [interval.in_utc() for interval in busy]
    for interval in sorted(busy_utc, key=lambda slot: (slot.start, slot.end)):
        if interval.start > cursor and cursor < window.end:
            slot_end = min(interval.start, window.end)
            if slot_end > cursor:
                free.append(TimeSlot(cursor, slot_end))
        cursor = max(cursor, interval.end + buffer)

    if cursor < window.end:
        free.append(TimeSlot(cursor, window.end))
    return free
