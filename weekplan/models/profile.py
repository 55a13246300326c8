"""
Profile models: timezone, weekly working hours and focus preferences.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from weekplan.utils.datetime_utils import get_zone, parse_clock_time

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DEFAULT_WORKDAY_START = "09:00"
DEFAULT_WORKDAY_END = "17:00"
DEFAULT_FOCUS_LENGTH_MIN = 90
DEFAULT_BUFFER_MIN = 5


class DayHours(BaseModel):
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        parse_clock_time(value)
        return value

    @property
    def is_ordered(self) -> bool:
        return parse_clock_time(self.end) > parse_clock_time(self.start)


class WorkingHours(BaseModel):
    """Working interval per weekday; None marks a day off."""

    monday: Optional[DayHours] = None
    tuesday: Optional[DayHours] = None
    wednesday: Optional[DayHours] = None
    thursday: Optional[DayHours] = None
    friday: Optional[DayHours] = None
    saturday: Optional[DayHours] = None
    sunday: Optional[DayHours] = None

    def for_weekday(self, weekday: int) -> Optional[DayHours]:
        """Entry for a Python weekday index (0=Monday)."""
        return getattr(self, WEEKDAY_NAMES[weekday])

    def has_working_day(self) -> bool:
        return any(self.for_weekday(index) is not None for index in range(7))


def default_working_hours() -> WorkingHours:
    workday = DayHours(start=DEFAULT_WORKDAY_START, end=DEFAULT_WORKDAY_END)
    return WorkingHours(
        monday=workday,
        tuesday=workday,
        wednesday=workday,
        thursday=workday,
        friday=workday,
    )


def _validate_timezone(value: str) -> str:
    get_zone(value)
    return value


class Profile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    timezone: str = "UTC"
    working_hours: WorkingHours = Field(default_factory=default_working_hours)
    focus_length_min: int = Field(DEFAULT_FOCUS_LENGTH_MIN, ge=1)
    buffer_min: int = Field(DEFAULT_BUFFER_MIN, ge=0)
    onboarding_completed: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        return _validate_timezone(value)


class ProfileUpdate(BaseModel):
    timezone: Optional[str] = None
    working_hours: Optional[WorkingHours] = None
    focus_length_min: Optional[int] = Field(None, ge=1)
    buffer_min: Optional[int] = Field(None, ge=0)
    onboarding_completed: Optional[bool] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            _validate_timezone(value)
        return value

    @model_validator(mode="after")
    def validate_working_hours(self):
        if self.working_hours is None:
            return self
        for name in WEEKDAY_NAMES:
            hours = getattr(self.working_hours, name)
            if hours is not None and not hours.is_ordered:
                raise ValueError(f"{name}: end must be after start")
        return self
