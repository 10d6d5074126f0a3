"""
Domain models for volunteer shift signups.
"""

from datetime import date, datetime
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


class ShiftType(StrEnum):
    KAKAD = "KAKAD"  # early morning, one or two volunteers
    ROBE = "ROBE"  # general, larger crew

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class MonthYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int  # 1-12
    year: int


class Volunteer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    phone_number: str
    email: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Name is required")
        return value

    @field_validator("phone_number")
    @classmethod
    def phone_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Phone number is required")
        return value

    def is_valid(self) -> bool:
        return bool(self.id and self.name and self.phone_number)


class Shift(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    type: ShiftType
    max_capacity: int
    start_time: str  # "HH:MM", display only
    end_time: str

    @field_validator("date", mode="before")
    @classmethod
    def calendar_day(cls, value: date | datetime | str) -> date | str:
        # same-day checks compare calendar days, so drop any time of day
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("max_capacity")
    @classmethod
    def positive_capacity(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Max capacity must be greater than 0")
        return value

    @property
    def day_of_week(self) -> DayOfWeek:
        # date.weekday() is Monday=0; shift to Sunday=0
        return DayOfWeek((self.date.weekday() + 1) % 7)

    @property
    def month_year(self) -> MonthYear:
        return MonthYear(month=self.date.month, year=self.date.year)

    @property
    def is_thursday(self) -> bool:
        return self.day_of_week == DayOfWeek.THURSDAY


class Signup(BaseModel):
    """
    A committed reservation of one volunteer on one shift.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    volunteer: Volunteer
    shift: Shift
    signup_date: datetime
    is_emergency_pickup: bool = False

    @property
    def volunteer_id(self) -> str:
        return self.volunteer.id

    @property
    def shift_id(self) -> str:
        return self.shift.id

    def is_normal_signup(self) -> bool:
        return not self.is_emergency_pickup
