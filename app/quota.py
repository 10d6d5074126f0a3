from collections.abc import Sequence

from pydantic import BaseModel

from app.models import MonthYear, ShiftType, Signup, Volunteer
from app.rules import SchedulingLimits


class QuotaBucket(BaseModel):
    current: int
    max: int
    remaining: int

    @classmethod
    def of(cls, current: int, maximum: int) -> "QuotaBucket":
        return cls(
            current=current, max=maximum, remaining=max(0, maximum - current)
        )


class Quota(BaseModel):
    kakad: QuotaBucket
    robe: QuotaBucket
    thursday: QuotaBucket
    total: QuotaBucket


class QuotaService:
    """
    How much of each monthly allowance a volunteer has used.
    """

    def __init__(self, limits: SchedulingLimits | None = None) -> None:
        self.limits = limits or SchedulingLimits()

    def calculate_quota(
        self,
        volunteer: Volunteer,
        month: int,
        year: int,
        signups: Sequence[Signup],
    ) -> Quota:
        target = MonthYear(month=month, year=year)
        month_signups = [
            s
            for s in signups
            if s.volunteer.id == volunteer.id and s.shift.month_year == target
        ]

        kakad = sum(1 for s in month_signups if s.shift.type == ShiftType.KAKAD)
        robe = sum(1 for s in month_signups if s.shift.type == ShiftType.ROBE)
        thursday = sum(1 for s in month_signups if s.shift.is_thursday)

        return Quota(
            kakad=QuotaBucket.of(kakad, self.limits.max_kakad_per_month),
            robe=QuotaBucket.of(robe, self.limits.max_total_per_month),
            thursday=QuotaBucket.of(
                thursday, self.limits.max_thursday_per_month
            ),
            total=QuotaBucket.of(
                len(month_signups), self.limits.max_total_per_month
            ),
        )
