"""
Scheduling constraint engine.

Decides whether a volunteer may sign up for a shift given the signups
already on record. Rules run in a fixed order and the first one that fails
is the only reason reported. Emergency pickups skip the monthly caps but
still respect the one-Robe-per-day rule.
"""

from collections.abc import Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from app.models import Shift, ShiftType, Signup, Volunteer

MAX_KAKAD_PER_MONTH = 2
MAX_TOTAL_PER_MONTH = 4
MAX_THURSDAY_PER_MONTH = 2
MAX_ROBE_PER_DAY = 1

# (shift, the volunteer's own signups) -> rejection reason, or None to pass
Rule = Callable[[Shift, Sequence[Signup]], str | None]


class SchedulingLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_kakad_per_month: int = Field(default=MAX_KAKAD_PER_MONTH, ge=0)
    max_total_per_month: int = Field(default=MAX_TOTAL_PER_MONTH, ge=0)
    max_thursday_per_month: int = Field(default=MAX_THURSDAY_PER_MONTH, ge=0)
    max_robe_per_day: int = Field(default=MAX_ROBE_PER_DAY, ge=1)


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reasons: tuple[str, ...] = ()

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(allowed=False, reasons=(reason,))


class SchedulingRulesEngine:
    def __init__(self, limits: SchedulingLimits | None = None) -> None:
        self.limits = limits or SchedulingLimits()
        self._normal_rules: tuple[tuple[str, Rule], ...] = (
            ("max_kakad_per_month", self._check_max_kakad_per_month),
            ("max_total_per_month", self._check_max_total_per_month),
            ("max_thursday_per_month", self._check_max_thursday_per_month),
            ("max_robe_per_day", self._check_max_robe_per_day),
        )
        self._emergency_rules: tuple[tuple[str, Rule], ...] = (
            ("max_robe_per_day", self._check_max_robe_per_day),
        )

    @property
    def rule_names(self) -> list[str]:
        return [name for name, _ in self._normal_rules]

    def validate_signup(
        self,
        volunteer: Volunteer,
        shift: Shift,
        existing_signups: Sequence[Signup],
        is_emergency_pickup: bool = False,
    ) -> Decision:
        """
        Check every rule in priority order and stop at the first failure.

        `existing_signups` may hold signups for any volunteer; only the
        ones belonging to `volunteer` are counted.
        """
        own = [s for s in existing_signups if s.volunteer.id == volunteer.id]
        rules = self._emergency_rules if is_emergency_pickup else self._normal_rules

        for _name, rule in rules:
            reason = rule(shift, own)
            if reason is not None:
                return Decision.deny(reason)

        return Decision.allow()

    def _check_max_kakad_per_month(
        self, shift: Shift, signups: Sequence[Signup]
    ) -> str | None:
        if shift.type != ShiftType.KAKAD:
            return None

        month = shift.month_year
        count = sum(
            1
            for s in signups
            if s.shift.type == ShiftType.KAKAD and s.shift.month_year == month
        )

        cap = self.limits.max_kakad_per_month
        if count >= cap:
            return (
                f"Cannot sign up: You already have {count} "
                f"{ShiftType.KAKAD.label} shifts this month (max is {cap})"
            )
        return None

    def _check_max_total_per_month(
        self, shift: Shift, signups: Sequence[Signup]
    ) -> str | None:
        month = shift.month_year
        count = sum(1 for s in signups if s.shift.month_year == month)

        cap = self.limits.max_total_per_month
        if count >= cap:
            return (
                f"Cannot sign up: You already have {count} shifts "
                f"this month (max is {cap})"
            )
        return None

    def _check_max_thursday_per_month(
        self, shift: Shift, signups: Sequence[Signup]
    ) -> str | None:
        if not shift.is_thursday:
            return None

        month = shift.month_year
        count = sum(
            1
            for s in signups
            if s.shift.is_thursday and s.shift.month_year == month
        )

        cap = self.limits.max_thursday_per_month
        if count >= cap:
            return (
                f"Cannot sign up: You already have {count} Thursday shifts "
                f"this month (max is {cap})"
            )
        return None

    def _check_max_robe_per_day(
        self, shift: Shift, signups: Sequence[Signup]
    ) -> str | None:
        if shift.type != ShiftType.ROBE:
            return None

        count = sum(
            1
            for s in signups
            if s.shift.type == ShiftType.ROBE and s.shift.date == shift.date
        )

        cap = self.limits.max_robe_per_day
        if count >= cap:
            return (
                f"Cannot sign up: You already have a {ShiftType.ROBE.label} "
                f"shift on this day (max {cap} per day)"
            )
        return None
