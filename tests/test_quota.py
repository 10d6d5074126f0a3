from datetime import UTC, date, datetime

from app.models import Shift, ShiftType, Signup, Volunteer
from app.quota import QuotaService

ALICE = Volunteer(id="vol-1", name="Alice Johnson", phone_number="+1234567890")
BOB = Volunteer(id="vol-2", name="Bob Smith", phone_number="+1987654321")


def _signup(volunteer: Volunteer, shift_type: ShiftType, day: date) -> Signup:
    shift = Shift(
        id=f"{shift_type}-{day.isoformat()}",
        date=day,
        type=shift_type,
        max_capacity=1 if shift_type == ShiftType.KAKAD else 4,
        start_time="06:00",
        end_time="08:00",
    )
    return Signup(
        id=f"{volunteer.id}-{shift.id}",
        volunteer=volunteer,
        shift=shift,
        signup_date=datetime(2025, 12, 20, tzinfo=UTC),
    )


def test_empty_month_has_full_quota() -> None:
    quota = QuotaService().calculate_quota(ALICE, 1, 2026, [])
    assert quota.kakad.remaining == 2
    assert quota.total.current == 0
    assert quota.total.remaining == 4


def test_counts_only_volunteer_and_month() -> None:
    signups = [
        _signup(ALICE, ShiftType.KAKAD, date(2026, 1, 5)),
        _signup(ALICE, ShiftType.ROBE, date(2026, 1, 15)),  # Thursday
        _signup(ALICE, ShiftType.ROBE, date(2025, 12, 30)),
        _signup(BOB, ShiftType.KAKAD, date(2026, 1, 12)),
    ]
    quota = QuotaService().calculate_quota(ALICE, 1, 2026, signups)

    assert quota.kakad.model_dump() == {"current": 1, "max": 2, "remaining": 1}
    assert quota.robe.model_dump() == {"current": 1, "max": 4, "remaining": 3}
    assert quota.thursday.model_dump() == {
        "current": 1,
        "max": 2,
        "remaining": 1,
    }
    assert quota.total.model_dump() == {"current": 2, "max": 4, "remaining": 2}


def test_remaining_never_negative() -> None:
    # emergency pickups can push a volunteer past the cap
    signups = [
        _signup(ALICE, ShiftType.KAKAD, date(2026, 1, d)) for d in (5, 6, 7)
    ]
    quota = QuotaService().calculate_quota(ALICE, 1, 2026, signups)
    assert quota.kakad.current == 3
    assert quota.kakad.remaining == 0
