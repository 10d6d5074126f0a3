"""
Sample volunteers and January 2026 shifts for local runs.
"""

from datetime import date

from app.database import InMemoryKeyValueDatabase
from app.models import Shift, ShiftType, Signup, Volunteer


def _kakad(shift_id: str, day: int) -> Shift:
    return Shift(
        id=shift_id,
        date=date(2026, 1, day),
        type=ShiftType.KAKAD,
        max_capacity=1,
        start_time="06:00",
        end_time="08:00",
    )


def _robe(shift_id: str, day: int) -> Shift:
    return Shift(
        id=shift_id,
        date=date(2026, 1, day),
        type=ShiftType.ROBE,
        max_capacity=4,
        start_time="08:00",
        end_time="17:00",
    )


SAMPLE_VOLUNTEERS = [
    Volunteer(
        id="vol-1",
        name="Alice Johnson",
        phone_number="+1234567890",
        email="alice@example.com",
    ),
    Volunteer(
        id="vol-2",
        name="Bob Smith",
        phone_number="+1987654321",
        email="bob@example.com",
    ),
    Volunteer(
        id="vol-3",
        name="Carol White",
        phone_number="+1555555555",
        email="carol@example.com",
    ),
]

SAMPLE_SHIFTS = [
    _kakad("shift-1", 5),
    _kakad("shift-2", 12),
    _robe("shift-3", 10),
    _robe("shift-4", 15),  # Thursday
    _robe("shift-5", 22),  # Thursday
]


def seed_sample_data(
    db: InMemoryKeyValueDatabase[str, Volunteer | Shift | Signup],
) -> None:
    for volunteer in SAMPLE_VOLUNTEERS:
        db.put(f"volunteer:{volunteer.id}", volunteer)
    for shift in SAMPLE_SHIFTS:
        db.put(f"shift:{shift.id}", shift)
