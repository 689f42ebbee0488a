"""Generate synthetic booking rows for demos and previews."""

from datetime import date, datetime, time, timedelta
from typing import List
import numpy as np
from faker import Faker

from .table_templates import (
    ReportTemplate, ANNADANAM_SESSIONS, POOJA_SESSIONS,
    VOLUNTEER_ROLES, BOOKING_STATUSES
)


def _random_date(start: date, days: int, rng: np.random.Generator) -> date:
    """Random date in [start, start + days)."""
    return start + timedelta(days=int(rng.integers(0, max(days, 1))))


def _created_at(booking_date: date, rng: np.random.Generator) -> str:
    """Booking creation timestamp, 1-14 days before the booked date."""
    created = datetime.combine(booking_date, time(9, 0)) - timedelta(
        days=int(rng.integers(1, 15)),
        minutes=int(rng.integers(0, 600)),
    )
    return created.isoformat(timespec="seconds")


def generate_bookings(
    template: ReportTemplate,
    count: int,
    rng: np.random.Generator,
    start: date = date(2025, 1, 1),
    days: int = 30,
) -> List[dict]:
    """
    Generate rows for a report template.

    Args:
        template: Report template whose fields the rows fill
        count: Number of rows
        rng: Random number generator; also seeds Faker
        start: First date bookings may fall on
        days: Width of the booking date window

    Returns:
        List of row dicts sorted by date, then session
    """
    fake = Faker()
    Faker.seed(int(rng.integers(0, 2**31)))

    if template.name == "pooja":
        sessions = POOJA_SESSIONS
    else:
        sessions = ANNADANAM_SESSIONS

    rows = []
    for _ in range(count):
        booking_date = _random_date(start, days, rng)
        row = {
            "date": booking_date.isoformat(),
            "name": fake.name(),
            "email": fake.email(),
            "phone": fake.phone_number(),
            "user_id": fake.uuid4(),
            "created_at": _created_at(booking_date, rng),
        }
        if template.name == "volunteers":
            row["role"] = str(rng.choice(VOLUNTEER_ROLES))
            row["hours"] = int(rng.integers(1, 9))
        else:
            row["session"] = str(rng.choice(sessions))
            row["status"] = str(rng.choice(BOOKING_STATUSES))
            if template.name == "annadanam":
                row["qty"] = int(rng.integers(1, 6))
        rows.append(row)

    if template.name == "volunteers":
        rows.sort(key=lambda r: (r["date"], r["role"]))
    else:
        rows.sort(key=lambda r: (r["date"], sessions.index(r["session"])))
    return rows
