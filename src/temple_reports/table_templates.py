"""Column specifications and report templates for the admin listings."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Alignment(Enum):
    """Horizontal placement of text inside a cell."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class ColumnSpec:
    """Specification for a table column."""
    key: str  # Field read from each row record
    label: str  # Header label
    width: float  # Requested width in points
    alignment: Alignment = Alignment.LEFT

    def __post_init__(self):
        if not isinstance(self.alignment, Alignment):
            self.alignment = Alignment(self.alignment)

    @classmethod
    def from_dict(cls, data: dict) -> "ColumnSpec":
        """Build a column from a mapping with key/label/width/alignment.

        ``w`` and ``align`` are accepted as short forms.
        """
        return cls(
            key=data["key"],
            label=data.get("label", data["key"]),
            width=data.get("width", data.get("w")),
            alignment=data.get("alignment", data.get("align", "left")),
        )


@dataclass
class ReportTemplate:
    """A named admin listing and how it is exported."""
    name: str
    title: str
    filename_prefix: str
    columns: List[ColumnSpec]
    csv_headers: List[str] = field(default_factory=list)

    def headers(self) -> List[str]:
        """Field names written to CSV; the PDF column keys if none are set."""
        return self.csv_headers or [c.key for c in self.columns]


# Annadanam lunch/dinner timings offered on the booking page
ANNADANAM_SESSIONS = [
    "12:45 PM - 1:30 PM",
    "1:30 PM - 2:00 PM",
    "2:00 PM - 2:30 PM",
    "2:30 PM - 3:00 PM",
    "8:00 PM - 8:30 PM",
    "8:30 PM - 9:00 PM",
    "9:00 PM - 9:30 PM",
]

POOJA_SESSIONS = ["Morning", "Evening"]

VOLUNTEER_ROLES = ["Kitchen", "Serving", "Cleaning", "Parking", "Front Desk", "Decoration"]

BOOKING_STATUSES = ["confirmed", "confirmed", "confirmed", "pending", "cancelled"]


TEMPLATES: Dict[str, ReportTemplate] = {
    "annadanam": ReportTemplate(
        name="annadanam",
        title="Annadanam Bookings",
        filename_prefix="annadanam-bookings",
        columns=[
            ColumnSpec("date", "Date", 90),
            ColumnSpec("session", "Session", 120, Alignment.CENTER),
            ColumnSpec("name", "Name", 180),
            ColumnSpec("email", "Email", 220),
            ColumnSpec("phone", "Phone", 120),
        ],
        csv_headers=["date", "session", "name", "email", "phone",
                     "qty", "status", "user_id", "created_at"],
    ),
    "pooja": ReportTemplate(
        name="pooja",
        title="Pooja Bookings",
        filename_prefix="pooja-bookings",
        columns=[
            ColumnSpec("date", "Date", 90),
            ColumnSpec("session", "Session", 80, Alignment.CENTER),
            ColumnSpec("name", "Name", 160),
            ColumnSpec("email", "Email", 200),
            ColumnSpec("phone", "Phone", 110),
            ColumnSpec("status", "Status", 70, Alignment.CENTER),
        ],
        csv_headers=["date", "session", "name", "email", "phone",
                     "status", "user_id", "created_at"],
    ),
    "volunteers": ReportTemplate(
        name="volunteers",
        title="Volunteer List",
        filename_prefix="volunteers",
        columns=[
            ColumnSpec("date", "Date", 90),
            ColumnSpec("role", "Role", 110),
            ColumnSpec("name", "Name", 170),
            ColumnSpec("email", "Email", 200),
            ColumnSpec("phone", "Phone", 110),
            ColumnSpec("hours", "Hours", 50, Alignment.RIGHT),
        ],
    ),
}


def get_template(name: str) -> ReportTemplate:
    """Look up a report template by name."""
    try:
        return TEMPLATES[name.lower()]
    except KeyError:
        known = ", ".join(sorted(TEMPLATES))
        raise KeyError(f"Unknown report template {name!r} (known: {known})") from None


def build_filename(template: ReportTemplate, qualifier: Optional[str] = None) -> str:
    """File name stem for an export, e.g. ``annadanam-bookings-2025-01-14``."""
    if qualifier:
        return f"{template.filename_prefix}-{qualifier}"
    return template.filename_prefix
