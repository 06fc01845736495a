"""Data models for the seat map designer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import math

ROUND = "round"
RECTANGULAR = "rectangular"
SHAPES = (ROUND, RECTANGULAR)

STAGE_ID = "stage"


class SeatMapError(ValueError):
    """Raised when a caller violates a precondition of the seating model."""


def parse_text(value: object) -> str:
    """Normalise an optional text cell to a stripped string.

    ``None`` and ``float('nan')`` (what pandas yields for empty cells)
    become ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    text = str(value).strip()
    if text.lower() == "nan":
        return ""
    return text


def parse_int(value: object, name: str) -> int:
    """Convert ``value`` to an int, refusing fractions and non-numbers."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SeatMapError(f"{name} must be an integer, got {value!r}") from None
    if not number.is_integer():
        raise SeatMapError(f"{name} must be an integer, got {value!r}")
    return int(number)


def check_shape(shape: str) -> str:
    if shape not in SHAPES:
        raise SeatMapError(f"Unknown table shape: {shape!r} (expected one of {', '.join(SHAPES)})")
    return shape


@dataclass(frozen=True)
class Person:
    """An attendee that can be seated."""

    id: str
    name: str
    company: str = ""
    title: str = ""
    role: str = ""
    avatar: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "company": self.company,
            "title": self.title,
            "role": self.role,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Person":
        return cls(
            id=str(data["id"]),
            name=parse_text(data.get("name")),
            company=parse_text(data.get("company")),
            title=parse_text(data.get("title")),
            role=parse_text(data.get("role")),
            avatar=parse_text(data.get("avatar")),
        )


@dataclass
class Table:
    """A table on the floor plan.

    ``x`` and ``y`` locate the top-left corner of the table's bounding box.
    ``ordinal`` is the display number used in seat labels; it is handed out
    once when the table is created and never reused.
    """

    id: str
    x: float
    y: float
    shape: str
    seat_count: int
    width: float
    height: float
    name: Optional[str] = None
    ordinal: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "shape": self.shape,
            "seatCount": self.seat_count,
            "width": self.width,
            "height": self.height,
            "name": self.name,
            "ordinal": self.ordinal,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        name = data.get("name")
        return cls(
            id=str(data["id"]),
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            shape=check_shape(data["shape"]),
            seat_count=parse_int(data["seatCount"], "seatCount"),
            width=float(data["width"]),
            height=float(data["height"]),
            name=parse_text(name) or None,
            ordinal=parse_int(data.get("ordinal") or 0, "ordinal"),
        )


@dataclass
class Stage:
    """The single stage of the floor plan."""

    id: str = STAGE_ID
    x: float = 400
    y: float = 20
    width: float = 250
    height: float = 100

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stage":
        defaults = cls()
        return cls(
            id=str(data.get("id", STAGE_ID)),
            x=float(data.get("x", defaults.x)),
            y=float(data.get("y", defaults.y)),
            width=float(data.get("width", defaults.width)),
            height=float(data.get("height", defaults.height)),
        )


@dataclass(frozen=True)
class SeatAssignment:
    """Occupancy of one seat by one person."""

    table_id: str
    seat_index: int
    person_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tableId": self.table_id, "seatIndex": self.seat_index, "personId": self.person_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeatAssignment":
        return cls(
            table_id=str(data["tableId"]),
            seat_index=parse_int(data["seatIndex"], "seatIndex"),
            person_id=str(data["personId"]),
        )


@dataclass
class SeatingStats:
    """Counters shown next to the plan."""

    tables: int = 0
    seats: int = 0
    occupied: int = 0
    people: int = 0
    unassigned: int = 0
    per_table: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, int]:
        return {
            "tables": self.tables,
            "seats": self.seats,
            "occupied": self.occupied,
            "people": self.people,
            "unassigned": self.unassigned,
        }
