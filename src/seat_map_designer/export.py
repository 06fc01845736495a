"""Snapshots of the seat map and the files made from them.

A snapshot is the interchange document::

    {"tables": [...], "stage": {...}, "people": [...],
     "seatAssignments": [...], "exportedAt": "2026-01-31T18:00:00.000Z"}

Imported documents are checked for referential integrity before anything
is loaded: every assignment must point at an existing table and at a seat
inside that table, and no seat or person may appear twice.
"""
from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .labels import seat_label, table_display_name
from .models import Person, SeatAssignment, SeatMapError, Stage, Table

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"
GUEST_LIST_COLUMNS = ["table", "seat", "name", "title", "company", "role"]


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Snapshot:
    """Independent copy of the model at export time."""

    tables: List[Table]
    stage: Stage
    people: List[Person]
    seat_assignments: List[SeatAssignment]
    exported_at: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "stage": self.stage.to_dict(),
            "people": [p.to_dict() for p in self.people],
            "seatAssignments": [a.to_dict() for a in self.seat_assignments],
            "exportedAt": self.exported_at,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def project(
    tables: Iterable[Table],
    stage: Stage,
    people: Iterable[Person],
    assignments: Iterable[SeatAssignment],
    exported_at: Optional[str] = None,
) -> Snapshot:
    """Assemble a snapshot from the live model.

    Inputs are deep-copied, so later edits of the model do not leak into
    the snapshot. Nothing is filtered or validated here.
    """
    return Snapshot(
        tables=copy.deepcopy(list(tables)),
        stage=copy.deepcopy(stage),
        people=copy.deepcopy(list(people)),
        seat_assignments=copy.deepcopy(list(assignments)),
        exported_at=exported_at or utc_timestamp(),
    )


# ----------------------------- import -----------------------------
def validate_snapshot(snapshot: Snapshot) -> None:
    """Raise :class:`SeatMapError` unless the snapshot can be loaded as is."""
    tables: Dict[str, Table] = {}
    ordinals = set()
    for t in snapshot.tables:
        if t.id in tables:
            raise SeatMapError(f"Duplicate table id: {t.id}")
        if t.seat_count < 1:
            raise SeatMapError(f"Table {t.id} has no seats")
        if t.width <= 0 or t.height <= 0:
            raise SeatMapError(f"Table {t.id} must have a positive width and height")
        if t.ordinal:
            if t.ordinal in ordinals:
                raise SeatMapError(f"Duplicate table ordinal: {t.ordinal}")
            ordinals.add(t.ordinal)
        tables[t.id] = t

    person_ids = set()
    for p in snapshot.people:
        if p.id in person_ids:
            raise SeatMapError(f"Duplicate person id: {p.id}")
        person_ids.add(p.id)

    seats = set()
    seated = set()
    for a in snapshot.seat_assignments:
        table = tables.get(a.table_id)
        if table is None:
            raise SeatMapError(f"Assignment references unknown table: {a.table_id}")
        if not 0 <= a.seat_index < table.seat_count:
            raise SeatMapError(
                f"Assignment seat {a.seat_index} outside table {a.table_id} with {table.seat_count} seats"
            )
        if (a.table_id, a.seat_index) in seats:
            raise SeatMapError(f"Seat {a.table_id}:{a.seat_index} assigned twice")
        if a.person_id in seated:
            raise SeatMapError(f"Person {a.person_id} assigned to more than one seat")
        seats.add((a.table_id, a.seat_index))
        seated.add(a.person_id)
        if a.person_id not in person_ids:
            logger.warning("Assignment %s:%d references unknown person %s", a.table_id, a.seat_index, a.person_id)


def snapshot_from_dict(data: Dict[str, Any]) -> Snapshot:
    """Parse and validate an interchange document."""
    missing = [k for k in ("tables", "stage", "people", "seatAssignments") if k not in data]
    if missing:
        raise SeatMapError(f"Snapshot is missing key(s): {', '.join(missing)}")
    try:
        snapshot = Snapshot(
            tables=[Table.from_dict(t) for t in data["tables"]],
            stage=Stage.from_dict(data["stage"]),
            people=[Person.from_dict(p) for p in data["people"]],
            seat_assignments=[SeatAssignment.from_dict(a) for a in data["seatAssignments"]],
            exported_at=str(data.get("exportedAt") or utc_timestamp()),
        )
    except SeatMapError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise SeatMapError(f"Malformed snapshot: {exc}") from exc
    validate_snapshot(snapshot)
    return snapshot


def save_snapshot(snapshot: Snapshot, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(snapshot.to_json(), encoding="utf-8")
    return path


def load_snapshot(path: Path | str) -> Snapshot:
    with Path(path).open(encoding="utf-8") as f:
        return snapshot_from_dict(json.load(f))


def export_filename(snapshot: Snapshot, extension: str = "json") -> str:
    """Download name such as ``seating-map-2026-01-31.json``."""
    return f"seating-map-{snapshot.exported_at[:10]}.{extension.lstrip('.')}"


# ----------------------------- guest list -----------------------------
def guest_list_rows(snapshot: Snapshot) -> List[Dict[str, str]]:
    """One row per seated person, grouped by table, then the unseated.

    Tables follow the plan order and seats run in ascending order.
    Assignments of people missing from the roster are skipped.
    """
    people = {p.id: p for p in snapshot.people}
    by_table: Dict[str, List[SeatAssignment]] = {}
    for a in snapshot.seat_assignments:
        by_table.setdefault(a.table_id, []).append(a)

    rows: List[Dict[str, str]] = []
    for position, table in enumerate(snapshot.tables, start=1):
        ordinal = table.ordinal or position
        for a in sorted(by_table.get(table.id, []), key=lambda a: a.seat_index):
            person = people.get(a.person_id)
            if person is None:
                continue
            rows.append({
                "table_id": table.id,
                "table": table_display_name(table, ordinal),
                "seat": seat_label(ordinal, a.seat_index),
                "name": person.name,
                "title": person.title,
                "company": person.company,
                "role": person.role,
            })

    seated = {a.person_id for a in snapshot.seat_assignments}
    for person in snapshot.people:
        if person.id in seated:
            continue
        rows.append({
            "table_id": "",
            "table": UNASSIGNED,
            "seat": "",
            "name": person.name,
            "title": person.title,
            "company": person.company,
            "role": person.role,
        })
    return rows


def guest_list_frame(snapshot: Snapshot) -> pd.DataFrame:
    return pd.DataFrame(guest_list_rows(snapshot), columns=GUEST_LIST_COLUMNS)


def guest_list_lines(snapshot: Snapshot) -> List[str]:
    """Printable guest list: a header per table, one indented line per guest."""
    lines: List[str] = []
    current = None
    for row in guest_list_rows(snapshot):
        if row["table_id"] != current:
            current = row["table_id"]
            lines.append(f"{row['table']}:")
        prefix = f"{row['seat']}: " if row["seat"] else ""
        lines.append(f"  {prefix}{row['name']} - {row['title']}, {row['company']}")
    return lines
