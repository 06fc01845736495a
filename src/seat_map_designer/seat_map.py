"""The seat map: layout, assignments and roster behind one object."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .assignments import AssignmentStore
from .export import Snapshot, project, validate_snapshot
from .geometry import seat_offset, seat_position
from .labels import parse_seat_label, seat_label
from .layout import LayoutModel
from .models import Person, SeatingStats, SeatMapError, Stage, Table

logger = logging.getLogger(__name__)


class SeatMap:
    """One editable floor plan.

    Each instance owns its own store and layout, so several plans can live
    side by side. Calls naming a table that does not exist, or a seat
    outside its table, raise :class:`SeatMapError`; an occupied seat or an
    already seated person is simply reassigned.
    """

    def __init__(self, people: Iterable[Person] = (), stage: Optional[Stage] = None) -> None:
        self.store = AssignmentStore()
        self.layout = LayoutModel(self.store, stage=stage)
        self._people: List[Person] = []
        self.set_people(people)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SeatMap":
        """Rebuild a plan from a snapshot, validating it first."""
        validate_snapshot(snapshot)
        restored = project(snapshot.tables, snapshot.stage, snapshot.people, snapshot.seat_assignments)
        seat_map = cls(restored.people, stage=restored.stage)
        seat_map.layout.load(restored.tables)
        for a in restored.seat_assignments:
            seat_map.store.assign(a.table_id, a.seat_index, a.person_id)
        logger.info(
            "Loaded %d table(s), %d people, %d assignment(s)",
            len(restored.tables), len(restored.people), len(restored.seat_assignments),
        )
        return seat_map

    def reset(self) -> None:
        self.store.clear()
        self.layout.clear()
        self._people = []

    # ----------------------------- roster -----------------------------
    def set_people(self, people: Iterable[Person]) -> None:
        """Replace the roster; people who are gone lose their seats."""
        people = list(people)
        ids = [p.id for p in people]
        if len(set(ids)) != len(ids):
            raise SeatMapError("Roster contains duplicate person ids")
        self._people = people
        known = set(ids)
        for a in self.store.assignments():
            if a.person_id not in known:
                self.store.unassign_person(a.person_id)

    def list_people(self) -> List[Person]:
        return list(self._people)

    def get_person(self, person_id: str) -> Person:
        for p in self._people:
            if p.id == person_id:
                return p
        raise SeatMapError(f"Unknown person: {person_id}")

    # ----------------------------- reads -----------------------------
    def list_tables(self) -> List[Table]:
        return self.layout.list_tables()

    def get_table(self, table_id: str) -> Table:
        return self.layout.get_table(table_id)

    def get_stage(self) -> Stage:
        return self.layout.get_stage()

    def _check_seat(self, table_id: str, seat_index: int) -> Table:
        table = self.layout.get_table(table_id)
        if not 0 <= seat_index < table.seat_count:
            raise SeatMapError(f"Seat {seat_index} outside table {table_id} with {table.seat_count} seats")
        return table

    def seat_offset(self, table_id: str, seat_index: int) -> Tuple[float, float]:
        table = self._check_seat(table_id, seat_index)
        return seat_offset(table.shape, table.width, table.height, seat_index, table.seat_count)

    def seat_position(self, table_id: str, seat_index: int) -> Tuple[float, float]:
        return seat_position(self._check_seat(table_id, seat_index), seat_index)

    def seat_label(self, table_id: str, seat_index: int) -> str:
        table = self._check_seat(table_id, seat_index)
        return seat_label(table.ordinal, seat_index)

    def find_seat(self, label: str) -> Tuple[str, int]:
        """Resolve a label such as ``t2-s5`` to ``(table_id, seat_index)``."""
        ordinal, seat_index = parse_seat_label(label)
        table = self.layout.table_by_ordinal(ordinal)
        self._check_seat(table.id, seat_index)
        return table.id, seat_index

    def query(self, table_id: str, seat_index: int) -> Optional[str]:
        self._check_seat(table_id, seat_index)
        return self.store.query(table_id, seat_index)

    def person_for_seat(self, table_id: str, seat_index: int) -> Optional[Person]:
        person_id = self.query(table_id, seat_index)
        if person_id is None:
            return None
        return next((p for p in self._people if p.id == person_id), None)

    def unassigned_people(self) -> List[Person]:
        return self.store.unassigned_people(self._people)

    def statistics(self) -> SeatingStats:
        tables = self.list_tables()
        per_table = {t.id: len(self.store.assignments_for_table(t.id)) for t in tables}
        return SeatingStats(
            tables=len(tables),
            seats=sum(t.seat_count for t in tables),
            occupied=len(self.store),
            people=len(self._people),
            unassigned=len(self.unassigned_people()),
            per_table=per_table,
        )

    # ----------------------------- writes -----------------------------
    def add_table(self, shape: str, seat_count: int, **position) -> Table:
        return self.layout.add_table(shape, seat_count, **position)

    def update_table(self, table_id: str, **fields) -> Table:
        return self.layout.update_table(table_id, **fields)

    def delete_table(self, table_id: str) -> None:
        self.layout.delete_table(table_id)

    def update_stage(self, **fields) -> Stage:
        return self.layout.update_stage(**fields)

    def assign(self, table_id: str, seat_index: int, person_id: str) -> None:
        self._check_seat(table_id, seat_index)
        self.get_person(person_id)
        self.store.assign(table_id, seat_index, person_id)

    def unassign(self, table_id: str, seat_index: int) -> None:
        self._check_seat(table_id, seat_index)
        self.store.unassign(table_id, seat_index)

    def unassign_person(self, person_id: str) -> None:
        self.store.unassign_person(person_id)

    # ----------------------------- export -----------------------------
    def export(self) -> Snapshot:
        return project(self.list_tables(), self.get_stage(), self._people, self.store.assignments())
