"""Seat to person assignments.

The store only knows ids. It never checks whether a table or a person
exists; :class:`~seat_map_designer.seat_map.SeatMap` does that before
calling in, and :class:`~seat_map_designer.layout.LayoutModel` calls the
``on_*`` hooks when tables go away or shrink.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import Person, SeatAssignment, SeatMapError

logger = logging.getLogger(__name__)

SeatKey = Tuple[str, int]


class AssignmentStore:
    """Holds at most one person per seat and at most one seat per person."""

    def __init__(self, assignments: Iterable[SeatAssignment] = ()) -> None:
        # Two indexes kept in lock step; dict order is insertion order.
        self._by_seat: Dict[SeatKey, str] = {}
        self._by_person: Dict[str, SeatKey] = {}
        for a in assignments:
            self.assign(a.table_id, a.seat_index, a.person_id)

    # ----------------------------- mutations -----------------------------
    def assign(self, table_id: str, seat_index: int, person_id: str) -> None:
        """Seat ``person_id`` at the given seat.

        Whoever held the seat is unseated and the person leaves any seat
        they held before.
        """
        if seat_index < 0:
            raise SeatMapError(f"seat_index must be non-negative, got {seat_index}")
        key = (table_id, seat_index)
        previous = self._by_seat.pop(key, None)
        if previous is not None:
            del self._by_person[previous]
            logger.debug("Seat %s:%d freed from %s", table_id, seat_index, previous)
        old_seat = self._by_person.pop(person_id, None)
        if old_seat is not None:
            del self._by_seat[old_seat]
            logger.debug("%s moved from %s:%d", person_id, *old_seat)
        self._by_seat[key] = person_id
        self._by_person[person_id] = key
        logger.debug("Seat %s:%d assigned to %s", table_id, seat_index, person_id)

    def unassign(self, table_id: str, seat_index: int) -> None:
        person_id = self._by_seat.pop((table_id, seat_index), None)
        if person_id is not None:
            del self._by_person[person_id]
            logger.debug("Seat %s:%d cleared", table_id, seat_index)

    def unassign_person(self, person_id: str) -> None:
        key = self._by_person.pop(person_id, None)
        if key is not None:
            del self._by_seat[key]
            logger.debug("%s unseated from %s:%d", person_id, *key)

    def on_table_deleted(self, table_id: str) -> None:
        """Drop every assignment of a deleted table."""
        self._drop([key for key in self._by_seat if key[0] == table_id])

    def on_seat_count_reduced(self, table_id: str, new_count: int) -> None:
        """Drop assignments whose seat no longer exists after a shrink."""
        self._drop([key for key in self._by_seat if key[0] == table_id and key[1] >= new_count])

    def clear(self) -> None:
        self._by_seat.clear()
        self._by_person.clear()

    def _drop(self, keys: List[SeatKey]) -> None:
        for key in keys:
            person_id = self._by_seat.pop(key)
            del self._by_person[person_id]
        if keys:
            logger.info("Dropped %d assignment(s) from table %s", len(keys), keys[0][0])

    # ----------------------------- queries -----------------------------
    def query(self, table_id: str, seat_index: int) -> Optional[str]:
        """Person id seated at the seat, or ``None`` when it is empty."""
        return self._by_seat.get((table_id, seat_index))

    def seat_of(self, person_id: str) -> Optional[SeatKey]:
        return self._by_person.get(person_id)

    def is_assigned(self, person_id: str) -> bool:
        return person_id in self._by_person

    def unassigned_people(self, roster: Iterable[Person]) -> List[Person]:
        """Roster members without a seat, in roster order."""
        return [p for p in roster if p.id not in self._by_person]

    def assignments(self) -> List[SeatAssignment]:
        return [SeatAssignment(t, i, p) for (t, i), p in self._by_seat.items()]

    def assignments_for_table(self, table_id: str) -> List[SeatAssignment]:
        """Assignments of one table ordered by seat index."""
        return sorted(
            (a for a in self.assignments() if a.table_id == table_id),
            key=lambda a: a.seat_index,
        )

    def __len__(self) -> int:
        return len(self._by_seat)

    def __iter__(self) -> Iterator[SeatAssignment]:
        return iter(self.assignments())
