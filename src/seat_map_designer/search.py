"""Finding people to put in a seat."""
from __future__ import annotations

from typing import Iterable, List

from .models import Person
from .seat_map import SeatMap


def search_people(people: Iterable[Person], term: str) -> List[Person]:
    """Case-insensitive substring match on name, company or title."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(people)
    return [
        p for p in people
        if needle in p.name.lower() or needle in p.company.lower() or needle in p.title.lower()
    ]


def available_people_for_seat(seat_map: SeatMap, table_id: str, seat_index: int, term: str = "") -> List[Person]:
    """People that can be offered for a seat.

    Anyone seated elsewhere is left out; whoever sits in this seat stays in
    the list so the seat can be reassigned to the same person.
    """
    current = seat_map.query(table_id, seat_index)
    candidates = [
        p for p in seat_map.list_people()
        if p.id == current or not seat_map.store.is_assigned(p.id)
    ]
    return search_people(candidates, term)
