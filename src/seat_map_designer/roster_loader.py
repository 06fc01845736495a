"""CSV loading of the attendee roster."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, List

import pandas as pd

from .models import Person, parse_text

REQUIRED_COLUMNS = ["id", "name"]
OPTIONAL_COLUMNS = ["company", "title", "role", "avatar"]


def load_people(path: Path | str | IO[Any]) -> List[Person]:
    """Load people from a CSV file or buffer.

    ``id`` and ``name`` are required; ``company``, ``title``, ``role`` and
    ``avatar`` may be missing or empty. Ids are read as strings so that
    ``007`` stays ``007``.
    """
    df = pd.read_csv(path, dtype=str)
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Roster is missing column(s): {', '.join(missing)}")

    people: List[Person] = []
    seen = set()
    for _, row in df.iterrows():
        person_id = parse_text(row["id"])
        if not person_id:
            raise ValueError(f"Roster row for {row['name']!r} has no id")
        if person_id in seen:
            raise ValueError(f"Duplicate person id in roster: {person_id}")
        seen.add(person_id)
        people.append(
            Person(
                id=person_id,
                name=parse_text(row["name"]),
                **{col: parse_text(row.get(col, "")) for col in OPTIONAL_COLUMNS},
            )
        )
    return people
