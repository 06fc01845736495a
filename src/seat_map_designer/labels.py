"""Seat labels of the form ``t<table>-s<seat>``."""
from __future__ import annotations

import re
from typing import Tuple

from .models import Table

_LABEL_RE = re.compile(r"^t(\d+)-s(\d+)$")


def seat_label(table_ordinal: int, seat_index: int) -> str:
    """Label a seat; ``seat_index`` is 0-based, the label is 1-based."""
    return f"t{table_ordinal}-s{seat_index + 1}"


def parse_seat_label(label: str) -> Tuple[int, int]:
    """Inverse of :func:`seat_label`, returning ``(table_ordinal, seat_index)``."""
    match = _LABEL_RE.match(label.strip().lower())
    if not match or int(match.group(2)) < 1:
        raise ValueError(f"Not a seat label: {label!r} (expected e.g. 't1-s3')")
    return int(match.group(1)), int(match.group(2)) - 1


def table_display_name(table: Table, ordinal: int) -> str:
    return table.name or f"Table {ordinal}"
