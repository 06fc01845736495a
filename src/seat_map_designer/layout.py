"""Tables and stage on the floor plan."""
from __future__ import annotations

import logging
import uuid
from typing import Dict, Iterable, List, Optional

from .assignments import AssignmentStore
from .geometry import table_size
from .models import Stage, Table, SeatMapError, check_shape, parse_int

logger = logging.getLogger(__name__)

_TABLE_FIELDS = {"x", "y", "shape", "seat_count", "width", "height", "name"}
_STAGE_FIELDS = {"x", "y", "width", "height"}


def _check_seat_count(seat_count: int) -> int:
    count = parse_int(seat_count, "seat_count")
    if count < 1:
        raise SeatMapError(f"seat_count must be a positive integer, got {seat_count!r}")
    return count


class LayoutModel:
    """Owns table and stage geometry.

    Deleting a table or shrinking its seat count is forwarded to the
    assignment store straight away so the store never refers to seats
    that are gone.
    """

    def __init__(
        self,
        store: AssignmentStore,
        stage: Optional[Stage] = None,
        default_position: tuple[float, float] = (200, 200),
    ) -> None:
        self.store = store
        self.stage = stage or Stage()
        self.default_position = default_position
        self._tables: Dict[str, Table] = {}

    # ----------------------------- reads -----------------------------
    def list_tables(self) -> List[Table]:
        return list(self._tables.values())

    def has_table(self, table_id: str) -> bool:
        return table_id in self._tables

    def get_table(self, table_id: str) -> Table:
        try:
            return self._tables[table_id]
        except KeyError:
            raise SeatMapError(f"Unknown table: {table_id}") from None

    def get_stage(self) -> Stage:
        return self.stage

    def ordinal_of(self, table_id: str) -> int:
        return self.get_table(table_id).ordinal

    def table_by_ordinal(self, ordinal: int) -> Table:
        for table in self._tables.values():
            if table.ordinal == ordinal:
                return table
        raise SeatMapError(f"No table numbered {ordinal}")

    def _next_ordinal(self) -> int:
        return max((t.ordinal for t in self._tables.values()), default=0) + 1

    # ----------------------------- writes -----------------------------
    def add_table(self, shape: str, seat_count: int, *, x: Optional[float] = None, y: Optional[float] = None) -> Table:
        """Create a table sized for its seats and named ``Table N``."""
        check_shape(shape)
        seat_count = _check_seat_count(seat_count)
        width, height = table_size(shape, seat_count)
        table = Table(
            id=f"table-{uuid.uuid4().hex[:12]}",
            x=self.default_position[0] if x is None else x,
            y=self.default_position[1] if y is None else y,
            shape=shape,
            seat_count=seat_count,
            width=width,
            height=height,
            name=f"Table {len(self._tables) + 1}",
            ordinal=self._next_ordinal(),
        )
        self._tables[table.id] = table
        logger.info("Added %s %s with %d seats", shape, table.id, seat_count)
        return table

    def update_table(self, table_id: str, **fields) -> Table:
        """Merge ``fields`` into a table.

        A new shape or seat count resizes the table unless ``width`` or
        ``height`` are given explicitly.
        """
        table = self.get_table(table_id)
        unknown = set(fields) - _TABLE_FIELDS
        if unknown:
            raise SeatMapError(f"Unknown table field(s): {', '.join(sorted(unknown))}")
        if "shape" in fields:
            check_shape(fields["shape"])
        if "seat_count" in fields:
            fields["seat_count"] = _check_seat_count(fields["seat_count"])

        old_count = table.seat_count
        resize = ("shape" in fields and fields["shape"] != table.shape) or (
            "seat_count" in fields and fields["seat_count"] != old_count
        )
        for name, value in fields.items():
            setattr(table, name, value)
        if resize:
            width, height = table_size(table.shape, table.seat_count)
            if "width" not in fields:
                table.width = width
            if "height" not in fields:
                table.height = height

        if table.seat_count < old_count:
            self.store.on_seat_count_reduced(table_id, table.seat_count)
        logger.debug("Updated %s: %s", table_id, sorted(fields))
        return table

    def delete_table(self, table_id: str) -> None:
        self.get_table(table_id)
        del self._tables[table_id]
        self.store.on_table_deleted(table_id)
        logger.info("Deleted %s", table_id)

    def update_stage(self, **fields) -> Stage:
        unknown = set(fields) - _STAGE_FIELDS
        if unknown:
            raise SeatMapError(f"Unknown stage field(s): {', '.join(sorted(unknown))}")
        for name, value in fields.items():
            setattr(self.stage, name, value)
        return self.stage

    def load(self, tables: Iterable[Table], stage: Optional[Stage] = None) -> None:
        """Replace all tables (and optionally the stage).

        Tables without an ordinal are numbered after the highest one present,
        in list order. Assignments to tables that are gone, or to seats past
        a table's new seat count, are dropped from the store.
        """
        loaded: Dict[str, Table] = {}
        pending = []
        for table in tables:
            if table.id in loaded:
                raise SeatMapError(f"Duplicate table id: {table.id}")
            loaded[table.id] = table
            if table.ordinal < 1:
                pending.append(table)

        old = self._tables
        self._tables = loaded
        for table_id in old:
            if table_id not in loaded:
                self.store.on_table_deleted(table_id)
        for table in loaded.values():
            self.store.on_seat_count_reduced(table.id, table.seat_count)
        for table in pending:
            table.ordinal = self._next_ordinal()
        if stage is not None:
            self.stage = stage

    def clear(self) -> None:
        self._tables = {}
        self.stage = Stage()
