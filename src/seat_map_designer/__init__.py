"""Seat map designer package."""
from .models import Person, Table, Stage, SeatAssignment, SeatMapError, ROUND, RECTANGULAR
from .geometry import seat_offset, seat_offsets, seat_position, table_size
from .labels import seat_label, parse_seat_label
from .assignments import AssignmentStore
from .layout import LayoutModel
from .export import Snapshot, project, snapshot_from_dict, load_snapshot, save_snapshot
from .roster_loader import load_people
from .seat_map import SeatMap

__all__ = [
    "Person",
    "Table",
    "Stage",
    "SeatAssignment",
    "SeatMapError",
    "ROUND",
    "RECTANGULAR",
    "seat_offset",
    "seat_offsets",
    "seat_position",
    "table_size",
    "seat_label",
    "parse_seat_label",
    "AssignmentStore",
    "LayoutModel",
    "Snapshot",
    "project",
    "snapshot_from_dict",
    "load_snapshot",
    "save_snapshot",
    "load_people",
    "SeatMap",
]
