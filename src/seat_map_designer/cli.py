"""Command line interface for the seat map designer."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, Tuple

from .export import guest_list_frame, guest_list_lines, load_snapshot, save_snapshot
from .floor_plan import generate_floor_plan_html
from .models import SHAPES
from .roster_loader import load_people
from .seat_map import SeatMap


def _table_spec(value: str) -> Tuple[str, int]:
    """Parse ``round:8`` into ``("round", 8)``."""
    shape, _, seats = value.partition(":")
    if shape not in SHAPES or not seats.isdigit() or int(seats) < 1:
        raise argparse.ArgumentTypeError(f"expected SHAPE:SEATS with SHAPE in {', '.join(SHAPES)}, got {value!r}")
    return shape, int(seats)


def _assignment_spec(value: str) -> Tuple[str, str]:
    """Parse ``t1-s3=person-7`` into ``("t1-s3", "person-7")``."""
    label, _, person_id = value.partition("=")
    if not label or not person_id:
        raise argparse.ArgumentTypeError(f"expected LABEL=PERSON_ID, got {value!r}")
    return label.strip(), person_id.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seat map designer: lay out tables and assign seats")
    parser.add_argument("--snapshot", type=Path, help="Load a previously exported seat map JSON.")
    parser.add_argument("--roster", type=Path,
                        help="Path to people.csv (id,name,company,title,role,avatar). Replaces the snapshot roster.")
    parser.add_argument("--add-table", type=_table_spec, action="append", default=[], metavar="SHAPE:SEATS",
                        help="Add a table, e.g. round:8 or rectangular:10. Repeatable.")
    parser.add_argument("--assign", type=_assignment_spec, action="append", default=[], metavar="LABEL=PERSON_ID",
                        help="Seat a person, e.g. t1-s3=person-7. Repeatable; later ones win.")
    parser.add_argument("--unassign", action="append", default=[], metavar="LABEL",
                        help="Clear a seat, e.g. t1-s3. Repeatable.")
    parser.add_argument("--out-json", type=Path, help="Write the seat map snapshot JSON.")
    parser.add_argument("--out-guest-list", type=Path, help="Write the guest list CSV: table,seat,name,...")
    parser.add_argument("--out-html", type=Path, help="Write an interactive floor plan HTML page.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log model changes (-v for info, -vv for debug).")
    return parser


def run(args: argparse.Namespace) -> SeatMap:
    """Apply the command line to a seat map and write the requested outputs."""
    if args.snapshot:
        seat_map = SeatMap.from_snapshot(load_snapshot(args.snapshot))
    else:
        seat_map = SeatMap()
    if args.roster:
        seat_map.set_people(load_people(args.roster))

    for shape, seats in args.add_table:
        seat_map.add_table(shape, seats)
    for label, person_id in args.assign:
        table_id, seat_index = seat_map.find_seat(label)
        seat_map.assign(table_id, seat_index, person_id)
    for label in args.unassign:
        seat_map.unassign(*seat_map.find_seat(label))

    snapshot = seat_map.export()
    for line in guest_list_lines(snapshot):
        print(line)
    stats = seat_map.statistics()
    print(f"[SUMMARY] tables={stats.tables} seats={stats.seats} occupied={stats.occupied} "
          f"people={stats.people} unassigned={stats.unassigned}")

    if args.out_json:
        save_snapshot(snapshot, args.out_json)
    if args.out_guest_list:
        args.out_guest_list.parent.mkdir(parents=True, exist_ok=True)
        guest_list_frame(snapshot).to_csv(args.out_guest_list, index=False)
    if args.out_html:
        args.out_html.parent.mkdir(parents=True, exist_ok=True)
        args.out_html.write_text(generate_floor_plan_html(seat_map), encoding="utf-8")
    return seat_map


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``seat-map`` and ``python -m seat_map_designer.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        run(args)
    except ValueError as e:
        print(f"Input validation error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
