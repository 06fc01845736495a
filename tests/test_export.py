"""
Tests for snapshots, their validation and the guest list.
"""
import json
import logging
import re
from datetime import datetime, timezone

import pytest

from seat_map_designer.export import (
    UNASSIGNED,
    export_filename,
    guest_list_frame,
    guest_list_lines,
    load_snapshot,
    project,
    save_snapshot,
    snapshot_from_dict,
    utc_timestamp,
)
from seat_map_designer.models import RECTANGULAR, ROUND, SeatMapError
from seat_map_designer.seat_map import SeatMap


@pytest.fixture
def planned(seat_map):
    head = seat_map.add_table(RECTANGULAR, 8)
    side = seat_map.add_table(ROUND, 6)
    seat_map.update_table(head.id, name="Head table")
    seat_map.assign(head.id, 2, "person-2")
    seat_map.assign(head.id, 0, "person-1")
    seat_map.assign(side.id, 5, "person-3")
    return seat_map


def test_timestamp_format():
    assert utc_timestamp(datetime(2026, 1, 31, 18, 0, tzinfo=timezone.utc)) == "2026-01-31T18:00:00.000Z"
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", utc_timestamp())


def test_snapshot_document_shape(planned):
    doc = planned.export().to_dict()
    assert set(doc) == {"tables", "stage", "people", "seatAssignments", "exportedAt"}
    assert doc["stage"] == {"id": "stage", "x": 400, "y": 20, "width": 250, "height": 100}
    assert set(doc["tables"][0]) >= {"id", "x", "y", "shape", "seatCount", "width", "height", "name"}
    assert doc["seatAssignments"][0] == {"tableId": planned.list_tables()[0].id, "seatIndex": 2, "personId": "person-2"}
    assert set(doc["people"][0]) == {"id", "name", "avatar", "company", "title", "role"}


def test_snapshot_is_a_deep_copy(planned):
    snapshot = planned.export()
    table = planned.list_tables()[0]
    planned.update_table(table.id, x=999, seat_count=1)
    planned.update_stage(width=1)
    planned.delete_table(planned.list_tables()[1].id)
    assert snapshot.tables[0].x == 200
    assert snapshot.tables[0].seat_count == 8
    assert len(snapshot.tables) == 2
    assert snapshot.stage.width == 250
    assert len(snapshot.seat_assignments) == 3


def test_project_passes_inputs_through(planned):
    snapshot = project([], planned.get_stage(), [], [], exported_at="2026-10-19T00:00:00.000Z")
    assert snapshot.tables == [] and snapshot.people == []
    assert snapshot.exported_at == "2026-10-19T00:00:00.000Z"
    assert export_filename(snapshot) == "seating-map-2026-10-19.json"
    assert export_filename(snapshot, ".csv") == "seating-map-2026-10-19.csv"


def test_round_trip_reproduces_every_seat(planned):
    doc = json.loads(planned.export().to_json())
    restored = SeatMap.from_snapshot(snapshot_from_dict(doc))
    assert [t.id for t in restored.list_tables()] == [t.id for t in planned.list_tables()]
    for table in planned.list_tables():
        for i in range(table.seat_count):
            assert restored.query(table.id, i) == planned.query(table.id, i)
            assert restored.seat_label(table.id, i) == planned.seat_label(table.id, i)
    assert restored.unassigned_people() == planned.unassigned_people()


def test_restored_map_is_independent_of_snapshot(planned):
    snapshot = planned.export()
    restored = SeatMap.from_snapshot(snapshot)
    restored.update_table(restored.list_tables()[0].id, x=1)
    assert snapshot.tables[0].x == 200


def test_save_and_load(planned, tmp_path):
    path = save_snapshot(planned.export(), tmp_path / "out" / "plan.json")
    snapshot = load_snapshot(path)
    assert len(snapshot.seat_assignments) == 3
    assert snapshot.tables[0].name == "Head table"


class TestImportValidation:
    """Documents breaking referential integrity are refused."""

    def _doc(self, planned):
        return planned.export().to_dict()

    def test_unknown_table(self, planned):
        doc = self._doc(planned)
        doc["seatAssignments"][0]["tableId"] = "nope"
        with pytest.raises(SeatMapError, match="unknown table"):
            snapshot_from_dict(doc)

    def test_seat_outside_table(self, planned):
        doc = self._doc(planned)
        doc["seatAssignments"][0]["seatIndex"] = 8
        with pytest.raises(SeatMapError, match="outside"):
            snapshot_from_dict(doc)

    def test_seat_taken_twice(self, planned):
        doc = self._doc(planned)
        doc["seatAssignments"][1]["seatIndex"] = doc["seatAssignments"][0]["seatIndex"]
        with pytest.raises(SeatMapError, match="assigned twice"):
            snapshot_from_dict(doc)

    def test_person_seated_twice(self, planned):
        doc = self._doc(planned)
        doc["seatAssignments"][1]["personId"] = doc["seatAssignments"][0]["personId"]
        with pytest.raises(SeatMapError, match="more than one seat"):
            snapshot_from_dict(doc)

    def test_missing_keys_and_bad_shape(self, planned):
        with pytest.raises(SeatMapError, match="missing"):
            snapshot_from_dict({"tables": []})
        doc = self._doc(planned)
        doc["tables"][0]["shape"] = "oval"
        with pytest.raises(SeatMapError):
            snapshot_from_dict(doc)
        doc = self._doc(planned)
        del doc["tables"][0]["seatCount"]
        with pytest.raises(SeatMapError, match="Malformed"):
            snapshot_from_dict(doc)

    @pytest.mark.parametrize("field", ["seatCount", "ordinal"])
    def test_fractional_table_numbers(self, planned, field):
        doc = self._doc(planned)
        doc["tables"][0][field] = 1.7
        with pytest.raises(SeatMapError, match=field):
            snapshot_from_dict(doc)

    def test_fractional_seat_index(self, planned):
        doc = self._doc(planned)
        doc["seatAssignments"][0]["seatIndex"] = 1.7
        with pytest.raises(SeatMapError, match="seatIndex"):
            snapshot_from_dict(doc)

    @pytest.mark.parametrize("field", ["width", "height"])
    def test_table_without_area(self, planned, field):
        doc = self._doc(planned)
        doc["tables"][1][field] = 0
        with pytest.raises(SeatMapError, match="positive width and height"):
            snapshot_from_dict(doc)
        doc["tables"][1][field] = -40
        with pytest.raises(SeatMapError, match="positive width and height"):
            snapshot_from_dict(doc)

    def test_unknown_person_is_kept_with_warning(self, planned, caplog):
        doc = self._doc(planned)
        doc["seatAssignments"][0]["personId"] = "ghost"
        with caplog.at_level(logging.WARNING, logger="seat_map_designer.export"):
            snapshot = snapshot_from_dict(doc)
        assert "ghost" in caplog.text
        assert snapshot.seat_assignments[0].person_id == "ghost"

    def test_tables_without_ordinal_are_numbered_in_order(self, planned):
        doc = self._doc(planned)
        for t in doc["tables"]:
            del t["ordinal"]
        restored = SeatMap.from_snapshot(snapshot_from_dict(doc))
        assert [t.ordinal for t in restored.list_tables()] == [1, 2]


class TestGuestList:
    def test_lines(self, planned):
        assert guest_list_lines(planned.export()) == [
            "Head table:",
            "  t1-s1: Ada Lovelace - Engineer, Analytical Engines",
            "  t1-s3: Grace Hopper - Rear Admiral, Navy",
            "Table 2:",
            "  t2-s6: Alan Turing - Cryptanalyst, Bletchley Park",
            "Unassigned:",
            "  Edsger Dijkstra - Professor, Eindhoven",
            "  Barbara Liskov - Professor, MIT",
        ]

    def test_tables_sharing_a_name_get_separate_headers(self, seat_map):
        first = seat_map.add_table(ROUND, 4)
        seat_map.add_table(ROUND, 4)
        third = seat_map.add_table(ROUND, 4)
        seat_map.delete_table(first.id)
        fourth = seat_map.add_table(ROUND, 4)
        assert third.name == fourth.name == "Table 3"
        seat_map.assign(third.id, 0, "person-1")
        seat_map.assign(fourth.id, 0, "person-2")
        lines = guest_list_lines(seat_map.export())
        assert lines[:4] == [
            "Table 3:",
            "  t3-s1: Ada Lovelace - Engineer, Analytical Engines",
            "Table 3:",
            "  t4-s1: Grace Hopper - Rear Admiral, Navy",
        ]

    def test_frame(self, planned):
        df = guest_list_frame(planned.export())
        assert list(df.columns) == ["table", "seat", "name", "title", "company", "role"]
        assert len(df) == 5
        assert list(df["seat"][:3]) == ["t1-s1", "t1-s3", "t2-s6"]
        assert (df["table"] == UNASSIGNED).sum() == 2

    def test_empty_plan(self):
        df = guest_list_frame(SeatMap().export())
        assert df.empty
        assert list(df.columns) == ["table", "seat", "name", "title", "company", "role"]
