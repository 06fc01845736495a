import io

import pytest

from seat_map_designer.models import ROUND
from seat_map_designer.roster_loader import load_people
from seat_map_designer.search import available_people_for_seat, search_people


ROSTER_CSV = """id,name,company,title,role
007,Ada Lovelace,Analytical Engines,Engineer,Speaker
2,Grace Hopper,,Rear Admiral,VIP
"""


def test_load_people_from_path(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text(ROSTER_CSV)
    people = load_people(path)
    assert [p.id for p in people] == ["007", "2"]
    assert people[0].name == "Ada Lovelace"
    assert people[1].company == ""
    assert people[1].avatar == ""


def test_load_people_rejects_duplicates_and_missing_columns():
    with pytest.raises(ValueError, match="Duplicate"):
        load_people(io.StringIO("id,name\n1,A\n1,B\n"))
    with pytest.raises(ValueError, match="missing"):
        load_people(io.StringIO("id,company\n1,Acme\n"))


def test_search_people(people):
    assert [p.id for p in search_people(people, "professor")] == ["person-4", "person-5"]
    assert [p.id for p in search_people(people, "NAVY")] == ["person-2"]
    assert [p.id for p in search_people(people, "turing")] == ["person-3"]
    assert search_people(people, "  ") == people
    assert search_people(people, "nobody") == []


def test_available_people_for_seat(seat_map):
    table = seat_map.add_table(ROUND, 4)
    seat_map.assign(table.id, 0, "person-1")
    seat_map.assign(table.id, 1, "person-2")
    at_seat_0 = [p.id for p in available_people_for_seat(seat_map, table.id, 0)]
    assert at_seat_0 == ["person-1", "person-3", "person-4", "person-5"]
    at_seat_3 = [p.id for p in available_people_for_seat(seat_map, table.id, 3, term="prof")]
    assert at_seat_3 == ["person-4", "person-5"]
