import pytest

from seat_map_designer.floor_plan import (
    EMPTY_COLOR,
    OCCUPIED_COLOR,
    build_floor_plan_graph,
    generate_floor_plan_html,
)
from seat_map_designer.geometry import seat_position
from seat_map_designer.models import RECTANGULAR, ROUND


@pytest.fixture
def planned(seat_map):
    round_table = seat_map.add_table(ROUND, 6, x=100, y=200)
    seat_map.add_table(RECTANGULAR, 8, x=400, y=200)
    seat_map.assign(round_table.id, 1, "person-1")
    return seat_map


def test_graph_has_stage_tables_and_seats(planned):
    G = build_floor_plan_graph(planned)
    assert G.number_of_nodes() == 1 + 2 + 14
    assert G.number_of_edges() == 14
    round_table = planned.list_tables()[0]
    seat = G.nodes[f"{round_table.id}:1"]
    assert (seat["x"], seat["y"]) == pytest.approx(seat_position(round_table, 1))
    assert seat["color"] == OCCUPIED_COLOR
    assert seat["label"] == "AL"
    assert seat["title"].startswith("t1-s2\nAda Lovelace - Speaker")
    empty = G.nodes[f"{round_table.id}:0"]
    assert empty["color"] == EMPTY_COLOR
    assert empty["title"] == "t1-s1 - Empty"


def test_seat_labels_can_be_hidden(planned):
    G = build_floor_plan_graph(planned, show_seat_labels=False)
    round_table = planned.list_tables()[0]
    assert G.nodes[f"{round_table.id}:0"]["label"] == ""


def test_html_contains_plan_and_legend(planned):
    html = generate_floor_plan_html(planned)
    assert "t2-s8" in html
    assert "Table 1" in html
    assert "legend-box" in html
