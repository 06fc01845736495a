"""Static interactive rendering of a seat map with networkx and pyvis."""
from __future__ import annotations

from typing import Dict, Optional

import networkx as nx
from pyvis.network import Network

from .geometry import seat_position, table_center
from .labels import seat_label, table_display_name
from .models import Person, ROUND
from .seat_map import SeatMap

OCCUPIED_COLOR = "#77DD77"
EMPTY_COLOR = "#FFFFFF"
TABLE_COLOR = "#CFCFC4"
STAGE_COLOR = "#AEC6CF"

# ---------------------------
# Public API
# ---------------------------


def build_floor_plan_graph(seat_map: SeatMap, show_seat_labels: bool = True) -> nx.Graph:
    """
    Graph of the plan with fixed node coordinates.

    Nodes:
      "stage": the stage.
      table id: one node per table at the table center.
      "<table id>:<seat index>": one node per seat, linked to its table.
    """
    people: Dict[str, Person] = {p.id: p for p in seat_map.list_people()}
    G = nx.Graph()

    stage = seat_map.get_stage()
    G.add_node(
        stage.id,
        label="Stage",
        title="Stage",
        shape="box",
        color=STAGE_COLOR,
        x=stage.x + stage.width / 2,
        y=stage.y + stage.height / 2,
        physics=False,
        widthConstraint=stage.width,
        heightConstraint=stage.height,
    )

    for table in seat_map.list_tables():
        cx, cy = table_center(table)
        name = table_display_name(table, table.ordinal)
        occupied = len(seat_map.store.assignments_for_table(table.id))
        G.add_node(
            table.id,
            label=name,
            title=f"{name}\n{occupied}/{table.seat_count} occupied",
            shape="ellipse" if table.shape == ROUND else "box",
            color=TABLE_COLOR,
            x=cx,
            y=cy,
            physics=False,
            widthConstraint=table.width,
        )
        for i in range(table.seat_count):
            x, y = seat_position(table, i)
            label = seat_label(table.ordinal, i)
            person_id = seat_map.store.query(table.id, i)
            person = people.get(person_id) if person_id else None
            node_id = f"{table.id}:{i}"
            G.add_node(
                node_id,
                label=_seat_caption(label, person, show_seat_labels),
                title=_seat_tooltip(label, person),
                shape="dot",
                size=16,
                color=OCCUPIED_COLOR if person else EMPTY_COLOR,
                borderWidth=3 if person else 1,
                x=x,
                y=y,
                physics=False,
            )
            G.add_edge(table.id, node_id, color="#A9A9A9", width=1)
    return G


def generate_floor_plan_html(seat_map: SeatMap, show_seat_labels: bool = True, height: str = "800px") -> str:
    """
    Render the plan to a standalone HTML page.

    Returns:
      HTML string with embedded network.
    """
    G = build_floor_plan_graph(seat_map, show_seat_labels=show_seat_labels)
    net = Network(height=height, width="100%", bgcolor="#F9FAFB", font_color="#333333")
    net.toggle_physics(False)  # positions come from the geometry engine
    net.from_nx(G)
    return _with_legend(net.generate_html())


# ---------------------------
# Internals
# ---------------------------


def _initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part)


def _seat_caption(label: str, person: Optional[Person], show_seat_labels: bool) -> str:
    if person:
        return _initials(person.name)
    return label if show_seat_labels else ""


def _seat_tooltip(label: str, person: Optional[Person]) -> str:
    if person is None:
        return f"{label} - Empty"
    return f"{label}\n{person.name} - {person.role}\n{person.title}\n{person.company}"


def _with_legend(html: str) -> str:
    css = """
    <style>
    .legend-box{
      position:absolute;right:12px;bottom:12px;
      background:#fff;color:#333;border:1px solid #ccc;border-radius:8px;
      padding:8px 12px;font-family:system-ui, -apple-system, Segoe UI, Roboto, Arial;font-size:12px;
      z-index:10;
    }
    .legend-swatch{display:inline-block;width:12px;height:12px;margin-right:6px;vertical-align:middle;border:1px solid #999;}
    </style>
    """
    legend = f"""
    {css}
    <div class="legend-box">
      <div><span class="legend-swatch" style="background:{OCCUPIED_COLOR}"></span>occupied seat</div>
      <div><span class="legend-swatch" style="background:{EMPTY_COLOR}"></span>empty seat</div>
      <div><span class="legend-swatch" style="background:{STAGE_COLOR}"></span>stage</div>
    </div>
    """
    if "</body>" in html:
        return html.replace("</body>", legend + "</body>", 1)
    return html + legend
