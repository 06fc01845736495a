"""Streamlit UI for the seat map designer."""
from __future__ import annotations

# Add src to sys.path so seat_map_designer can be found
import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import streamlit as st
import streamlit.components.v1 as components

from seat_map_designer.export import (
    export_filename,
    guest_list_frame,
    snapshot_from_dict,
)
from seat_map_designer.floor_plan import generate_floor_plan_html
from seat_map_designer.labels import table_display_name
from seat_map_designer.models import SHAPES
from seat_map_designer.roster_loader import load_people
from seat_map_designer.search import available_people_for_seat
from seat_map_designer.seat_map import SeatMap

# -----------------------------
# State
# -----------------------------

if "seat_map" not in st.session_state:
    st.session_state.seat_map = SeatMap()
seat_map: SeatMap = st.session_state.seat_map

st.title("Seat Map Designer")

# -----------------------------
# Sidebar: data and tables
# -----------------------------

st.sidebar.header("Data")
_snapshot_file = st.sidebar.file_uploader("Seat map JSON", type="json")
_roster_file = st.sidebar.file_uploader("People CSV", type="csv")

if st.sidebar.button("Load files", disabled=not (_snapshot_file or _roster_file)):
    try:
        if _snapshot_file is not None:
            seat_map = SeatMap.from_snapshot(snapshot_from_dict(json.load(_snapshot_file)))
        if _roster_file is not None:
            seat_map.set_people(load_people(_roster_file))
        st.session_state.seat_map = seat_map
    except ValueError as e:
        st.sidebar.error(f"Input validation error: {e}")

st.sidebar.header("Add table")
new_shape = st.sidebar.selectbox("Shape", SHAPES, key="new_shape")
new_seats = st.sidebar.number_input("Seats", min_value=1, max_value=40, value=6, key="new_seats")
if st.sidebar.button("Add table"):
    seat_map.add_table(new_shape, int(new_seats))

stats = seat_map.statistics()
st.sidebar.caption(
    f"{stats.tables} tables, {stats.occupied}/{stats.seats} seats occupied, {stats.unassigned} unassigned"
)

tables = seat_map.list_tables()
if not tables:
    st.info("Add a table or load a seat map to get started.")
    st.stop()

names = {t.id: table_display_name(t, t.ordinal) for t in tables}

# -----------------------------
# Table editor
# -----------------------------

st.subheader("Tables")
table_id = st.selectbox("Table", [t.id for t in tables], format_func=names.get)
table = seat_map.get_table(table_id)
col1, col2, col3 = st.columns(3)
edit_name = col1.text_input("Name", value=table.name or "")
edit_seats = col2.number_input("Seats", min_value=1, max_value=40, value=table.seat_count)
edit_shape = col3.selectbox("Shape", SHAPES, index=SHAPES.index(table.shape))
col_a, col_b = st.columns(2)
if col_a.button("Save table"):
    seat_map.update_table(table_id, name=edit_name or None, seat_count=int(edit_seats), shape=edit_shape)
    st.rerun()
if col_b.button("Delete table"):
    seat_map.delete_table(table_id)
    st.rerun()

# -----------------------------
# Seat assignment
# -----------------------------

st.subheader("Assign seat")
seat_index = st.selectbox(
    "Seat",
    list(range(table.seat_count)),
    format_func=lambda i: seat_map.seat_label(table_id, i),
)
current = seat_map.person_for_seat(table_id, seat_index)
st.caption(f"Currently: {current.name if current else 'empty'}")
term = st.text_input("Search people by name, company or title")
candidates = available_people_for_seat(seat_map, table_id, seat_index, term)
if candidates:
    person_id = st.selectbox(
        "Person",
        [p.id for p in candidates],
        format_func=lambda pid: next(f"{p.name} ({p.company})" for p in candidates if p.id == pid),
    )
    if st.button("Assign"):
        seat_map.assign(table_id, seat_index, person_id)
        st.rerun()
else:
    st.write("No people match your search" if term else "No available people to assign")
if current and st.button("Clear seat"):
    seat_map.unassign(table_id, seat_index)
    st.rerun()

# -----------------------------
# Plan and export
# -----------------------------

st.subheader("Floor plan")
components.html(generate_floor_plan_html(seat_map, height="600px"), height=620, scrolling=True)

snapshot = seat_map.export()
st.subheader("Guest list")
guests_df = guest_list_frame(snapshot)
st.dataframe(guests_df, use_container_width=True)

st.download_button(
    "Download seat map as JSON",
    snapshot.to_json().encode("utf-8"),
    file_name=export_filename(snapshot, "json"),
)
st.download_button(
    "Download guest list as CSV",
    guests_df.to_csv(index=False).encode("utf-8"),
    file_name=export_filename(snapshot, "csv"),
)
