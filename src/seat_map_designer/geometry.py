"""
Seat geometry.

Seat offsets are measured from the table center in screen coordinates
(x grows to the right, y grows downward), so "clockwise" below means
clockwise as seen on screen.

Round tables:
    seats sit on a circle of radius min(width, height) / 2 - ROUND_INSET,
    seat 0 at the top, evenly spaced clockwise.
Rectangular tables:
    each side gets a quota proportional to its usable length, sides are
    filled top, right, bottom, left and the left side takes whatever is
    left over so every index gets a position.
"""
from __future__ import annotations

import math
from typing import List, Tuple

from .models import RECTANGULAR, ROUND, SHAPES, Table

ROUND_INSET = 20
CORNER_CLEARANCE = 40
SEAT_CLEARANCE = 20

Offset = Tuple[float, float]


def table_size(shape: str, seat_count: int) -> Tuple[float, float]:
    """Return ``(width, height)`` large enough for ``seat_count`` seats."""
    if shape == ROUND:
        side = max(120, seat_count * 15)
        return side, side
    if shape == RECTANGULAR:
        return max(160, seat_count * 12), max(100, min(seat_count * 8, 120))
    raise ValueError(f"Unknown table shape: {shape!r}")


def _check_args(shape: str, width: float, height: float, seat_index: int, seat_count: int) -> None:
    if shape not in SHAPES:
        raise ValueError(f"Unknown table shape: {shape!r}")
    if seat_count < 1:
        raise ValueError(f"seat_count must be at least 1, got {seat_count}")
    if not 0 <= seat_index < seat_count:
        raise ValueError(f"seat_index {seat_index} outside [0, {seat_count})")
    if width <= 0 or height <= 0:
        raise ValueError(f"table dimensions must be positive, got {width}x{height}")


def _round_offset(width: float, height: float, seat_index: int, seat_count: int) -> Offset:
    radius = min(width, height) / 2 - ROUND_INSET
    angle = seat_index * 2 * math.pi / seat_count - math.pi / 2
    return radius * math.cos(angle), radius * math.sin(angle)


def _side_quotas(width: float, height: float, seat_count: int) -> Tuple[int, int, int, int]:
    """Seats per side in fill order (top, right, bottom, left)."""
    usable_w = width - CORNER_CLEARANCE
    usable_h = height - CORNER_CLEARANCE
    perimeter = 2 * usable_w + 2 * usable_h
    top = math.ceil(seat_count * usable_w / perimeter)
    right = math.ceil(seat_count * usable_h / perimeter)
    bottom = math.ceil(seat_count * usable_w / perimeter)
    left = seat_count - top - right - bottom
    return top, right, bottom, left


def _along(start: float, end: float, position: int, count: int) -> float:
    """Coordinate of seat ``position`` of ``count`` spread from start to end."""
    if count <= 1:
        return (start + end) / 2
    return start + position * (end - start) / (count - 1)


def _rectangular_offset(width: float, height: float, seat_index: int, seat_count: int) -> Offset:
    top, right, bottom, left = _side_quotas(width, height, seat_count)
    half_w = width / 2
    half_h = height / 2
    inner_w = half_w - CORNER_CLEARANCE
    inner_h = half_h - CORNER_CLEARANCE

    if seat_index < top:
        return _along(-inner_w, inner_w, seat_index, top), -half_h - SEAT_CLEARANCE
    seat_index -= top

    if seat_index < right:
        return half_w + SEAT_CLEARANCE, _along(-inner_h, inner_h, seat_index, right)
    seat_index -= right

    if seat_index < bottom:
        return _along(inner_w, -inner_w, seat_index, bottom), half_h + SEAT_CLEARANCE
    seat_index -= bottom

    return -half_w - SEAT_CLEARANCE, _along(inner_h, -inner_h, seat_index, left)


def seat_offset(shape: str, width: float, height: float, seat_index: int, seat_count: int) -> Offset:
    """Offset ``(dx, dy)`` of a seat from the center of its table.

    Dimensions at or below twice the insets give a non-positive radius or
    spacing; they are not clamped.
    """
    _check_args(shape, width, height, seat_index, seat_count)
    if shape == ROUND:
        return _round_offset(width, height, seat_index, seat_count)
    return _rectangular_offset(width, height, seat_index, seat_count)


def seat_offsets(shape: str, width: float, height: float, seat_count: int) -> List[Offset]:
    """Offsets of every seat of a table, indexed by seat index."""
    return [seat_offset(shape, width, height, i, seat_count) for i in range(seat_count)]


def table_center(table: Table) -> Tuple[float, float]:
    return table.x + table.width / 2, table.y + table.height / 2


def seat_position(table: Table, seat_index: int) -> Tuple[float, float]:
    """Absolute floor coordinates of one seat."""
    cx, cy = table_center(table)
    dx, dy = seat_offset(table.shape, table.width, table.height, seat_index, table.seat_count)
    return cx + dx, cy + dy
