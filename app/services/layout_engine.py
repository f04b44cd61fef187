"""
Seat geometry for the floor plan.

Turns a table's shape, size, rotation and seat count into one position per
seat. Every function here is pure: the same input always yields the same
positions, and nothing is cached between calls.

Coordinates are relative to the top-left corner of the table's bounding box,
with y growing downwards.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, List

from app.schemas.table import SeatPosition, Table, TableShape

ROUND_RADIUS_FACTOR = 0.55
SEAT_SIZE_FACTOR = 0.12
MIN_SEAT_SIZE = 10.0


def seat_size(width: float, height: float, scale: float = 1.0) -> float:
    """Diameter of a seat marker, never smaller than ``MIN_SEAT_SIZE``."""
    return max(MIN_SEAT_SIZE, min(width * scale, height * scale) * SEAT_SIZE_FACTOR)


def seat_angles(seat_count: int, rotation: float) -> List[float]:
    """Clockwise angle in degrees of each seat around a round table."""
    if seat_count <= 0:
        return []
    step = 360.0 / seat_count
    return [step * i + rotation for i in range(seat_count)]


def perimeter_offsets(
    width: float, height: float, rotation: float, seat_count: int
) -> List[float]:
    """Arc-length offset of each seat along a rectangle's outline.

    Offsets start at the top-left corner and run clockwise. They are reduced
    modulo the perimeter, so any rotation stays on the outline.
    """
    if seat_count <= 0:
        return []
    perimeter = 2 * (width + height)
    if perimeter <= 0:
        return [0.0] * seat_count
    step = perimeter / seat_count
    shift = (rotation / 360.0) * perimeter
    return [(step * i + shift) % perimeter for i in range(seat_count)]


def _polar_to_cartesian(cx: float, cy: float, radius: float, angle_deg: float) -> SeatPosition:
    # 0 degrees points at the top of the table
    angle = math.radians(angle_deg - 90)
    return SeatPosition(x=cx + radius * math.cos(angle), y=cy + radius * math.sin(angle))


def round_seat_positions(
    width: float, height: float, rotation: float, seat_count: int
) -> List[SeatPosition]:
    """Seats evenly spaced on a circle inside the table's box."""
    radius = min(width, height) * ROUND_RADIUS_FACTOR / 2
    cx, cy = width / 2, height / 2
    return [
        _polar_to_cartesian(cx, cy, radius, angle)
        for angle in seat_angles(seat_count, rotation)
    ]


def _point_on_perimeter(width: float, height: float, offset: float) -> SeatPosition:
    if offset <= width:
        return SeatPosition(x=offset, y=0.0)
    if offset <= width + height:
        return SeatPosition(x=width, y=offset - width)
    if offset <= 2 * width + height:
        return SeatPosition(x=2 * width + height - offset, y=height)
    return SeatPosition(x=0.0, y=2 * (width + height) - offset)


def rectangular_seat_positions(
    width: float, height: float, rotation: float, seat_count: int
) -> List[SeatPosition]:
    """Seats evenly spaced along the rectangle's perimeter, clockwise."""
    return [
        _point_on_perimeter(width, height, offset)
        for offset in perimeter_offsets(width, height, rotation, seat_count)
    ]


LayoutFunction = Callable[[float, float, float, int], List[SeatPosition]]

LAYOUTS: Dict[TableShape, LayoutFunction] = {
    TableShape.ROUND: round_seat_positions,
    TableShape.RECTANGULAR: rectangular_seat_positions,
}


def layout_seats(
    shape: TableShape,
    width: float,
    height: float,
    rotation: float,
    seat_count: int,
    scale: float = 1.0,
) -> List[SeatPosition]:
    """
    Compute seat positions for a table.

    Args:
        shape: Table shape, selects the geometry function
        width: Table width before scaling
        height: Table height before scaling
        rotation: Clockwise rotation of the seat layout in degrees
        seat_count: Number of seats; 0 yields an empty list
        scale: Multiplier applied to width and height

    Returns:
        One SeatPosition per seat, in seat order
    """
    if seat_count <= 0:
        return []
    layout = LAYOUTS[TableShape(shape)]
    return layout(width * scale, height * scale, rotation, seat_count)


def layout_table(table: Table, scale: float = 1.0) -> List[SeatPosition]:
    """Seat positions for ``table``, index-aligned with ``table.seats``."""
    return layout_seats(
        shape=table.shape,
        width=table.width,
        height=table.height,
        rotation=table.rotation,
        seat_count=len(table.seats),
        scale=scale,
    )
