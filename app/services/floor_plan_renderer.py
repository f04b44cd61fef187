"""
Floor plan rendering service.

Draws the table list as a PNG:
- Tables laid out on a grid, round tables as ellipses, rectangular ones as
  rotated boxes filled with a translucent tint of the table color
- Seats as filled circles (green=available, red=reserved)
- Table name under each table
"""
from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

import cv2
import numpy as np

from app.schemas.table import Table, TableShape
from app.services.layout_engine import layout_table, seat_size

LOGGER = logging.getLogger("floor-plan-renderer")

# Color scheme (BGR format for OpenCV)
BACKGROUND_COLOR = (42, 23, 15)
DEFAULT_TABLE_COLOR = (246, 130, 59)
SEAT_COLORS = {
    "available": (153, 211, 52),
    "reserved": (94, 63, 244),
}
LABEL_COLOR = (255, 255, 255)

FILL_OPACITY = 0.35
LABEL_HEIGHT = 28
EMPTY_CANVAS = (360, 640)  # height, width


def parse_color(value: str | None) -> Tuple[int, int, int]:
    """Convert ``#rgb`` / ``#rrggbb`` to a BGR tuple, defaulting when unparsable."""
    if not value or not value.startswith("#"):
        return DEFAULT_TABLE_COLOR
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6:
        return DEFAULT_TABLE_COLOR
    try:
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return DEFAULT_TABLE_COLOR
    return (b, g, r)


class FloorPlanRenderer:
    """Grid renderer for a list of tables."""

    def __init__(self, tables: Sequence[Table], columns: int = 3, scale: float = 1.0, gap: int = 48):
        self.tables = list(tables)
        self.columns = max(1, columns)
        self.scale = scale
        self.gap = gap

        sizes = [seat_size(t.width, t.height, scale) for t in self.tables]
        self.margin = int(math.ceil(max(sizes, default=0.0)))
        self.cell_width = int(math.ceil(max((t.width * scale for t in self.tables), default=0.0))) + 2 * self.margin
        self.cell_height = (
            int(math.ceil(max((t.height * scale for t in self.tables), default=0.0)))
            + 2 * self.margin
            + LABEL_HEIGHT
        )

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """(height, width) of the rendered image."""
        if not self.tables:
            return EMPTY_CANVAS
        cols = min(self.columns, len(self.tables))
        rows = math.ceil(len(self.tables) / self.columns)
        width = cols * self.cell_width + (cols + 1) * self.gap
        height = rows * self.cell_height + (rows + 1) * self.gap
        return height, width

    def table_origin(self, index: int) -> Tuple[float, float]:
        """Top-left corner of the ``index``-th table's box on the canvas."""
        table = self.tables[index]
        row, col = divmod(index, self.columns)
        cell_x = self.gap + col * (self.cell_width + self.gap)
        cell_y = self.gap + row * (self.cell_height + self.gap)
        x = cell_x + (self.cell_width - table.width * self.scale) / 2
        y = cell_y + self.margin
        return x, y

    def seat_centers(self, index: int) -> List[Tuple[int, int]]:
        """Canvas pixel of every seat of the ``index``-th table."""
        ox, oy = self.table_origin(index)
        return [
            (int(round(ox + p.x)), int(round(oy + p.y)))
            for p in layout_table(self.tables[index], self.scale)
        ]

    def render(self) -> np.ndarray:
        height, width = self.canvas_size
        canvas = np.zeros((height, width, 3), dtype=np.uint8)
        canvas[:] = BACKGROUND_COLOR

        if not self.tables:
            cv2.putText(canvas, "No tables", (width // 2 - 70, height // 2),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.9, LABEL_COLOR, 2, cv2.LINE_AA)
            return canvas

        for index in range(len(self.tables)):
            canvas = self._draw_table(canvas, index)
        return canvas

    def _draw_table(self, canvas: np.ndarray, index: int) -> np.ndarray:
        table = self.tables[index]
        ox, oy = self.table_origin(index)
        w, h = table.width * self.scale, table.height * self.scale
        center = (ox + w / 2, oy + h / 2)
        color = parse_color(table.color)

        overlay = canvas.copy()
        if table.shape == TableShape.ROUND:
            cv2.ellipse(
                overlay,
                (int(round(center[0])), int(round(center[1]))),
                (int(round(w / 2)), int(round(h / 2))),
                table.rotation, 0, 360, color, -1,
            )
        else:
            pts = np.int32(cv2.boxPoints((center, (w, h), table.rotation)))
            cv2.fillPoly(overlay, [pts], color)
        canvas = cv2.addWeighted(overlay, FILL_OPACITY, canvas, 1 - FILL_OPACITY, 0)

        if table.shape == TableShape.RECTANGULAR:
            cv2.polylines(canvas, [pts], isClosed=True, color=color, thickness=2)

        radius = max(1, int(round(seat_size(table.width, table.height, self.scale) / 2)))
        for seat, point in zip(table.seats, self.seat_centers(index)):
            seat_color = SEAT_COLORS["reserved" if seat.reserved else "available"]
            cv2.circle(canvas, point, radius, seat_color, -1)

        font = cv2.FONT_HERSHEY_SIMPLEX
        (text_w, _), _ = cv2.getTextSize(table.name, font, 0.5, 1)
        label_x = int(round(ox + w / 2 - text_w / 2))
        label_y = int(round(oy + h + self.margin + LABEL_HEIGHT / 2 + 4))
        cv2.putText(canvas, table.name, (label_x, label_y), font, 0.5, LABEL_COLOR, 1, cv2.LINE_AA)
        return canvas


def render_floor_plan_png(
    tables: Sequence[Table],
    columns: int = 3,
    scale: float = 1.0,
    gap: int = 48,
) -> bytes:
    """Render ``tables`` and encode the result as PNG bytes."""
    image = FloorPlanRenderer(tables, columns=columns, scale=scale, gap=gap).render()
    ok, buffer = cv2.imencode(".png", image)
    if not ok:
        raise RuntimeError("Failed to encode floor plan image")
    LOGGER.debug("Rendered floor plan with %d tables", len(tables))
    return buffer.tobytes()
