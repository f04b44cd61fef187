"""
REST API endpoints for the floor plan.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.config import get_settings
from app.dependencies import get_table_store
from app.schemas.table import FloorPlanRead, SeatLayoutRead, TableLayoutRead
from app.services.floor_plan_renderer import render_floor_plan_png
from app.services.layout_engine import layout_table, seat_size
from app.services.table_store import TableStore

router = APIRouter(prefix="/api/v1", tags=["floor-plan"])


def build_floor_plan(store: TableStore, scale: float = 1.0) -> FloorPlanRead:
    """Lay out every table currently held by the store."""
    tables = []
    for table in store.tables:
        positions = layout_table(table, scale)
        tables.append(
            TableLayoutRead(
                id=table.id,
                name=table.name,
                shape=table.shape,
                width=table.width * scale,
                height=table.height * scale,
                rotation=table.rotation,
                color=table.color,
                seat_size=seat_size(table.width, table.height, scale),
                seats=[
                    SeatLayoutRead(
                        index=index,
                        label=seat.label,
                        reserved=seat.reserved,
                        x=position.x,
                        y=position.y,
                    )
                    for index, (seat, position) in enumerate(zip(table.seats, positions))
                ],
            )
        )
    return FloorPlanRead(
        loading=store.loading,
        message=store.message,
        version=store.version,
        tables=tables,
    )


@router.get("/floor-plan", response_model=FloorPlanRead)
async def get_floor_plan(
    store: TableStore = Depends(get_table_store),
) -> FloorPlanRead:
    """
    Get every table with its computed seat positions.

    While the initial load is running ``loading`` is true and the table
    list is empty.
    """
    return build_floor_plan(store, get_settings().floor_plan_scale)


@router.get("/floor-plan.png")
async def get_floor_plan_image(
    store: TableStore = Depends(get_table_store),
) -> Response:
    """Render the floor plan as a PNG image."""
    settings = get_settings()
    image = render_floor_plan_png(
        store.tables,
        columns=settings.floor_plan_columns,
        scale=settings.floor_plan_scale,
        gap=settings.floor_plan_gap,
    )
    return Response(
        content=image,
        media_type="image/png",
        headers={"ETag": f'"{store.version}"'},
    )


@router.post("/floor-plan/refresh", response_model=FloorPlanRead)
async def refresh_floor_plan(
    store: TableStore = Depends(get_table_store),
) -> FloorPlanRead:
    """Refetch the tables from the seating service."""
    await store.refresh()
    return build_floor_plan(store, get_settings().floor_plan_scale)
