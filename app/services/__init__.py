# Business logic services
from app.services.seating_client import SeatingClient
from app.services.table_store import TableStore
from app.services.reservation_controller import ReservationController
from app.services.floor_plan_renderer import FloorPlanRenderer, render_floor_plan_png
from app.services import layout_engine

__all__ = [
    "SeatingClient",
    "TableStore",
    "ReservationController",
    "FloorPlanRenderer",
    "render_floor_plan_png",
    "layout_engine",
]
