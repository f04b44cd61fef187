# API routes
from app.api.floor_plan import router as floor_plan_router
from app.api.reservations import router as reservations_router


__all__ = [
    "floor_plan_router",
    "reservations_router",
]
