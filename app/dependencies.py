"""FastAPI dependencies for the objects created at startup."""
from __future__ import annotations

from fastapi import Request

from app.services.reservation_controller import ReservationController
from app.services.table_store import TableStore


def get_table_store(request: Request) -> TableStore:
    return request.app.state.table_store


def get_reservation_controller(request: Request) -> ReservationController:
    return request.app.state.reservation_controller
