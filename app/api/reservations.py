"""
REST API endpoints for the seat selection panel.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_reservation_controller
from app.schemas.reservation import (
    ReservationSubmit,
    SeatSelect,
    SelectionRead,
    SubmissionRead,
)
from app.services.reservation_controller import (
    ReservationController,
    SubmissionInProgressError,
)
from app.services.table_store import SeatNotFoundError

router = APIRouter(prefix="/api/v1", tags=["reservations"])


@router.get("/selection", response_model=SelectionRead)
async def get_selection(
    controller: ReservationController = Depends(get_reservation_controller),
) -> SelectionRead:
    """Get the selection panel state."""
    return controller.view()


@router.post("/selection", response_model=SelectionRead)
async def select_seat(
    data: SeatSelect,
    controller: ReservationController = Depends(get_reservation_controller),
) -> SelectionRead:
    """
    Select a seat on the floor plan.

    Reserved seats can be selected; the panel then reports them as
    unavailable and disables submission.
    """
    try:
        controller.select_seat(data.table_id, data.seat_index)
    except SeatNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except SubmissionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return controller.view()


@router.delete("/selection", response_model=SelectionRead)
async def close_selection(
    controller: ReservationController = Depends(get_reservation_controller),
) -> SelectionRead:
    """Close the selection panel."""
    controller.close()
    return controller.view()


@router.post("/selection/reserve", response_model=SubmissionRead)
async def reserve_selected_seat(
    data: ReservationSubmit,
    controller: ReservationController = Depends(get_reservation_controller),
) -> SubmissionRead:
    """
    Reserve the selected seat under ``name``.

    ``status`` is ``rejected`` when nothing was sent (no selection, empty
    name, reserved seat or a submission already pending), ``failed`` when
    the seating service declined, ``reserved`` on success.
    """
    return await controller.submit(data.name)
