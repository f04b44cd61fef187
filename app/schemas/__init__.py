from app.schemas.table import (
    TableShape,
    Seat,
    Table,
    TableList,
    ReservationRequest,
    SeatPosition,
    SeatLayoutRead,
    TableLayoutRead,
    FloorPlanRead,
)
from app.schemas.reservation import (
    SelectionState,
    SubmissionStatus,
    SeatSelect,
    ReservationSubmit,
    SelectionRead,
    SubmissionRead,
)

__all__ = [
    "TableShape",
    "Seat",
    "Table",
    "TableList",
    "ReservationRequest",
    "SeatPosition",
    "SeatLayoutRead",
    "TableLayoutRead",
    "FloorPlanRead",
    "SelectionState",
    "SubmissionStatus",
    "SeatSelect",
    "ReservationSubmit",
    "SelectionRead",
    "SubmissionRead",
]
