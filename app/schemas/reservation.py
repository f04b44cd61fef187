from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SelectionState(str, Enum):
    IDLE = "idle"
    SEAT_SELECTED = "seat_selected"
    SUBMITTING = "submitting"


class SubmissionStatus(str, Enum):
    RESERVED = "reserved"
    FAILED = "failed"
    REJECTED = "rejected"


class SeatSelect(BaseModel):
    """Schema for clicking a seat on the floor plan."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    table_id: str
    seat_index: int = Field(..., ge=0)


class ReservationSubmit(BaseModel):
    """Schema for submitting the reservation form."""

    name: str = ""


class SelectionRead(BaseModel):
    """Schema for reading the selection panel."""

    state: SelectionState
    table_id: Optional[str] = None
    seat_index: Optional[int] = None
    label: Optional[str] = None
    reserved: Optional[bool] = None
    status_text: Optional[str] = None
    can_submit: bool = False
    submit_label: Optional[str] = None
    error: Optional[str] = None
    message: str = ""


class SubmissionRead(BaseModel):
    """Outcome of a reservation submission."""

    status: SubmissionStatus
    message: str
    selection: SelectionRead
