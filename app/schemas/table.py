from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_TABLE_SIZE = 2000  # pixels, before scaling


class TableShape(str, Enum):
    ROUND = "round"
    RECTANGULAR = "rectangular"


class Seat(BaseModel):
    """A labeled seat. Its position in ``Table.seats`` is its identity."""

    label: str
    reserved: bool = False


class Table(BaseModel):
    """Schema for a table as served by the remote seating service."""

    model_config = ConfigDict(coerce_numbers_to_str=True, frozen=True, allow_inf_nan=False)

    id: str
    name: str
    shape: TableShape
    width: float = Field(..., ge=0, le=MAX_TABLE_SIZE)
    height: float = Field(..., ge=0, le=MAX_TABLE_SIZE)
    rotation: float = 0.0
    color: Optional[str] = None
    seats: List[Seat] = Field(default_factory=list)


class TableList(BaseModel):
    """Envelope returned by ``GET /tables``."""

    items: List[Table] = Field(default_factory=list)


class ReservationRequest(BaseModel):
    """Body of ``POST /reserve``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    table_id: str
    seat_index: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)


@dataclass(frozen=True)
class SeatPosition:
    """Seat center relative to the top-left corner of its table's box."""

    x: float
    y: float


class SeatLayoutRead(BaseModel):
    """A seat together with its computed position."""

    index: int
    label: str
    reserved: bool
    x: float
    y: float


class TableLayoutRead(BaseModel):
    """A table ready to be drawn on the floor plan."""

    id: str
    name: str
    shape: TableShape
    width: float
    height: float
    rotation: float
    color: Optional[str]
    seat_size: float
    seats: List[SeatLayoutRead]


class FloorPlanRead(BaseModel):
    """Schema for reading the whole floor plan."""

    loading: bool
    message: str
    version: int
    tables: List[TableLayoutRead]
