"""Reservation interaction state machine.

States:
    IDLE -> SEAT_SELECTED -> SUBMITTING -> IDLE           (reserved)
                                        -> SEAT_SELECTED  (failed, error kept)

The controller never touches a seat's ``reserved`` flag. After a successful
reservation it asks the TableStore to refetch, and the new flag shows up
once that refetch lands.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.schemas.reservation import (
    SelectionRead,
    SelectionState,
    SubmissionRead,
    SubmissionStatus,
)
from app.schemas.table import ReservationRequest
from app.services.seating_client import (
    GENERIC_RESERVATION_ERROR,
    ReservationRejectedError,
    SeatingClient,
)
from app.services.table_store import TableStore

logger = logging.getLogger(__name__)

RESERVED_MESSAGE = "Seat reserved!"
STATUS_RESERVED = "Currently reserved"
STATUS_AVAILABLE = "Available"
SUBMIT_LABEL = "Reserve seat"
SUBMIT_LABEL_DISABLED = "Seat Unavailable"


class SubmissionInProgressError(RuntimeError):
    """Raised when the selection changes while a submission is pending."""
    pass


@dataclass(frozen=True)
class Selection:
    """The seat shown in the selection panel, as it was when clicked."""

    table_id: str
    seat_index: int
    label: str
    reserved: bool


class ReservationController:
    """Coordinates seat selection and reservation submission."""

    def __init__(self, client: SeatingClient, store: TableStore):
        self._client = client
        self._store = store
        self.state = SelectionState.IDLE
        self.selection: Optional[Selection] = None
        self.error: Optional[str] = None
        self.message = ""

    @property
    def can_submit(self) -> bool:
        return (
            self.state == SelectionState.SEAT_SELECTED
            and self.selection is not None
            and not self.selection.reserved
        )

    def select_seat(self, table_id: str, seat_index: int) -> Selection:
        """
        Open the selection panel for a seat.

        Reserved seats can be selected for viewing; they just cannot be
        submitted.

        Raises:
            SeatNotFoundError: If the table or seat does not exist
            SubmissionInProgressError: If a submission is pending
        """
        if self.state == SelectionState.SUBMITTING:
            raise SubmissionInProgressError("A reservation is being submitted")

        _, seat = self._store.find_seat(table_id, seat_index)
        self.selection = Selection(
            table_id=str(table_id),
            seat_index=seat_index,
            label=seat.label,
            reserved=seat.reserved,
        )
        self.state = SelectionState.SEAT_SELECTED
        self.error = None
        self.message = ""
        return self.selection

    def close(self) -> None:
        """Dismiss the selection panel. Ignored while submitting."""
        if self.state == SelectionState.SUBMITTING:
            return
        self.state = SelectionState.IDLE
        self.selection = None
        self.error = None

    async def submit(self, name: str) -> SubmissionRead:
        """
        Submit a reservation for the selected seat.

        Submissions for a reserved seat, with an empty name, without a
        selection or while another submission is pending are rejected
        without calling the service.
        """
        name = (name or "").strip()
        if not self.can_submit or not name:
            return self._outcome(SubmissionStatus.REJECTED, "")

        selection = self.selection
        request = ReservationRequest(
            table_id=selection.table_id,
            seat_index=selection.seat_index,
            name=name,
        )
        self.state = SelectionState.SUBMITTING
        self.error = None

        try:
            await self._client.reserve(request)
        except ReservationRejectedError as e:
            self.state = SelectionState.SEAT_SELECTED
            self.error = e.message or GENERIC_RESERVATION_ERROR
            return self._outcome(SubmissionStatus.FAILED, self.error)
        except BaseException:
            # cancelled mid-flight: reopen the panel, then propagate
            self.state = SelectionState.SEAT_SELECTED
            raise

        logger.info(
            f"Reservation confirmed for seat {selection.seat_index} "
            f"at table {selection.table_id}"
        )
        self.state = SelectionState.IDLE
        self.selection = None
        self.message = RESERVED_MESSAGE
        self._store.request_refresh()
        return self._outcome(SubmissionStatus.RESERVED, RESERVED_MESSAGE)

    def view(self) -> SelectionRead:
        """Snapshot of the selection panel."""
        selection = self.selection
        if selection is None:
            return SelectionRead(state=self.state, message=self.message)
        return SelectionRead(
            state=self.state,
            table_id=selection.table_id,
            seat_index=selection.seat_index,
            label=selection.label,
            reserved=selection.reserved,
            status_text=STATUS_RESERVED if selection.reserved else STATUS_AVAILABLE,
            can_submit=self.can_submit,
            submit_label=SUBMIT_LABEL_DISABLED if selection.reserved else SUBMIT_LABEL,
            error=self.error,
            message=self.message,
        )

    def _outcome(self, status: SubmissionStatus, message: str) -> SubmissionRead:
        return SubmissionRead(status=status, message=message, selection=self.view())
