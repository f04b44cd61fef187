"""
Seating Service Client

Async HTTP client for the remote table/reservation service:

- GET  /tables   -> {"items": [Table, ...]}
- POST /seed     -> creates demo tables, body ignored
- POST /reserve  -> {"table_id", "seat_index", "name"}, non-2xx may carry {"detail"}
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from app.schemas.table import ReservationRequest, Table, TableList

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # seconds
GENERIC_RESERVATION_ERROR = "Reservation failed"


class SeatingServiceError(Exception):
    """Base exception for seating service errors."""
    pass


class TableLoadError(SeatingServiceError):
    """Raised when the table list cannot be fetched or parsed."""
    pass


class SeedError(SeatingServiceError):
    """Raised when the seed request fails."""
    pass


class ReservationRejectedError(SeatingServiceError):
    """Raised when the service declines a reservation."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_detail(response: httpx.Response) -> str:
    """Human-readable message from an error response, or the generic one."""
    try:
        body: Any = response.json()
    except ValueError:
        return GENERIC_RESERVATION_ERROR
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
    return GENERIC_RESERVATION_ERROR


class SeatingClient:
    """Client for the remote seating service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SeatingClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_tables(self) -> List[Table]:
        """
        Fetch every table with its seats.

        Returns:
            Tables in the order served

        Raises:
            TableLoadError: On transport errors, non-2xx responses or a
                payload that does not match the table schema
        """
        try:
            response = await self._client.get("/tables")
        except httpx.HTTPError as e:
            logger.warning(f"Table list request failed: {e}")
            raise TableLoadError(f"Failed to load tables: {e}") from e

        if response.is_error:
            logger.warning(f"Table list request returned {response.status_code}")
            raise TableLoadError(
                f"Failed to load tables: status {response.status_code}"
            )

        try:
            payload = TableList.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed table list payload: {e}")
            raise TableLoadError(f"Malformed table list: {e}") from e

        logger.info(f"Loaded {len(payload.items)} tables")
        return payload.items

    async def seed(self) -> None:
        """Ask the service to create its demo layout."""
        try:
            response = await self._client.post("/seed")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Seed request failed: {e}")
            raise SeedError(f"Failed to seed demo layout: {e}") from e
        logger.info("Seed request accepted")

    async def reserve(self, request: ReservationRequest) -> None:
        """
        Reserve one seat.

        Raises:
            ReservationRejectedError: When the service answers non-2xx
                (message taken from its ``detail`` field) or cannot be reached
        """
        try:
            response = await self._client.post("/reserve", json=request.model_dump())
        except httpx.HTTPError as e:
            logger.warning(f"Reservation request failed: {e}")
            raise ReservationRejectedError(GENERIC_RESERVATION_ERROR) from e

        if response.is_error:
            message = extract_detail(response)
            logger.warning(
                f"Reservation of seat {request.seat_index} at table {request.table_id} "
                f"rejected ({response.status_code}): {message}"
            )
            raise ReservationRejectedError(message, status_code=response.status_code)

        logger.info(f"Reserved seat {request.seat_index} at table {request.table_id}")
