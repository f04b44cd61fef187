"""Service holding the floor plan's table list.

Loads the tables from the remote seating service, falls back to seeding the
demo layout once when nothing can be loaded, and refreshes the list on
request. The list is only ever replaced wholesale with what the service
returned.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Set, Tuple

from app.schemas.table import Seat, Table
from app.services.seating_client import SeatingClient, SeedError, TableLoadError

logger = logging.getLogger(__name__)

SEEDING_MESSAGE = "No tables found. Seeding demo layout..."
LOAD_FAILED_MESSAGE = "Failed to load demo layout"
REFRESH_FAILED_MESSAGE = "Failed to load tables"

Listener = Callable[["TableStore"], None]


class SeatNotFoundError(LookupError):
    """Raised when a table id or seat index does not exist."""
    pass


class TableStore:
    """Owner of the current table list."""

    def __init__(self, client: SeatingClient):
        self._client = client
        self.tables: List[Table] = []
        self.loading = True
        self.message = ""
        self.version = 0
        self._seeded = False
        self._issued_seq = 0
        self._applied_seq = 0
        self._closed = False
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[Listener] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every replacement of the table list.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def find_seat(self, table_id: str, seat_index: int) -> Tuple[Table, Seat]:
        """Look up a seat by table id and position."""
        for table in self.tables:
            if table.id == str(table_id):
                if 0 <= seat_index < len(table.seats):
                    return table, table.seats[seat_index]
                raise SeatNotFoundError(
                    f"Table {table_id} has no seat {seat_index}"
                )
        raise SeatNotFoundError(f"Table {table_id} not found")

    def start(self) -> Optional[asyncio.Task]:
        """Schedule the initial load without waiting for it."""
        return self._spawn(self.load)

    def request_refresh(self) -> Optional[asyncio.Task]:
        """Schedule a refresh without waiting for it."""
        return self._spawn(self.refresh)

    async def load(self) -> None:
        """
        Initial load with the one-time seed fallback.

        A failed or empty fetch triggers a single seed call followed by
        exactly one more fetch. If that still yields nothing the floor plan
        stays empty and a terminal message is set; there are no further
        automatic retries. A refresh that lands first wins over this load.
        """
        try:
            seq, tables = await self._fetch()
            if not tables and not self._seeded and not self._superseded(seq):
                self._seeded = True
                self.message = SEEDING_MESSAGE
                await self._seed()
                seq, tables = await self._fetch()

            if self._superseded(seq):
                return

            if not tables:
                self.message = LOAD_FAILED_MESSAGE
                logger.error("Floor plan unavailable after seeding")
                return

            self.message = ""
            self._replace(seq, tables)
        finally:
            self.loading = False

    async def refresh(self) -> bool:
        """Refetch the table list. Never seeds.

        Results of a fetch issued before the list currently shown are
        dropped.

        Returns:
            True when the list was replaced
        """
        seq, tables = await self._fetch()
        if self._closed or self._superseded(seq):
            return False
        if tables is None:
            self.message = REFRESH_FAILED_MESSAGE
            return False
        self.message = ""
        return self._replace(seq, tables)

    async def drain(self) -> None:
        """Wait for every scheduled load/refresh to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel pending work; later results are dropped."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()

    async def _fetch(self) -> Tuple[int, Optional[List[Table]]]:
        # numbered when issued, so responses can be ordered on arrival
        self._issued_seq += 1
        seq = self._issued_seq
        try:
            return seq, await self._client.list_tables()
        except TableLoadError as e:
            logger.warning(f"Table fetch failed: {e}")
            return seq, None

    async def _seed(self) -> None:
        try:
            await self._client.seed()
        except SeedError as e:
            # the follow-up fetch decides whether the floor plan is usable
            logger.warning(f"Seeding failed: {e}")

    def _superseded(self, seq: int) -> bool:
        return seq <= self._applied_seq

    def _replace(self, seq: int, tables: List[Table]) -> bool:
        if self._closed or self._superseded(seq):
            logger.debug(f"Dropping stale table list from fetch #{seq}")
            return False
        self._applied_seq = seq
        self.tables = list(tables)
        self.version += 1
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Table store listener failed")
        return True

    def _spawn(self, factory: Callable[[], Awaitable[object]]) -> Optional[asyncio.Task]:
        if self._closed:
            return None
        task = asyncio.ensure_future(factory())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
