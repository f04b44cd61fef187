"""
Pytest configuration and fixtures.

The remote seating service is replaced by ``FakeSeatingService``, an
in-memory stand-in served through ``httpx.MockTransport``. It mirrors the
real contract:

- GET /tables returns {"items": [...]}
- POST /seed installs the demo layout
- POST /reserve flips a seat to reserved or answers 4xx with {"detail": ...}

Table fetches can be held back with ``table_gates`` to make responses land
out of order.

Every request is recorded so tests can assert which calls were (not) made.
"""
from __future__ import annotations

import asyncio
import copy
import json
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from app.services.reservation_controller import ReservationController
from app.services.seating_client import SeatingClient
from app.services.table_store import TableStore

BASE_URL = "http://seating.test"


def make_table(
    table_id: str,
    name: str,
    shape: str = "round",
    width: float = 200,
    height: float = 200,
    rotation: float = 0,
    seats: int = 4,
    reserved: Tuple[int, ...] = (),
    color: Optional[str] = "#a78bfa",
) -> Dict[str, Any]:
    """Build a table payload the way the seating service serves it."""
    return {
        "id": table_id,
        "name": name,
        "shape": shape,
        "width": width,
        "height": height,
        "rotation": rotation,
        "color": color,
        "seats": [
            {"label": f"{name}-{i + 1}", "reserved": i in reserved}
            for i in range(seats)
        ],
    }


DEMO_TABLES = [
    make_table("T1", "Garden", shape="round", seats=4),
    make_table("T2", "Long Hall", shape="rectangular", width=240, height=120, seats=6, reserved=(0,)),
    make_table("T3", "Terrace", shape="round", width=160, height=160, rotation=45, seats=8),
]


class FakeSeatingService:
    """In-memory seating service."""

    def __init__(
        self,
        tables: Optional[List[Dict[str, Any]]] = None,
        demo_tables: Optional[List[Dict[str, Any]]] = None,
    ):
        self.tables = copy.deepcopy(tables) if tables is not None else []
        self.demo_tables = copy.deepcopy(demo_tables if demo_tables is not None else DEMO_TABLES)
        self.calls: List[Tuple[str, str]] = []
        self.reserve_bodies: List[Dict[str, Any]] = []
        self.fail_table_fetches = 0
        self.fail_seed = False
        self.reserve_error: Optional[Tuple[int, Any]] = None
        self.reserve_gate: Optional[asyncio.Event] = None
        # held back in order by upcoming GET /tables requests
        self.table_gates: List[asyncio.Event] = []

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method, path))

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))

        if request.method == "GET" and path == "/tables":
            failed = self.fail_table_fetches > 0
            if failed:
                self.fail_table_fetches -= 1
            # answer with the tables as they were when the request arrived
            items = copy.deepcopy(self.tables)
            if self.table_gates:
                await self.table_gates.pop(0).wait()
            if failed:
                return httpx.Response(500, json={"detail": "database unavailable"})
            return httpx.Response(200, json={"items": items})

        if request.method == "POST" and path == "/seed":
            if self.fail_seed:
                return httpx.Response(500)
            self.tables = copy.deepcopy(self.demo_tables)
            return httpx.Response(200, json={"seeded": len(self.tables)})

        if request.method == "POST" and path == "/reserve":
            return await self._reserve(request)

        return httpx.Response(404, json={"detail": "Not Found"})

    async def _reserve(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.reserve_bodies.append(body)
        if self.reserve_gate is not None:
            await self.reserve_gate.wait()
        if self.reserve_error is not None:
            status, payload = self.reserve_error
            if isinstance(payload, (dict, list)):
                return httpx.Response(status, json=payload)
            return httpx.Response(status, text=payload or "")

        table = next((t for t in self.tables if t["id"] == body["table_id"]), None)
        if table is None:
            return httpx.Response(404, json={"detail": "Table not found"})
        index = body["seat_index"]
        if not 0 <= index < len(table["seats"]):
            return httpx.Response(400, json={"detail": "Invalid seat index"})
        seat = table["seats"][index]
        if seat["reserved"]:
            return httpx.Response(409, json={"detail": "Seat already reserved"})
        seat["reserved"] = True
        return httpx.Response(200, json={"ok": True})


@pytest.fixture
def fake_service() -> FakeSeatingService:
    """A seating service that already holds the demo layout."""
    return FakeSeatingService(tables=DEMO_TABLES)


@pytest.fixture
def empty_service() -> FakeSeatingService:
    """A seating service with no tables until it is seeded."""
    return FakeSeatingService(tables=[])


def make_client(service: FakeSeatingService) -> SeatingClient:
    return SeatingClient(BASE_URL, transport=httpx.MockTransport(service.handler))


@pytest_asyncio.fixture
async def seating_client(fake_service: FakeSeatingService) -> AsyncGenerator[SeatingClient, None]:
    client = make_client(fake_service)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def table_store(seating_client: SeatingClient) -> AsyncGenerator[TableStore, None]:
    """A TableStore whose initial load already completed."""
    store = TableStore(seating_client)
    await store.load()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def reservation_controller(
    seating_client: SeatingClient, table_store: TableStore
) -> ReservationController:
    return ReservationController(seating_client, table_store)


@pytest_asyncio.fixture
async def client_factory():
    """Build SeatingClients for arbitrary fake services; closed after the test."""
    clients: List[SeatingClient] = []

    def factory(service: FakeSeatingService) -> SeatingClient:
        client = make_client(service)
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.aclose()
