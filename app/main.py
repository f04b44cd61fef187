from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import floor_plan_router, reservations_router
from app.config import get_settings
from app.services.reservation_controller import ReservationController
from app.services.seating_client import SeatingClient
from app.services.table_store import TableStore

settings = get_settings()


def configure_logging() -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


configure_logging()
LOGGER = logging.getLogger("floor-plan")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    client = SeatingClient(settings.seating_api_url, timeout=settings.request_timeout)
    store = TableStore(client)
    app.state.seating_client = client
    app.state.table_store = store
    app.state.reservation_controller = ReservationController(client, store)

    # Initial load runs in the background; the floor plan reports loading=True until it resolves
    store.start()
    LOGGER.info("Loading tables from %s", settings.seating_api_url)

    yield

    # Shutdown
    await store.close()
    await client.aclose()


app = FastAPI(
    title="Floor Plan Seating",
    description="Interactive seating floor plan backed by a remote reservation service",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS (needed for browser preflight requests)
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/healthz")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "service": "floor-plan-seating"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Floor Plan Seating",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/healthz",
        "floor_plan": "/api/v1/floor-plan",
    }


app.include_router(floor_plan_router)
app.include_router(reservations_router)


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
