"""Render the seating service's floor plan to a PNG file.

Usage:
    python scripts/render_floor_plan.py --output floor_plan.png
    python scripts/render_floor_plan.py --url http://localhost:8000 --columns 2
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from app.config import get_settings
from app.services.floor_plan_renderer import render_floor_plan_png
from app.services.seating_client import SeatingClient
from app.services.table_store import TableStore


async def render(url: str, output: Path, columns: int, scale: float, gap: int) -> int:
    settings = get_settings()
    async with SeatingClient(url, timeout=settings.request_timeout) as client:
        store = TableStore(client)
        await store.load()
        if store.message:
            print(store.message)
        output.write_bytes(
            render_floor_plan_png(store.tables, columns=columns, scale=scale, gap=gap)
        )
    print(f"Wrote {len(store.tables)} tables to {output}")
    return 0 if store.tables else 1


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Render the seating floor plan")
    parser.add_argument("--url", default=settings.seating_api_url, help="Seating service base URL")
    parser.add_argument("--output", type=Path, default=Path("floor_plan.png"))
    parser.add_argument("--columns", type=int, default=settings.floor_plan_columns)
    parser.add_argument("--scale", type=float, default=settings.floor_plan_scale)
    parser.add_argument("--gap", type=int, default=settings.floor_plan_gap)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    return asyncio.run(render(args.url, args.output, args.columns, args.scale, args.gap))


if __name__ == "__main__":
    raise SystemExit(main())
