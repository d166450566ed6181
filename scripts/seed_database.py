#!/usr/bin/env python3
"""
Seed the configured record store with the canonical OJT dataset.

Partitions that already hold records are left untouched, so running this
twice is safe.

Run with:
    python scripts/seed_database.py
    STORAGE_BACKEND=sql DATABASE_URL=sqlite:///./ojt_tracker.db python scripts/seed_database.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.core.logging import setup_logging  # noqa: E402
from src.infrastructure.database import Database  # noqa: E402


async def seed_database() -> int:
    """Run the bootstrap loader and print a per-partition summary."""
    setup_logging(json_output=False)
    settings = get_settings()
    database = Database.from_settings(settings)

    try:
        await database.initialize(seed=False)
        result = await database.bootstrap.initialize()
        if not result.ok:
            print(f"Seeding failed ({result.kind.value}): {result.error}")
            return 1

        seeded = result.data or []
        print(f"Backend: {settings.storage_backend}; seeded {len(seeded)} partition(s)")
        stats = (await database.statistics.get_system_stats()).unwrap()
        for field, value in stats.model_dump(by_alias=True).items():
            print(f"  {field}: {value}")
        return 0
    finally:
        await database.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(seed_database()))
