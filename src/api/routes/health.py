from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends
from src.api.deps import get_database
from src.core.config import get_settings
from src.infrastructure.database import Database

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_storage(database: Database) -> dict:
    """Check that the record store backend answers."""
    try:
        partitions = await database.backend.keys()
        return {"status": "ok", "partitions": len(partitions)}
    except Exception as e:
        return {"status": "error", "message": str(e)[:100]}


@router.get("/health", summary="Service health probe")
async def health_check(database: Database = Depends(get_database)) -> dict:
    """Return basic service and record store status information."""
    settings = get_settings()
    storage_status = await check_storage(database)

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": "ok" if storage_status.get("status") == "ok" else "degraded",
        "timestamp": datetime.now(UTC).isoformat(),
        "storage": {"backend": settings.storage_backend, **storage_status},
    }
    logger.info("health_probe", **payload)
    return payload
