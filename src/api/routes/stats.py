from __future__ import annotations

from fastapi import APIRouter, Depends
from src.api.deps import (
    STAFF_ROLES,
    ensure_self_or_roles,
    get_current_session,
    get_database,
    require_roles,
    unwrap_or_raise,
)
from src.core.auth import Role
from src.domain.models import SessionContext, StudentProgress, SystemStatistics
from src.infrastructure.database import Database

router = APIRouter(tags=["Statistics"])


@router.get("/stats", response_model=SystemStatistics)
async def system_stats(
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles([Role.COORDINATOR, Role.ADMIN])),
) -> SystemStatistics:
    """Dashboard counters computed from the current partitions."""
    return unwrap_or_raise(await database.statistics.get_system_stats())


@router.get("/students/{student_id}/progress", response_model=StudentProgress)
async def student_progress(
    student_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> StudentProgress:
    ensure_self_or_roles(session, student_id, *STAFF_ROLES)
    return unwrap_or_raise(await database.progress.get_student_progress(student_id))
