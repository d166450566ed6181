from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from src.api.deps import (
    STAFF_ROLES,
    ensure_self_or_roles,
    get_current_session,
    get_database,
    require_roles,
    unwrap_or_raise,
)
from src.api.schemas.records import EvaluationCreate, EvaluationUpdate
from src.core.auth import Role
from src.domain.models import Evaluation, SessionContext
from src.infrastructure.database import Database

router = APIRouter(prefix="/evaluations", tags=["Evaluations"])

EVALUATORS = (Role.SUPERVISOR, Role.COORDINATOR)


@router.post("", response_model=Evaluation, status_code=status.HTTP_201_CREATED)
async def create_evaluation(
    payload: EvaluationCreate,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(EVALUATORS)),
) -> Evaluation:
    """Score a student; the overall score is derived from the five rubric scores."""
    data = {
        **payload.model_dump(),
        "evaluator_id": session.user_id,
        "evaluator_role": session.role.value,
    }
    return unwrap_or_raise(await database.evaluations.create(data))


@router.get("/mine", response_model=list[Evaluation])
async def list_my_evaluations(
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles(EVALUATORS)),
) -> list[Evaluation]:
    """Evaluations written by the caller."""
    return unwrap_or_raise(await database.evaluations.list_by_evaluator(session.user_id))


@router.get("/students/{student_id}", response_model=list[Evaluation])
async def list_for_student(
    student_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> list[Evaluation]:
    ensure_self_or_roles(session, student_id, *STAFF_ROLES)
    return unwrap_or_raise(await database.evaluations.list_for_student(student_id))


@router.get("/{evaluation_id}", response_model=Evaluation)
async def get_evaluation(
    evaluation_id: str,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(get_current_session),
) -> Evaluation:
    evaluation = unwrap_or_raise(await database.evaluations.get(evaluation_id))
    ensure_self_or_roles(session, evaluation.student_id, *STAFF_ROLES)
    return evaluation


@router.patch("/{evaluation_id}", response_model=Evaluation)
async def update_evaluation(
    evaluation_id: str,
    payload: EvaluationUpdate,
    database: Database = Depends(get_database),
    session: SessionContext = Depends(require_roles([*EVALUATORS, Role.ADMIN])),
) -> Evaluation:
    evaluation = unwrap_or_raise(await database.evaluations.get(evaluation_id))
    ensure_self_or_roles(session, evaluation.evaluator_id, Role.ADMIN)
    return unwrap_or_raise(
        await database.evaluations.update(evaluation_id, payload.model_dump(exclude_unset=True))
    )


@router.delete("/{evaluation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_evaluation(
    evaluation_id: str,
    database: Database = Depends(get_database),
    _: SessionContext = Depends(require_roles([Role.ADMIN])),
) -> Response:
    unwrap_or_raise(await database.evaluations.delete(evaluation_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
