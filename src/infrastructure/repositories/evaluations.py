from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.core.errors import handle_errors
from src.domain.models import Evaluation

from .base import PartitionRepository


class EvaluationRepository(PartitionRepository[Evaluation]):
    """Coordinator and supervisor evaluations; ``scores.overall`` is always derived."""

    model = Evaluation
    partition = "evaluations"
    label = "Evaluation"
    order_field = "date_evaluated"

    @handle_errors("evaluations.create")
    async def create(self, data: Mapping[str, Any]) -> Evaluation:
        await self._pause()
        evaluation = self._build(
            data,
            {"id": self.id_factory(), "date_evaluated": self.clock()},
        )
        return await self._insert(evaluation)

    @handle_errors("evaluations.get")
    async def get(self, evaluation_id: str) -> Evaluation:
        await self._pause()
        return await self._find(evaluation_id)

    @handle_errors("evaluations.list_for_student")
    async def list_for_student(self, student_id: str) -> list[Evaluation]:
        await self._pause()
        return await self._select(lambda evaluation: evaluation.student_id == student_id)

    @handle_errors("evaluations.list_by_evaluator")
    async def list_by_evaluator(self, evaluator_id: str) -> list[Evaluation]:
        await self._pause()
        return await self._select(lambda evaluation: evaluation.evaluator_id == evaluator_id)

    @handle_errors("evaluations.update")
    async def update(self, evaluation_id: str, updates: Mapping[str, Any]) -> Evaluation:
        await self._pause()
        return await self._apply(evaluation_id, self._client_changes(updates))

    @handle_errors("evaluations.delete")
    async def delete(self, evaluation_id: str) -> bool:
        await self._pause()
        return await self._remove(evaluation_id)
