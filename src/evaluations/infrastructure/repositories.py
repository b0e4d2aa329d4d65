"""
Evaluations Infrastructure Repositories
========================================
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from src.evaluations.application.services import IEvaluationRepository
from src.evaluations.domain import Evaluation
from src.evaluations.infrastructure.models import EvaluationModel
from src.infrastructure.database import store_errors


class SQLAlchemyEvaluationRepository(IEvaluationRepository):
    """
    Inserts and counts rows of tbl_evaluaciones.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, evaluation: Evaluation) -> Evaluation:
        model = EvaluationModel(
            ticket_id=evaluation.ticket_id,
            user_id=evaluation.user_id,
            evaluator_role=evaluation.evaluator_role,
            rating=evaluation.rating,
            comment=evaluation.comment
        )

        with store_errors("create evaluation"):
            self._session.add(model)
            await self._session.flush()
            await self._session.commit()

        evaluation.id = model.id
        return evaluation

    async def count_for(self, ticket_id: int, user_id: int, evaluator_role: str) -> int:
        stmt = select(func.count(EvaluationModel.id)).where(
            EvaluationModel.ticket_id == ticket_id,
            EvaluationModel.user_id == user_id,
            EvaluationModel.evaluator_role == evaluator_role,
        )

        with store_errors("count evaluations"):
            result = await self._session.execute(stmt)
            return result.scalar_one()
