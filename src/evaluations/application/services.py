"""
Evaluations Application Services
=================================

Submission of a rating for a closed ticket and the advisory
"already evaluated?" check the app runs before showing the form.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.evaluations.domain import Evaluation, ensure_evaluable
from src.tickets.application.services import ITicketRepository
from src.config import EvaluatorRole
from src.core import RepositoryException
from src.core.validation import require_fields
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IEvaluationRepository(ABC):
    """Interface for evaluation data access."""

    @abstractmethod
    async def create(self, evaluation: Evaluation) -> Evaluation:
        """Insert an evaluation."""

    @abstractmethod
    async def count_for(self, ticket_id: int, user_id: int, evaluator_role: str) -> int:
        """Number of evaluations left by the user on the ticket."""


# ========== Application Services ==========

class EvaluationService:
    """
    Records evaluations after checking ownership and ticket state.
    """

    def __init__(
        self,
        evaluation_repository: IEvaluationRepository,
        ticket_repository: ITicketRepository
    ):
        self._evaluations = evaluation_repository
        self._tickets = ticket_repository

    async def submit(
        self,
        ticket_id: Optional[int],
        user_id: Optional[int],
        rating: Optional[int],
        comment: Optional[str] = None
    ) -> Evaluation:
        """
        Confirm the ticket is the user's and closed, then insert.

        Raises:
            ValidationException: ticket, user or rating missing
            ResourceNotFoundException: ticket missing or owned by someone else
            InvalidStateException: ticket not closed
        """
        require_fields(ticket_id, user_id, rating)

        status = await self._tickets.get_status_for_owner(ticket_id, user_id)
        ensure_evaluable(status)

        evaluation = Evaluation(
            ticket_id=ticket_id,
            user_id=user_id,
            rating=rating,
            comment=comment or None,
            evaluator_role=EvaluatorRole.USER
        )
        return await self._evaluations.create(evaluation)

    async def is_evaluated(self, ticket_id: int, user_id: int) -> bool:
        """
        Whether the user already evaluated the ticket.

        Store failures answer False so the app is never blocked by this check.
        """
        try:
            total = await self._evaluations.count_for(ticket_id, user_id, EvaluatorRole.USER)
        except RepositoryException as e:
            logger.error(
                "Error checking evaluation",
                extra={"ticket_id": ticket_id, "user_id": user_id, "error": str(e)}
            )
            return False
        return total > 0
