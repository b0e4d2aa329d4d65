"""
Evaluations Domain Entities
===========================
"""

from dataclasses import dataclass
from typing import Optional

from src.config import EvaluatorRole, TicketStatus
from src.core import InvalidStateException, ResourceNotFoundException


@dataclass
class Evaluation:
    """Rating and optional comment for a closed ticket."""
    ticket_id: int
    user_id: int
    rating: int
    comment: Optional[str] = None
    evaluator_role: str = EvaluatorRole.USER
    id: Optional[int] = None


def ensure_evaluable(ticket_status: Optional[str]) -> None:
    """
    A ticket can be evaluated by its owner only after it is closed.

    ``ticket_status`` is None when the ticket does not exist or belongs to
    someone else.
    """
    if ticket_status is None:
        raise ResourceNotFoundException("Ticket no encontrado o no pertenece al usuario")
    if ticket_status != TicketStatus.CLOSED:
        raise InvalidStateException("Solo se pueden evaluar tickets cerrados")
