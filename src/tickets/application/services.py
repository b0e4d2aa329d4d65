"""
Tickets Application Services
=============================

Orchestrates ticket creation, listing and status transitions, and the
priority classification call.

Following SOLID principles:
- Single Responsibility: classification and ticket workflow are separate services
- Dependency Inversion: services depend on repository/LLM abstractions
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional

from src.tickets.domain import (
    Ticket, PriorityPromptBuilder, is_valid_status, normalize_priority
)
from src.infrastructure.llm import ILLMClient
from src.config import settings, DEFAULT_PRIORITY, VALID_PRIORITIES
from src.core import ValidationException, ResourceNotFoundException
from src.core.validation import require_fields
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class ITicketRepository(ABC):
    """Interface for ticket data access."""

    @abstractmethod
    async def list_by_user(self, user_id: int) -> List[dict]:
        """Tickets filed by a user, newest first."""

    @abstractmethod
    async def list_by_technician(self, technician_id: int) -> List[dict]:
        """Tickets assigned to a technician, newest first."""

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        """Persist a new ticket."""

    @abstractmethod
    async def update_status(self, ticket_id: int, status: str) -> int:
        """Change status; returns rows matched."""

    @abstractmethod
    async def get_status_for_owner(self, ticket_id: int, user_id: int) -> Optional[str]:
        """Status of the ticket when owned by the user."""


# ========== Application Services ==========

class PriorityClassificationService:
    """
    Suggests a ticket priority with an external completion model.

    classify() never raises: missing configuration, transport errors,
    timeouts and unrecognized replies all resolve to Baja.
    """

    def __init__(
        self,
        llm_client: Optional[ILLMClient],
        prompt_builder: type[PriorityPromptBuilder] = PriorityPromptBuilder,
        max_tokens: Optional[int] = None,
        reasoning: Optional[bool] = None
    ):
        self._llm = llm_client
        self._prompts = prompt_builder
        self._max_tokens = max_tokens or settings.classifier_max_tokens
        self._reasoning = settings.classifier_reasoning if reasoning is None else reasoning

    @property
    def is_configured(self) -> bool:
        return self._llm is not None

    async def classify(self, description: str) -> str:
        """
        Classify a problem description as Alta, Media or Baja.
        """
        if self._llm is None:
            logger.warning("Priority classifier not configured, using default priority")
            return DEFAULT_PRIORITY

        start_time = time.perf_counter()
        extra_body = {"reasoning": {"enabled": True}} if self._reasoning else None

        try:
            response = await self._llm.chat_completion(
                messages=self._prompts.build_messages(description),
                temperature=0,
                max_tokens=self._max_tokens,
                operation="classification",
                extra_body=extra_body
            )
        except Exception as e:
            logger.error(
                "Priority classification failed",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
            return DEFAULT_PRIORITY

        priority = normalize_priority(response.content)

        logger.info(
            "Ticket priority classified",
            extra={
                "priority": priority,
                "raw_reply": response.content[:50],
                "latency_ms": int((time.perf_counter() - start_time) * 1000)
            }
        )
        return priority

    async def close(self) -> None:
        if self._llm is not None:
            await self._llm.close()


class TicketService:
    """
    Ticket workflow: creation with classified priority, listings and
    status transitions.
    """

    def __init__(
        self,
        ticket_repository: ITicketRepository,
        classifier: Optional[PriorityClassificationService] = None
    ):
        self._tickets = ticket_repository
        self._classifier = classifier

    async def list_for_user(self, user_id: int) -> List[dict]:
        return await self._tickets.list_by_user(user_id)

    async def list_for_technician(self, technician_id: int) -> List[dict]:
        return await self._tickets.list_by_technician(technician_id)

    async def create_ticket(
        self,
        user_id: Optional[int],
        area_id: Optional[int],
        title: Optional[str],
        description: Optional[str]
    ) -> Ticket:
        """
        Validate, classify and persist a new ticket.

        Raises:
            ValidationException: If a required field is missing
        """
        require_fields(user_id, area_id, title, description)

        priority = DEFAULT_PRIORITY
        if self._classifier is not None:
            priority = await self._classifier.classify(description)
        if priority not in VALID_PRIORITIES:
            priority = DEFAULT_PRIORITY

        ticket = Ticket(
            id=None,
            user_id=user_id,
            area_id=area_id,
            title=title,
            description=description,
            priority=priority
        )
        return await self._tickets.create(ticket)

    async def change_status(self, ticket_id: int, new_status: Optional[str]) -> str:
        """
        Move a ticket to another lifecycle status.

        Raises:
            ValidationException: If the status is not one of the three allowed
            ResourceNotFoundException: If no ticket has that id
        """
        if not is_valid_status(new_status):
            raise ValidationException("Estado inválido")

        matched = await self._tickets.update_status(ticket_id, new_status)
        if matched == 0:
            raise ResourceNotFoundException("Ticket no encontrado")
        return new_status
