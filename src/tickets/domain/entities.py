"""
Tickets Domain Entities
=======================

Pure Python business objects for support tickets and the priority
classification rules.
"""

import string
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.config import (
    Priority, TicketStatus, VALID_STATUSES, DEFAULT_PRIORITY
)


@dataclass
class Ticket:
    """
    Support ticket filed by a user.

    The closure timestamp is set only while the status is Cerrado.
    """
    id: Optional[int]
    user_id: int
    area_id: int
    title: str
    description: str
    priority: str
    status: str = TicketStatus.IN_PROGRESS
    technician_id: Optional[int] = None
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


def is_valid_status(status: Optional[str]) -> bool:
    """Only the three lifecycle statuses are accepted as transition targets."""
    return status in VALID_STATUSES


_STRIP_TABLE = str.maketrans("", "", string.punctuation + string.whitespace + "¡¿")


def normalize_priority(raw: Optional[str]) -> str:
    """
    Reduce a free-text model reply to a priority label.

    The reply is lower-cased and stripped of punctuation and whitespace,
    then checked for "alta", "media" and "baja" in that order. Anything
    else, including the non-technical sentinel, is Baja.
    """
    if not raw:
        return DEFAULT_PRIORITY

    cleaned = raw.lower().translate(_STRIP_TABLE)

    if "alta" in cleaned:
        return Priority.HIGH
    if "media" in cleaned:
        return Priority.MEDIUM
    if "baja" in cleaned:
        return Priority.LOW
    return DEFAULT_PRIORITY


class PriorityPromptBuilder:
    """
    Builds the chat messages sent to the completion service.

    The system prompt and the non-technical sentinel are class attributes
    so a deployment can subclass or override them without another code path.
    """

    REJECTION_SENTINEL = "Entrada inválida"

    SYSTEM_PROMPT = """Eres un asistente que clasifica incidencias técnicas.
Responde con una sola palabra: Alta, Media o Baja.
Si el texto no describe un problema técnico, responde "{sentinel}"."""

    @classmethod
    def get_system_prompt(cls) -> str:
        return cls.SYSTEM_PROMPT.format(sentinel=cls.REJECTION_SENTINEL)

    @classmethod
    def build_prompt(cls, description: str) -> str:
        return f"Problema: {description}"

    @classmethod
    def build_messages(cls, description: str) -> list[dict]:
        return [
            {"role": "system", "content": cls.get_system_prompt()},
            {"role": "user", "content": cls.build_prompt(description)},
        ]
