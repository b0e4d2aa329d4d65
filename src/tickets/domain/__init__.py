"""
Tickets Domain Layer
====================

Entities and pure business rules for support tickets.
"""

from src.tickets.domain.entities import (
    Ticket,
    PriorityPromptBuilder,
    is_valid_status,
    normalize_priority,
)

__all__ = [
    "Ticket",
    "PriorityPromptBuilder",
    "is_valid_status",
    "normalize_priority",
]
