"""
Tickets Application Layer
=========================

Contains:
- Services: ticket workflow and priority classification
- DTOs: request/response models for the mobile API
"""

from src.tickets.application.dto import (
    CreateTicketRequest,
    UpdateStatusRequest,
    TicketSummary,
    TechnicianTicketSummary,
    CreateTicketResponse,
    MessageResponse,
)
from src.tickets.application.services import (
    ITicketRepository,
    PriorityClassificationService,
    TicketService,
)

__all__ = [
    # DTOs
    "CreateTicketRequest",
    "UpdateStatusRequest",
    "TicketSummary",
    "TechnicianTicketSummary",
    "CreateTicketResponse",
    "MessageResponse",
    # Services
    "ITicketRepository",
    "PriorityClassificationService",
    "TicketService",
]
