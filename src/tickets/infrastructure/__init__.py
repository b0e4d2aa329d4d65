"""
Tickets Infrastructure Layer
============================

Contains:
- Models: SQLAlchemy ORM models for tbl_tickets / tbl_areas
- Repositories: data access implementations
"""

from src.tickets.infrastructure.models import TicketModel, AreaModel
from src.tickets.infrastructure.repositories import SQLAlchemyTicketRepository

__all__ = [
    "TicketModel",
    "AreaModel",
    "SQLAlchemyTicketRepository",
]
