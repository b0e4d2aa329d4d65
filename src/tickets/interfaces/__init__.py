"""
Tickets Interfaces Layer
========================

Contains:
- Controllers: FastAPI route handlers under /movil/tickets
"""

from src.tickets.interfaces.controllers import tickets_router

__all__ = ["tickets_router"]
