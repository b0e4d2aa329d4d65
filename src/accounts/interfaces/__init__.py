"""
Accounts Interfaces Layer
=========================

Contains:
- Controllers: /movil/login and /movil/usuario/{id}
"""

from src.accounts.interfaces.controllers import accounts_router

__all__ = ["accounts_router"]
