"""
Evaluations Interfaces Layer
============================
"""

from src.evaluations.interfaces.controllers import evaluations_router

__all__ = ["evaluations_router"]
